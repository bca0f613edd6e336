"""Password hashing, baker access tokens and the authenticated-baker dependency."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from bakequote.core.config import settings
from bakequote.db.session import get_db
from bakequote.models.baker import Baker

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=True)
logger = logging.getLogger(__name__)


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict[str, Any]) -> str:
    """Sign a baker access token; ``sub`` carries the baker id."""
    claims: dict[str, Any] = {
        **data,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def verify_token(token: str) -> dict[str, Any]:
    """Decode a baker access token, raising 401 when it is expired or forged."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as exc:
        logger.warning("[AUTH] Rejected access token: %s", exc)
        raise _unauthorized("Could not validate credentials") from exc
    return payload


def baker_id_from_claims(claims: dict[str, Any]) -> int:
    """Baker id carried in the ``sub`` claim."""
    subject = claims.get("sub")
    if subject is None:
        logger.warning("[AUTH] Access token without subject")
        raise _unauthorized("Invalid authentication token")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        logger.warning("[AUTH] Access token subject is not a baker id: %r", subject)
        raise _unauthorized("Invalid authentication token") from exc


def get_current_baker(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Baker:
    """Resolve the signed-in baker (the tenant) from the bearer token."""
    baker_id = baker_id_from_claims(verify_token(credentials.credentials))
    baker: Baker | None = db.get(Baker, baker_id)
    if baker is None:
        logger.warning("[AUTH] Access token for unknown baker_id=%s", baker_id)
        raise _unauthorized("Baker not found")
    return baker
