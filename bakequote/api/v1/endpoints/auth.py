"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bakequote.core.security import create_access_token, get_current_baker, get_password_hash, verify_password
from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.schemas.auth import BakerResponse, BakerUpdateRequest, LoginRequest, RegisterRequest, TokenResponse
from bakequote.services.baker_service import create_baker, get_baker_by_email, update_baker

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=BakerResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> BakerResponse:
    email = payload.email.strip().lower()
    if "@" not in email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email")
    if get_baker_by_email(db=db, email=email) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    baker = create_baker(
        db=db,
        email=email,
        hashed_password=get_password_hash(payload.password),
        business_name=payload.business_name,
        slug=payload.slug,
        phone=payload.phone,
    )
    logger.info("[AUTH] Baker registered baker_id=%s slug=%s", baker.id, baker.slug)
    return BakerResponse.model_validate(baker)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    baker: Baker | None = get_baker_by_email(db=db, email=payload.email.strip().lower())
    if baker is None or not verify_password(payload.password, baker.password_hash):
        logger.warning("[AUTH] Failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    return TokenResponse(access_token=create_access_token(data={"sub": str(baker.id)}))


@router.get("/me", response_model=BakerResponse)
def me(current_baker: Baker = Depends(get_current_baker)) -> BakerResponse:
    return BakerResponse.model_validate(current_baker)


@router.patch("/me", response_model=BakerResponse)
def update_me(
    payload: BakerUpdateRequest,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> BakerResponse:
    """Update the signed-in baker's profile and deposit percentage."""
    baker = update_baker(db, current_baker, payload.model_dump(exclude_unset=True))
    logger.info("[AUTH] Profile updated baker_id=%s", baker.id)
    return BakerResponse.model_validate(baker)
