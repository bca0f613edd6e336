"""FastAPI entrypoint for the bakery quoting API."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from bakequote.api.v1.api import api_router
from bakequote.core.config import settings
from bakequote.db import session as db_session
from bakequote.db.base import Base
from bakequote.db.seed import ensure_demo_baker

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            demo = ensure_demo_baker(session)
            logger.info("[BOOTSTRAP] demo baker present: %s", "yes" if demo is not None else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Seed/bootstrap failed; continuing startup.")


@app.get("/")
def root() -> dict[str, str]:
    return {"name": settings.app_name, "status": "ok"}
