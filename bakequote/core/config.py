"""Application configuration."""

from decimal import Decimal
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "bakequote API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./bakequote.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    default_tax_rate: Decimal = Decimal(getenv("DEFAULT_TAX_RATE", "0.08"))
    demo_baker_email: str = getenv("DEMO_BAKER_EMAIL", "demo@bakequote.app")
    demo_baker_password: str = getenv("DEMO_BAKER_PASSWORD", "demo123")


settings: Settings = Settings()
