"""Database seed behavior tests."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from bakequote.core.config import settings
from bakequote.db.base import Base
from bakequote.db.seed import ensure_demo_baker
from bakequote.models.baker import Baker


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def test_ensure_demo_baker_creates_baker_in_dev(tmp_path: Path, monkeypatch) -> None:
    """Demo seed should create the demo bakery once when environment is development."""
    engine = _build_test_engine(tmp_path / "seed_dev.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "demo_baker_email", "demo@local.dev")
    monkeypatch.setattr("bakequote.db.seed.get_password_hash", lambda _: "hashed-demo-password")

    with testing_session_local() as session:
        ensure_demo_baker(session)
        ensure_demo_baker(session)

    with testing_session_local() as session:
        bakers = session.query(Baker).filter(Baker.email == "demo@local.dev").all()
        assert len(bakers) == 1
        assert bakers[0].slug == "sweet-dreams-bakery"
        assert bakers[0].business_name == "Sweet Dreams Bakery"
        assert bakers[0].password_hash == "hashed-demo-password"


def test_ensure_demo_baker_skips_creation_in_non_dev(tmp_path: Path, monkeypatch) -> None:
    """Demo seed should not create bakers when environment is not development."""
    engine = _build_test_engine(tmp_path / "seed_prod.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(settings, "app_env", "prod")

    with testing_session_local() as session:
        assert ensure_demo_baker(session) is None

    with testing_session_local() as session:
        assert session.query(Baker).count() == 0
