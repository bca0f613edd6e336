"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from bakequote.models import baker as _baker  # noqa: E402,F401
from bakequote.models import customer as _customer  # noqa: E402,F401
from bakequote.models import featured_item as _featured_item  # noqa: E402,F401
from bakequote.models import lead as _lead  # noqa: E402,F401
from bakequote.models import quote as _quote  # noqa: E402,F401
