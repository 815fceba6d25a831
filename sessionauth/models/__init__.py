"""SQLAlchemy ORM models."""

from sessionauth.models.base import Base
from sessionauth.models.user import User

__all__ = ["Base", "User"]
