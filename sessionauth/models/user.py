"""ORM model for registered accounts (SQL credential store)."""

from sqlalchemy import Column, Integer, String

from sessionauth.models.base import Base


class User(Base):
    """
    Registered account for session authentication and role-based access control.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
