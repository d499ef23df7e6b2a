# models/user.py
"""SQLAlchemy model for registered users."""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from ..database import Base


def utc_now():
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class User(Base):
    """Identity referenced by workspaces, memberships, invites and transactions."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # Always lower-cased
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
