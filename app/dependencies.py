# app/dependencies.py
"""Request-scoped dependencies shared by the routers."""

from typing import Iterator

from sqlalchemy.orm import Session

from .database import SessionLocal


def get_db() -> Iterator[Session]:
    """One session per request.

    Services commit through their own unit of work; whatever is still open
    when the request ends is rolled back before the session is closed.
    Usage: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
