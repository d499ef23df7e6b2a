# services/unit_of_work.py
"""All-or-nothing execution of a service operation against the session."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or nothing.

    Usage:
        with unit_of_work(db):
            db.add(...)

    Domain errors roll back and propagate unchanged. Unexpected SQLAlchemy
    failures roll back and surface as ``StorageError``.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure, transaction rolled back")
        raise StorageError() from exc
    except Exception:
        db.rollback()
        raise
