# services/auth.py
"""Sign-up and sign-in."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..auth import create_access_token, hash_password, verify_password
from ..errors import DuplicateEmail, InvalidCredentials
from ..schemas import auth as schemas
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def sign_up(db: Session, data: schemas.SignUpRequest) -> models.User:
    email = data.email.strip().lower()

    with unit_of_work(db):
        if db.query(models.User).filter(models.User.email == email).first():
            raise DuplicateEmail()

        user = models.User(
            name=data.name,
            email=email,
            password_hash=hash_password(data.password)
        )
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            raise DuplicateEmail()

    db.refresh(user)
    logger.info(f"User {user.id} signed up")
    return user


def sign_in(db: Session, data: schemas.SignInRequest) -> str:
    """Return a bearer token for valid credentials."""
    email = data.email.strip().lower()

    with unit_of_work(db):
        user = db.query(models.User).filter(models.User.email == email).first()

    if not user or not verify_password(data.password, user.password_hash):
        logger.warning("Sign-in rejected")
        raise InvalidCredentials()

    return create_access_token(user.id, user.email)
