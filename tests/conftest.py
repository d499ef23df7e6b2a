import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models
from app.database import Base
from app.schemas import finance as finance_schemas
from app.schemas import workspace as workspace_schemas
from app.services import accounts, workspaces


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_user(db):
    def _make_user(email: str, name: str = None) -> models.User:
        user = models.User(email=email, name=name or email.split("@")[0], password_hash="not-a-hash")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com", "Owner")


@pytest.fixture
def workspace(db, owner):
    return workspaces.create_workspace(
        db, owner.id, workspace_schemas.WorkspaceCreate(name="Family", description="Household budget")
    )


@pytest.fixture
def add_member(db):
    """Attach a user to a workspace directly, bypassing the invite flow."""

    def _add_member(workspace_id: int, user: models.User, role: models.WorkspaceRole) -> models.WorkspaceMember:
        member = models.WorkspaceMember(workspace_id=workspace_id, user_id=user.id, role=role)
        db.add(member)
        db.commit()
        db.refresh(member)
        return member

    return _add_member


@pytest.fixture
def make_account(db):
    def _make_account(workspace_id: int, user_id: int, name: str = "Checking", initial_balance: str = None):
        return accounts.create_account(
            db,
            workspace_id,
            user_id,
            finance_schemas.AccountCreate(name=name, initial_balance=initial_balance),
        )

    return _make_account

