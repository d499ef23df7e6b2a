"""Acceptance races, replayed with a second session committing between the
invite lookup and the claim."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models
from app.database import Base
from app.errors import AlreadyMember, InviteNotFound
from app.schemas.workspace import InviteMemberRequest
from app.services import invitations


@pytest.fixture
def engine(tmp_path):
    # A file database gives every session its own connection
    engine = create_engine(f"sqlite:///{tmp_path / 'races.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def other_session(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def alice(make_user):
    return make_user("a@x.com")


@pytest.fixture
def invite(db, owner, workspace):
    return invitations.invite_member(
        db, workspace.id, owner.id, InviteMemberRequest(email="a@x.com", role=models.WorkspaceRole.ADMIN)
    )


def _interleave(monkeypatch, concurrent_write):
    """Run ``concurrent_write`` right after ``accept_invite`` has checked
    for an existing membership and before it claims the invite."""
    real_find_member = invitations.find_member

    def find_member_then_race(db, workspace_id, user_id):
        found = real_find_member(db, workspace_id, user_id)
        concurrent_write()
        return found

    monkeypatch.setattr(invitations, "find_member", find_member_then_race)


def _members_of(db, workspace_id, user_id):
    return db.query(models.WorkspaceMember).filter(
        models.WorkspaceMember.workspace_id == workspace_id,
        models.WorkspaceMember.user_id == user_id
    ).all()


def test_losing_acceptance_fails_and_leaves_winner_untouched(
    db, other_session, monkeypatch, workspace, alice, invite
):
    workspace_id, alice_id, invite_id, token = workspace.id, alice.id, invite.id, invite.token

    def accept_elsewhere():
        with other_session() as session:
            session.query(models.WorkspaceInvite).filter(models.WorkspaceInvite.id == invite_id).update(
                {
                    models.WorkspaceInvite.status: models.InviteStatus.ACCEPTED,
                    models.WorkspaceInvite.accepted_at: models.utc_now(),
                    models.WorkspaceInvite.accepted_by_id: alice_id,
                },
                synchronize_session=False
            )
            session.commit()

    _interleave(monkeypatch, accept_elsewhere)

    with pytest.raises(InviteNotFound):
        invitations.accept_invite(db, alice_id, token)

    db.expire_all()
    assert _members_of(db, workspace_id, alice_id) == []
    stored = db.get(models.WorkspaceInvite, invite_id)
    assert stored.status == models.InviteStatus.ACCEPTED
    assert stored.accepted_by_id == alice_id


def test_duplicate_member_insert_maps_to_already_member(
    db, other_session, monkeypatch, workspace, alice, invite
):
    workspace_id, alice_id, invite_id, token = workspace.id, alice.id, invite.id, invite.token

    def join_elsewhere():
        with other_session() as session:
            session.add(models.WorkspaceMember(
                workspace_id=workspace_id,
                user_id=alice_id,
                role=models.WorkspaceRole.VIEWER
            ))
            session.commit()

    _interleave(monkeypatch, join_elsewhere)

    with pytest.raises(AlreadyMember):
        invitations.accept_invite(db, alice_id, token)

    db.expire_all()
    members = _members_of(db, workspace_id, alice_id)
    assert [member.role for member in members] == [models.WorkspaceRole.VIEWER]
    stored = db.get(models.WorkspaceInvite, invite_id)
    assert stored.status == models.InviteStatus.PENDING
    assert stored.accepted_by_id is None
    assert stored.accepted_at is None
