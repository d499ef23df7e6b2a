# services/invitations.py
"""Invitation lifecycle: PENDING -> ACCEPTED | DECLINED.

Invites are redeemed by token, and only by the user whose email the invite
was addressed to. Tokens come from ``secrets`` and are never written to the
logs. An invite that is expired, already accepted, already declined or
addressed to someone else is indistinguishable from one that never existed.
"""

import logging
import secrets
from datetime import timedelta
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..config import INVITE_TTL_DAYS
from ..errors import AlreadyMember, InviteAlreadyPending, InviteNotFound, UserNotFound
from ..schemas import workspace as schemas
from .membership import find_member, require_role
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32  # 256 bits


def generate_invite_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _open_invites(db: Session):
    """Invites still redeemable right now."""
    return db.query(models.WorkspaceInvite).filter(
        models.WorkspaceInvite.status == models.InviteStatus.PENDING,
        models.WorkspaceInvite.expires_at > models.utc_now()
    )


def _user_email(db: Session, user_id: int) -> str:
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise UserNotFound()
    return user.email


def invite_member(
    db: Session,
    workspace_id: int,
    inviter_id: int,
    data: schemas.InviteMemberRequest
) -> models.WorkspaceInvite:
    """Create an email-based invitation. Only OWNER/ADMIN can invite."""
    email = _normalize_email(data.email)

    with unit_of_work(db):
        require_role(db, workspace_id, inviter_id, models.MANAGER_ROLES)

        existing_member = db.query(models.WorkspaceMember).join(
            models.User, models.User.id == models.WorkspaceMember.user_id
        ).filter(
            models.WorkspaceMember.workspace_id == workspace_id,
            models.User.email == email
        ).first()
        if existing_member:
            raise AlreadyMember()

        existing_invite = _open_invites(db).filter(
            models.WorkspaceInvite.workspace_id == workspace_id,
            models.WorkspaceInvite.email == email
        ).first()
        if existing_invite:
            raise InviteAlreadyPending()

        invite = models.WorkspaceInvite(
            workspace_id=workspace_id,
            sender_id=inviter_id,
            email=email,
            role=data.role,
            message=data.message,
            token=generate_invite_token(),
            status=models.InviteStatus.PENDING,
            expires_at=models.utc_now() + timedelta(days=INVITE_TTL_DAYS)
        )
        db.add(invite)

    db.refresh(invite)
    logger.info(
        f"Invite {invite.id} sent as {invite.role.value} "
        f"for workspace {workspace_id} by user {inviter_id}"
    )
    return invite


def list_pending_invites(db: Session, user_id: int) -> List[models.WorkspaceInvite]:
    """Pending, unexpired invites addressed to the user's email, newest first."""
    with unit_of_work(db):
        email = _user_email(db, user_id)
        return _open_invites(db).filter(
            models.WorkspaceInvite.email == email
        ).order_by(models.WorkspaceInvite.created_at.desc(), models.WorkspaceInvite.id.desc()).all()


def accept_invite(db: Session, user_id: int, token: str) -> models.WorkspaceMember:
    """Redeem an invite addressed to the caller's email and join its workspace
    with the invited role.

    Marking the invite ACCEPTED and creating the membership commit together.
    The invite is claimed with a conditional update on its PENDING status, so
    of two concurrent acceptances only one can succeed.
    """
    with unit_of_work(db):
        email = _user_email(db, user_id)
        invite = _open_invites(db).filter(
            models.WorkspaceInvite.token == token,
            models.WorkspaceInvite.email == email
        ).first()
        if not invite:
            raise InviteNotFound()

        if find_member(db, invite.workspace_id, user_id):
            raise AlreadyMember("You are already a member of this workspace")

        claimed = db.query(models.WorkspaceInvite).filter(
            models.WorkspaceInvite.id == invite.id,
            models.WorkspaceInvite.status == models.InviteStatus.PENDING
        ).update(
            {
                models.WorkspaceInvite.status: models.InviteStatus.ACCEPTED,
                models.WorkspaceInvite.accepted_at: models.utc_now(),
                models.WorkspaceInvite.accepted_by_id: user_id,
            },
            synchronize_session="fetch"
        )
        if claimed != 1:
            raise InviteNotFound()

        member = models.WorkspaceMember(
            workspace_id=invite.workspace_id,
            user_id=user_id,
            role=invite.role
        )
        db.add(member)
        try:
            db.flush()
        except IntegrityError:
            raise AlreadyMember("You are already a member of this workspace")

    db.refresh(member)
    logger.info(f"Invite {invite.id} accepted by user {user_id}, joined workspace {member.workspace_id}")
    return member


def decline_invite(db: Session, user_id: int, token: str) -> None:
    """Decline an invite addressed to the caller's email."""
    with unit_of_work(db):
        user = db.query(models.User).filter(models.User.id == user_id).first()
        if not user:
            raise InviteNotFound()

        email = user.email
        claimed = _open_invites(db).filter(
            models.WorkspaceInvite.token == token,
            models.WorkspaceInvite.email == email
        ).update(
            {models.WorkspaceInvite.status: models.InviteStatus.DECLINED},
            synchronize_session=False
        )
        if claimed != 1:
            raise InviteNotFound()

    logger.info(f"Invite declined by user {user_id}")
