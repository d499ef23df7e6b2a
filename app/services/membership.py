# services/membership.py
"""Workspace membership and role checks shared by every scoped operation."""

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from .. import models
from ..errors import InsufficientRole, WorkspaceNotFound

logger = logging.getLogger(__name__)


def find_member(db: Session, workspace_id: int, user_id: int):
    return db.query(models.WorkspaceMember).filter(
        models.WorkspaceMember.workspace_id == workspace_id,
        models.WorkspaceMember.user_id == user_id
    ).first()


def require_member(db: Session, workspace_id: int, user_id: int) -> models.WorkspaceMember:
    """Return the caller's membership or raise ``WorkspaceNotFound``.

    A missing workspace and a workspace the caller cannot see are reported
    the same way.
    """
    member = find_member(db, workspace_id, user_id)
    if not member:
        logger.warning(f"Access denied (not_member): user_id={user_id} workspace_id={workspace_id}")
        raise WorkspaceNotFound()
    return member


def require_role(
    db: Session,
    workspace_id: int,
    user_id: int,
    allowed_roles: Iterable[models.WorkspaceRole]
) -> models.WorkspaceMember:
    """Like ``require_member`` but the caller's role must be in ``allowed_roles``."""
    member = require_member(db, workspace_id, user_id)
    if member.role not in set(allowed_roles):
        logger.warning(
            f"Access denied (role_denied): user_id={user_id} role={member.role.value} "
            f"workspace_id={workspace_id}"
        )
        raise InsufficientRole()
    return member


def count_owners(db: Session, workspace_id: int) -> int:
    """Count OWNER memberships, locking them until the surrounding commit."""
    owners = db.query(models.WorkspaceMember.id).filter(
        models.WorkspaceMember.workspace_id == workspace_id,
        models.WorkspaceMember.role == models.WorkspaceRole.OWNER
    ).with_for_update().all()
    return len(owners)
