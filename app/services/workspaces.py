# services/workspaces.py
"""Workspace lifecycle: create, list, read, rename and delete."""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from .. import models
from ..schemas import workspace as schemas
from .membership import require_member, require_role
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def create_workspace(db: Session, user_id: int, data: schemas.WorkspaceCreate) -> models.Workspace:
    """Create a workspace and make its creator the first OWNER."""
    with unit_of_work(db):
        workspace = models.Workspace(
            name=data.name,
            description=data.description,
            creator_id=user_id
        )
        db.add(workspace)
        db.flush()  # Generate ID

        db.add(models.WorkspaceMember(
            workspace_id=workspace.id,
            user_id=user_id,
            role=models.WorkspaceRole.OWNER
        ))

    db.refresh(workspace)
    logger.info(f"Workspace {workspace.id} created by user {user_id}")
    return workspace


def list_workspaces(db: Session, user_id: int) -> List[Tuple[models.Workspace, models.WorkspaceRole]]:
    """Every workspace the user belongs to, most recently updated first,
    paired with the user's role in it."""
    with unit_of_work(db):
        rows = db.query(models.Workspace, models.WorkspaceMember.role).join(
            models.WorkspaceMember,
            models.WorkspaceMember.workspace_id == models.Workspace.id
        ).filter(
            models.WorkspaceMember.user_id == user_id
        ).order_by(models.Workspace.updated_at.desc(), models.Workspace.id.desc()).all()
    return [(workspace, role) for workspace, role in rows]


def get_workspace(db: Session, workspace_id: int, user_id: int) -> Tuple[models.Workspace, models.WorkspaceMember]:
    """Return the workspace with the caller's membership."""
    with unit_of_work(db):
        member = require_member(db, workspace_id, user_id)
        workspace = member.workspace
    return workspace, member


def list_open_invites(db: Session, workspace_id: int) -> List[models.WorkspaceInvite]:
    """Pending, unexpired invites of a workspace, newest first."""
    return db.query(models.WorkspaceInvite).filter(
        models.WorkspaceInvite.workspace_id == workspace_id,
        models.WorkspaceInvite.status == models.InviteStatus.PENDING,
        models.WorkspaceInvite.expires_at > models.utc_now()
    ).order_by(models.WorkspaceInvite.created_at.desc()).all()


def update_workspace(
    db: Session,
    workspace_id: int,
    user_id: int,
    data: schemas.WorkspaceUpdate
) -> models.Workspace:
    """Rename or re-describe a workspace. Only OWNER/ADMIN can update."""
    with unit_of_work(db):
        member = require_role(db, workspace_id, user_id, models.MANAGER_ROLES)
        workspace = member.workspace
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(workspace, field, value)

    db.refresh(workspace)
    logger.info(f"Workspace {workspace_id} updated by user {user_id}")
    return workspace


def delete_workspace(db: Session, workspace_id: int, user_id: int) -> None:
    """Delete a workspace. Only an OWNER can delete. Cascades to members,
    invites, bank accounts and transactions."""
    with unit_of_work(db):
        member = require_role(db, workspace_id, user_id, [models.WorkspaceRole.OWNER])
        db.delete(member.workspace)

    logger.info(f"Workspace {workspace_id} deleted by user {user_id}")
