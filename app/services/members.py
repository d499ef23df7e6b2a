# services/members.py
"""Role changes, removals and self-leave, guarded by the last-owner rule.

Policy shared by ``update_member_role`` and ``remove_member``:

1. the actor must be OWNER or ADMIN;
2. the target must be a member of the same workspace;
3. a non-OWNER actor may only act on targets it outranks, so an ADMIN
   reaches MEMBER and VIEWER only;
4. an OWNER cannot be demoted or removed while they are the only OWNER.

The owner count is taken with the OWNER rows locked inside the same unit of
work as the mutation, so two concurrent demotions cannot both pass.
"""

import logging

from sqlalchemy.orm import Session

from .. import models
from ..errors import InsufficientRole, LastOwner, MemberNotFound
from .membership import count_owners, require_member, require_role
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def _find_target(db: Session, workspace_id: int, member_id: int) -> models.WorkspaceMember:
    target = db.query(models.WorkspaceMember).filter(
        models.WorkspaceMember.id == member_id,
        models.WorkspaceMember.workspace_id == workspace_id
    ).first()
    if not target:
        raise MemberNotFound()
    return target


def _check_actor_may_manage(actor: models.WorkspaceMember, target: models.WorkspaceMember, action: str) -> None:
    # Owners manage everyone, anyone else only roles strictly below their own
    if actor.role == models.WorkspaceRole.OWNER or actor.role.outranks(target.role):
        return
    logger.warning(
        f"Access denied (target_not_outranked): actor={actor.id} actor_role={actor.role.value} "
        f"target={target.id} target_role={target.role.value} action={action}"
    )
    raise InsufficientRole(f"Cannot {action} a member whose role is equal to or above your own")


def _check_not_last_owner(db: Session, workspace_id: int, message: str) -> None:
    if count_owners(db, workspace_id) <= 1:
        raise LastOwner(message)


def update_member_role(
    db: Session,
    workspace_id: int,
    actor_id: int,
    member_id: int,
    new_role: models.WorkspaceRole
) -> models.WorkspaceMember:
    """Change a member's role."""
    with unit_of_work(db):
        actor = require_role(db, workspace_id, actor_id, models.MANAGER_ROLES)
        target = _find_target(db, workspace_id, member_id)
        _check_actor_may_manage(actor, target, "modify roles of")

        if target.role == models.WorkspaceRole.OWNER and new_role != models.WorkspaceRole.OWNER:
            _check_not_last_owner(db, workspace_id, "Cannot demote the last owner of the workspace")

        previous = target.role
        target.role = new_role

    db.refresh(target)
    logger.info(
        f"Member {member_id} of workspace {workspace_id} changed from {previous.value} "
        f"to {new_role.value} by user {actor_id}"
    )
    return target


def remove_member(db: Session, workspace_id: int, actor_id: int, member_id: int) -> None:
    """Remove a member from the workspace."""
    with unit_of_work(db):
        actor = require_role(db, workspace_id, actor_id, models.MANAGER_ROLES)
        target = _find_target(db, workspace_id, member_id)
        _check_actor_may_manage(actor, target, "remove")

        if target.role == models.WorkspaceRole.OWNER:
            _check_not_last_owner(db, workspace_id, "Cannot remove the last owner of the workspace")

        db.delete(target)

    logger.info(f"Member {member_id} removed from workspace {workspace_id} by user {actor_id}")


def leave_workspace(db: Session, workspace_id: int, user_id: int) -> None:
    """Remove the caller's own membership."""
    with unit_of_work(db):
        member = require_member(db, workspace_id, user_id)

        if member.role == models.WorkspaceRole.OWNER:
            _check_not_last_owner(
                db, workspace_id,
                "Cannot leave workspace as the last owner. Transfer ownership first."
            )

        db.delete(member)

    logger.info(f"User {user_id} left workspace {workspace_id}")
