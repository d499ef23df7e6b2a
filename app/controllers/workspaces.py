# controllers/workspaces.py
"""Workspace, membership and invitation endpoints."""

from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from .. import models
from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import workspace as schemas
from ..services import invitations, members
from ..services import workspaces as service

router = APIRouter()


def _workspace_view(workspace: models.Workspace, role: models.WorkspaceRole) -> schemas.Workspace:
    view = schemas.Workspace.model_validate(workspace)
    return view.model_copy(update={"current_user_role": role, "member_count": len(workspace.members)})


@router.post("/", response_model=schemas.Workspace, status_code=status.HTTP_201_CREATED, summary="Create a new workspace")
def create_workspace(
    data: schemas.WorkspaceCreate,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Create a new workspace and add creator as OWNER."""
    workspace = service.create_workspace(db, current_user, data)
    return _workspace_view(workspace, models.WorkspaceRole.OWNER)


@router.get("/", response_model=List[schemas.Workspace], summary="List my workspaces")
def list_my_workspaces(
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """List all workspaces where the user is a member."""
    return [_workspace_view(workspace, role) for workspace, role in service.list_workspaces(db, current_user)]


# ============= INVITATION ENDPOINTS =============
# Declared before "/{workspace_id}" routes so "invites" is never read as an id.

@router.get("/invites/pending", response_model=List[schemas.WorkspaceInvite], summary="List my pending invites")
def list_pending_invites(
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return invitations.list_pending_invites(db, current_user)


@router.post("/invites/accept", response_model=schemas.WorkspaceMember, summary="Accept invitation")
def accept_invite(
    data: schemas.InviteTokenRequest,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Accept a workspace invitation using its token."""
    return invitations.accept_invite(db, current_user, data.token)


@router.post("/invites/decline", status_code=status.HTTP_204_NO_CONTENT, summary="Decline invitation")
def decline_invite(
    data: schemas.InviteTokenRequest,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    invitations.decline_invite(db, current_user, data.token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{workspace_id}", response_model=schemas.WorkspaceDetail, summary="Get workspace")
def get_workspace(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Workspace with its members and open invitations."""
    workspace, member = service.get_workspace(db, workspace_id, current_user)
    view = _workspace_view(workspace, member.role)
    return schemas.WorkspaceDetail(
        **view.model_dump(),
        members=[schemas.WorkspaceMember.model_validate(m) for m in workspace.members],
        pending_invites=[
            schemas.WorkspaceInviteSummary.model_validate(i) for i in service.list_open_invites(db, workspace_id)
        ]
    )


@router.patch("/{workspace_id}", response_model=schemas.Workspace, summary="Update workspace")
def update_workspace(
    workspace_id: int,
    data: schemas.WorkspaceUpdate,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Update a workspace. Only owners/admins can update."""
    workspace = service.update_workspace(db, workspace_id, current_user, data)
    member = next(m for m in workspace.members if m.user_id == current_user)
    return _workspace_view(workspace, member.role)


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete workspace")
def delete_workspace(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Delete a workspace. Only an owner can delete. Cascades to all related data."""
    service.delete_workspace(db, workspace_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{workspace_id}/invites",
    response_model=schemas.WorkspaceInvite,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a member"
)
def invite_member(
    workspace_id: int,
    data: schemas.InviteMemberRequest,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Create an email-based invitation. Only owners/admins can invite."""
    return invitations.invite_member(db, workspace_id, current_user, data)


# ============= MEMBER ENDPOINTS =============

@router.patch("/{workspace_id}/members/{member_id}", response_model=schemas.WorkspaceMember, summary="Change member role")
def update_member_role(
    workspace_id: int,
    member_id: int,
    data: schemas.UpdateMemberRoleRequest,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return members.update_member_role(db, workspace_id, current_user, member_id, data.role)


@router.delete("/{workspace_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove member")
def remove_member(
    workspace_id: int,
    member_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    members.remove_member(db, workspace_id, current_user, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{workspace_id}/leave", status_code=status.HTTP_204_NO_CONTENT, summary="Leave workspace")
def leave_workspace(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    members.leave_workspace(db, workspace_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
