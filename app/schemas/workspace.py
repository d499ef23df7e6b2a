from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import List, Optional

from ..models import WorkspaceRole, InviteStatus


class WorkspaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    class Config:
        frozen = True


class WorkspaceUpdate(BaseModel):
    """Fields left out of the payload stay unchanged."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator('name')
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError('Workspace name cannot be null')
        return v

    class Config:
        frozen = True


class InviteMemberRequest(BaseModel):
    email: EmailStr
    role: WorkspaceRole = WorkspaceRole.MEMBER
    message: Optional[str] = Field(None, max_length=500)

    class Config:
        frozen = True


class InviteTokenRequest(BaseModel):
    token: str = Field(..., min_length=1)

    class Config:
        frozen = True


class UpdateMemberRoleRequest(BaseModel):
    role: WorkspaceRole

    class Config:
        frozen = True


class UserSummary(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class WorkspaceSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class WorkspaceMember(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    role: WorkspaceRole
    joined_at: datetime
    user: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class WorkspaceInviteSummary(BaseModel):
    """Invite as shown to other members of the workspace; carries no token."""
    id: int
    email: str
    role: WorkspaceRole
    message: Optional[str] = None
    status: InviteStatus
    created_at: datetime
    expires_at: datetime
    sender_id: int
    workspace_id: int
    accepted_by_id: Optional[int] = None
    accepted_at: Optional[datetime] = None
    workspace: Optional[WorkspaceSummary] = None
    sender: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class WorkspaceInvite(WorkspaceInviteSummary):
    """Invite as returned to its sender on creation and to its recipient."""
    token: str


class Workspace(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    creator_id: int
    created_at: datetime
    updated_at: datetime
    current_user_role: Optional[WorkspaceRole] = None
    member_count: int = 0

    class Config:
        from_attributes = True


class WorkspaceDetail(Workspace):
    members: List[WorkspaceMember] = []
    pending_invites: List[WorkspaceInviteSummary] = []
