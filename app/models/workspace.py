# models/workspace.py
"""SQLAlchemy models for workspaces, their members and invitations."""

import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base
from .user import utc_now


class WorkspaceRole(str, enum.Enum):
    """Member role, ordered by privilege: OWNER > ADMIN > MEMBER > VIEWER."""
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def outranks(self, other: "WorkspaceRole") -> bool:
        return self.rank > other.rank


_ROLE_RANK = {
    WorkspaceRole.OWNER: 3,
    WorkspaceRole.ADMIN: 2,
    WorkspaceRole.MEMBER: 1,
    WorkspaceRole.VIEWER: 0,
}

MANAGER_ROLES = frozenset({WorkspaceRole.OWNER, WorkspaceRole.ADMIN})


class InviteStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class Workspace(Base):
    """Tenancy boundary grouping members, bank accounts and transactions."""
    __tablename__ = "workspaces"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    creator = relationship("User")
    members = relationship(
        "WorkspaceMember",
        back_populates="workspace",
        cascade="all, delete-orphan",
        order_by="WorkspaceMember.joined_at",
    )
    invites = relationship("WorkspaceInvite", back_populates="workspace", cascade="all, delete-orphan")
    bank_accounts = relationship("BankAccount", back_populates="workspace", cascade="all, delete-orphan")


class WorkspaceMember(Base):
    """Role-bearing link between a user and a workspace."""
    __tablename__ = "workspace_members"
    __table_args__ = (
        UniqueConstraint("workspace_id", "user_id", name="uix_workspace_member"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(Enum(WorkspaceRole, name="workspace_role"), nullable=False, default=WorkspaceRole.MEMBER)
    joined_at = Column(DateTime(timezone=True), default=utc_now)

    workspace = relationship("Workspace", back_populates="members")
    user = relationship("User")


class WorkspaceInvite(Base):
    """Email-addressed membership offer, redeemable once through its token."""
    __tablename__ = "workspace_invites"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, index=True)
    role = Column(Enum(WorkspaceRole, name="workspace_role"), nullable=False, default=WorkspaceRole.MEMBER)
    token = Column(String(64), unique=True, nullable=False, index=True)
    message = Column(String(500), nullable=True)
    status = Column(Enum(InviteStatus, name="invite_status"), nullable=False, default=InviteStatus.PENDING)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    workspace_id = Column(Integer, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    accepted_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    workspace = relationship("Workspace", back_populates="invites")
    sender = relationship("User", foreign_keys=[sender_id])
    accepted_by = relationship("User", foreign_keys=[accepted_by_id])
