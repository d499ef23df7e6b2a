from .user import User, utc_now
from .workspace import (
    Workspace,
    WorkspaceMember,
    WorkspaceInvite,
    WorkspaceRole,
    InviteStatus,
    MANAGER_ROLES,
)
from .finance import BankAccount, Transaction, TransactionType
