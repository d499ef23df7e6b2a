# errors.py
"""Domain errors raised by the service layer.

Every failure a service can report is a subclass of ``DomainError`` with a
stable ``kind`` tag. The HTTP layer translates kinds into status codes;
services never raise ``HTTPException`` themselves.
"""

from typing import Optional


class DomainError(Exception):
    kind = "DOMAIN_ERROR"
    message = "Domain error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, message={self.message!r})"


class WorkspaceNotFound(DomainError):
    """The caller has no membership row for the workspace.

    Also raised when the workspace does not exist at all, so non-members
    cannot discover which workspace ids exist.
    """
    kind = "WORKSPACE_NOT_FOUND"
    message = "Workspace not found or access denied"


NotMember = WorkspaceNotFound


class InsufficientRole(DomainError):
    kind = "INSUFFICIENT_ROLE"
    message = "Insufficient permissions"


class LastOwner(DomainError):
    kind = "LAST_OWNER"
    message = "Cannot remove the last owner of the workspace"


class MemberNotFound(DomainError):
    kind = "MEMBER_NOT_FOUND"
    message = "Member not found"


class AccountNotFound(DomainError):
    kind = "ACCOUNT_NOT_FOUND"
    message = "Bank account not found in this workspace"


class TransactionNotFound(DomainError):
    kind = "TRANSACTION_NOT_FOUND"
    message = "Transaction not found"


class InviteNotFound(DomainError):
    kind = "INVITE_NOT_FOUND"
    message = "Invalid or expired invite"


class UserNotFound(DomainError):
    kind = "USER_NOT_FOUND"
    message = "User not found"


class AlreadyMember(DomainError):
    kind = "ALREADY_MEMBER"
    message = "User is already a member of this workspace"


class InviteAlreadyPending(DomainError):
    kind = "INVITE_ALREADY_PENDING"
    message = "There is already a pending invite for this email"


class InvalidAmount(DomainError):
    kind = "INVALID_AMOUNT"
    message = "Invalid monetary amount"


class DuplicateEmail(DomainError):
    kind = "DUPLICATE_EMAIL"
    message = "E-mail already in use"


class InvalidCredentials(DomainError):
    kind = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class StorageError(DomainError):
    """Unexpected data-access failure. Never retried by the services."""
    kind = "STORAGE_ERROR"
    message = "Storage failure"
