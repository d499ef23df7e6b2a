# services/accounts.py
"""Bank accounts, confined to the workspace they were created in."""

import logging
from typing import List

from sqlalchemy.orm import Session

from .. import models
from ..errors import AccountNotFound
from ..schemas import finance as schemas
from .membership import require_member
from .money import optional_cents
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def find_account(db: Session, workspace_id: int, account_id: int) -> models.BankAccount:
    """Resolve an account id inside a workspace.

    Accounts of other workspaces are reported as missing.
    """
    account = db.query(models.BankAccount).filter(
        models.BankAccount.id == account_id,
        models.BankAccount.workspace_id == workspace_id
    ).first()
    if not account:
        raise AccountNotFound()
    return account


def create_account(
    db: Session,
    workspace_id: int,
    user_id: int,
    data: schemas.AccountCreate
) -> models.BankAccount:
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)

        account = models.BankAccount(
            name=data.name,
            agency=data.agency,
            account=data.account,
            workspace_id=workspace_id,
            owner_id=user_id
        )
        if data.initial_balance is not None:
            account.initial_balance_cents = optional_cents(data.initial_balance)
        db.add(account)

    db.refresh(account)
    logger.info(f"Bank account {account.id} created in workspace {workspace_id} by user {user_id}")
    return account


def list_accounts(db: Session, workspace_id: int, user_id: int) -> List[models.BankAccount]:
    """Accounts of the workspace, newest first."""
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        return db.query(models.BankAccount).filter(
            models.BankAccount.workspace_id == workspace_id
        ).order_by(models.BankAccount.created_at.desc(), models.BankAccount.id.desc()).all()


def get_account(db: Session, workspace_id: int, account_id: int, user_id: int) -> models.BankAccount:
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        return find_account(db, workspace_id, account_id)


def update_account(
    db: Session,
    workspace_id: int,
    account_id: int,
    user_id: int,
    data: schemas.AccountUpdate
) -> models.BankAccount:
    """Apply the fields present in ``data``.

    ``initial_balance=""`` clears the stored balance; an absent
    ``initial_balance`` leaves it untouched.
    """
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        account = find_account(db, workspace_id, account_id)

        changes = data.model_dump(exclude_unset=True)
        if "initial_balance" in changes:
            raw = changes.pop("initial_balance")
            account.initial_balance_cents = None if raw is None else optional_cents(raw)
        for field, value in changes.items():
            setattr(account, field, value)

    db.refresh(account)
    logger.info(f"Bank account {account_id} updated in workspace {workspace_id} by user {user_id}")
    return account


def delete_account(db: Session, workspace_id: int, account_id: int, user_id: int) -> None:
    """Delete an account together with its transactions."""
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        account = find_account(db, workspace_id, account_id)
        db.delete(account)

    logger.info(f"Bank account {account_id} deleted from workspace {workspace_id} by user {user_id}")
