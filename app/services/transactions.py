# services/transactions.py
"""Transactions, scoped through their bank account's workspace."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import models
from ..errors import TransactionNotFound
from ..schemas import finance as schemas
from .accounts import find_account
from .membership import require_member
from .money import to_cents
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def _workspace_transactions(db: Session, workspace_id: int):
    return db.query(models.Transaction).join(models.BankAccount).filter(
        models.BankAccount.workspace_id == workspace_id
    )


def _find_transaction(db: Session, workspace_id: int, transaction_id: int) -> models.Transaction:
    transaction = _workspace_transactions(db, workspace_id).filter(
        models.Transaction.id == transaction_id
    ).first()
    if not transaction:
        raise TransactionNotFound()
    return transaction


def create_transaction(
    db: Session,
    workspace_id: int,
    user_id: int,
    data: schemas.TransactionCreate
) -> models.Transaction:
    """Record a transaction against a bank account of the same workspace."""
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        find_account(db, workspace_id, data.bank_account_id)

        transaction = models.Transaction(
            title=data.title,
            description=data.description,
            amount_cents=to_cents(data.amount),
            date=data.date,
            type=data.type,
            bank_account_id=data.bank_account_id,
            created_by_id=user_id
        )
        db.add(transaction)

    db.refresh(transaction)
    logger.info(
        f"Transaction {transaction.id} ({transaction.type.value} {transaction.amount_cents}) "
        f"created in workspace {workspace_id} by user {user_id}"
    )
    return transaction


def list_transactions(
    db: Session,
    workspace_id: int,
    user_id: int,
    bank_account_id: Optional[int] = None
) -> List[models.Transaction]:
    """Transactions of the workspace, newest ``date`` first, optionally
    narrowed to one of its bank accounts."""
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)

        query = _workspace_transactions(db, workspace_id)
        if bank_account_id is not None:
            find_account(db, workspace_id, bank_account_id)
            query = query.filter(models.Transaction.bank_account_id == bank_account_id)

        return query.order_by(models.Transaction.date.desc(), models.Transaction.id.desc()).all()


def get_transaction(db: Session, workspace_id: int, transaction_id: int, user_id: int) -> models.Transaction:
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        return _find_transaction(db, workspace_id, transaction_id)


def update_transaction(
    db: Session,
    workspace_id: int,
    transaction_id: int,
    user_id: int,
    data: schemas.TransactionUpdate
) -> models.Transaction:
    """Apply the fields present in ``data``; a new bank account must belong
    to the same workspace."""
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        transaction = _find_transaction(db, workspace_id, transaction_id)

        changes = data.model_dump(exclude_unset=True)
        if "bank_account_id" in changes:
            find_account(db, workspace_id, changes["bank_account_id"])
        if "amount" in changes:
            changes["amount_cents"] = to_cents(changes.pop("amount"))
        for field, value in changes.items():
            setattr(transaction, field, value)

    db.refresh(transaction)
    logger.info(f"Transaction {transaction_id} updated in workspace {workspace_id} by user {user_id}")
    return transaction


def delete_transaction(db: Session, workspace_id: int, transaction_id: int, user_id: int) -> None:
    with unit_of_work(db):
        require_member(db, workspace_id, user_id)
        transaction = _find_transaction(db, workspace_id, transaction_id)
        db.delete(transaction)

    logger.info(f"Transaction {transaction_id} deleted from workspace {workspace_id} by user {user_id}")
