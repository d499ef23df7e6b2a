# controllers/transactions.py
"""Transaction endpoints, nested under a workspace."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import finance as schemas
from ..services import transactions as service

router = APIRouter()


@router.post("/{workspace_id}/transactions/", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED, summary="Create a transaction")
def create_transaction(
    workspace_id: int,
    data: schemas.TransactionCreate,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Record a new transaction against a bank account of this workspace."""
    return service.create_transaction(db, workspace_id, current_user, data)


@router.get("/{workspace_id}/transactions/", response_model=List[schemas.Transaction], summary="List transactions")
def list_transactions(
    workspace_id: int,
    bank_account_id: Optional[int] = Query(None, description="Only transactions of this bank account"),
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return service.list_transactions(db, workspace_id, current_user, bank_account_id)


@router.get("/{workspace_id}/transactions/{transaction_id}", response_model=schemas.Transaction, summary="Get a transaction")
def get_transaction(
    workspace_id: int,
    transaction_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return service.get_transaction(db, workspace_id, transaction_id, current_user)


@router.patch("/{workspace_id}/transactions/{transaction_id}", response_model=schemas.Transaction, summary="Update a transaction")
def update_transaction(
    workspace_id: int,
    transaction_id: int,
    data: schemas.TransactionUpdate,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return service.update_transaction(db, workspace_id, transaction_id, current_user, data)


@router.delete("/{workspace_id}/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a transaction")
def delete_transaction(
    workspace_id: int,
    transaction_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    service.delete_transaction(db, workspace_id, transaction_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
