# controllers/accounts.py
"""Bank account endpoints, nested under a workspace."""

from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import finance as schemas
from ..services import accounts as service

router = APIRouter()


@router.post("/{workspace_id}/accounts/", response_model=schemas.Account, status_code=status.HTTP_201_CREATED, summary="Create a bank account")
def create_account(
    workspace_id: int,
    data: schemas.AccountCreate,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Create a bank account; ``initial_balance`` is a decimal string stored in cents."""
    return service.create_account(db, workspace_id, current_user, data)


@router.get("/{workspace_id}/accounts/", response_model=List[schemas.Account], summary="List bank accounts")
def list_accounts(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return service.list_accounts(db, workspace_id, current_user)


@router.get("/{workspace_id}/accounts/{account_id}", response_model=schemas.Account, summary="Get a bank account")
def get_account(
    workspace_id: int,
    account_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    return service.get_account(db, workspace_id, account_id, current_user)


@router.patch("/{workspace_id}/accounts/{account_id}", response_model=schemas.Account, summary="Update a bank account")
def update_account(
    workspace_id: int,
    account_id: int,
    data: schemas.AccountUpdate,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Update account details. Send ``initial_balance: ""`` to clear the balance."""
    return service.update_account(db, workspace_id, account_id, current_user, data)


@router.delete("/{workspace_id}/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a bank account")
def delete_account(
    workspace_id: int,
    account_id: int,
    db: Session = Depends(get_db),
    current_user: int = Depends(get_current_user)
):
    """Delete a bank account and all its transactions."""
    service.delete_account(db, workspace_id, account_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
