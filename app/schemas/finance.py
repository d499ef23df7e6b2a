from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from ..models import TransactionType


class AccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    # Decimal string, e.g. "1000.50" or "1.000,50"; "" leaves it empty
    initial_balance: Optional[str] = None
    agency: Optional[str] = Field(None, max_length=50)
    account: Optional[str] = Field(None, max_length=50)

    class Config:
        frozen = True


class AccountUpdate(BaseModel):
    """Absent fields stay unchanged; ``initial_balance=""`` clears the balance."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    initial_balance: Optional[str] = None
    agency: Optional[str] = Field(None, max_length=50)
    account: Optional[str] = Field(None, max_length=50)

    @field_validator('name')
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError('Account name cannot be null')
        return v

    class Config:
        frozen = True


class Account(BaseModel):
    id: int
    name: str
    initial_balance_cents: Optional[int] = None
    agency: Optional[str] = None
    account: Optional[str] = None
    workspace_id: int
    owner_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TransactionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    amount: str = Field(..., min_length=1)
    date: datetime
    type: TransactionType
    bank_account_id: int

    class Config:
        frozen = True


class TransactionUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    amount: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    type: Optional[TransactionType] = None
    bank_account_id: Optional[int] = None

    @field_validator('title', 'amount', 'date', 'type', 'bank_account_id')
    @classmethod
    def required_fields_not_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v

    class Config:
        frozen = True


class AccountSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class Transaction(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    amount_cents: int
    date: datetime
    type: TransactionType
    bank_account_id: int
    created_by_id: int
    created_at: datetime
    updated_at: datetime
    bank_account: Optional[AccountSummary] = None

    class Config:
        from_attributes = True
