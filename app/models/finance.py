# models/finance.py
"""SQLAlchemy models for bank accounts and transactions."""

import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from ..database import Base
from .user import utc_now


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class BankAccount(Base):
    """Bank account scoped to exactly one workspace."""
    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    initial_balance_cents = Column(Integer, nullable=True)
    agency = Column(String(50), nullable=True)
    account = Column(String(50), nullable=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    workspace = relationship("Workspace", back_populates="bank_accounts")
    owner = relationship("User")
    transactions = relationship("Transaction", back_populates="bank_account", cascade="all, delete-orphan")


class Transaction(Base):
    """Income or expense entry recorded against a bank account."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    amount_cents = Column(Integer, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    bank_account = relationship("BankAccount", back_populates="transactions")
    created_by = relationship("User")
