"""Payment Domain Entity

Ledger entry for one installment paid by a customer.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, IdType


class PaymentStatus(str, Enum):
    """How the payment entered the ledger"""
    RECORDED = "recorded"    # Entered directly by an admin
    APPROVED = "approved"    # Materialized from an approved payment request


class Payment(BaseModel, table=True):
    """
    Payment - Append-only ledger entry

    Domain Rules:
    - Belongs to exactly one customer
    - amount > 0
    - Updates and deletes are corrections and always trigger a full
      balance recomputation for the customer
    """

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint('amount > 0', name='payment_amount_positive'),
        Index('ix_payments_customer_id', 'customer_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique payment identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Customer"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    payment_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    recorded_by: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Admin who entered the payment"
    )

    status: PaymentStatus = Field(default=PaymentStatus.RECORDED)

    plot_id: Optional[int] = Field(default=None)

    payment_method: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
    )

    receipt_ref: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Blob store reference of the receipt"
    )

    payment_request_id: Optional[int] = Field(
        default=None,
        description="Payment request this payment was materialized from"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
