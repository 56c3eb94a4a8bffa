"""Payment Request Domain Entities

Customer-submitted payments awaiting an admin decision, and the audit rows
written when one is rejected.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, IdType


class PaymentRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentRequest(BaseModel, table=True):
    """
    Payment Request - Unconfirmed payment submitted by a customer

    Domain Rules:
    - Status transitions: pending -> approved | rejected (both terminal)
    - At most one terminal transition; deciding a non-pending request fails
    - Approval materializes a Payment; rejection has no ledger effect
    """

    __tablename__ = "payment_requests"
    __table_args__ = (
        CheckConstraint('amount > 0', name='payment_request_amount_positive'),
        Index('ix_payment_requests_customer_id', 'customer_id'),
        Index('ix_payment_requests_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
    )

    plot_id: Optional[int] = Field(default=None)

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    payment_method: str = Field(
        default="bank_transfer",
        sa_column=Column(String(50), nullable=False, default="bank_transfer"),
    )

    transaction_date: datetime = Field(default_factory=datetime.utcnow)

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    receipt_ref: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    status: PaymentRequestStatus = Field(default=PaymentRequestStatus.PENDING)

    rejection_reason: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    payment_id: Optional[int] = Field(
        default=None,
        description="Payment created on approval"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class RejectedPayment(BaseModel, table=True):
    """Audit copy of a rejected payment request"""

    __tablename__ = "rejected_payments"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    payment_request_id: int = Field(index=True)

    customer_id: int = Field()

    plot_id: Optional[int] = Field(default=None)

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    payment_method: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
    )

    transaction_date: Optional[datetime] = Field(default=None)

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    receipt_ref: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    rejection_reason: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
