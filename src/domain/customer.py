"""Customer Domain Entity

One record per buyer. Financial fields are derived from the payment ledger.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, CheckConstraint, Date, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType


class CustomerStatus(str, Enum):
    """Payment completion status"""
    ACTIVE = "Active"
    COMPLETED = "Completed"


class Customer(BaseModel, table=True):
    """
    Customer - Buyer of one or more plots

    Domain Rules:
    - balance == max(0, total_price - (initial_deposit + sum(payments)))
    - status == Completed <=> balance == 0
    - balance and status are written only with values computed by
      src.domain.financials.compute_financials
    - plots_held lists plot numbers in the order they were assigned
    - Deleting a customer releases its plots and removes its payments
    """

    __tablename__ = "customers"
    __table_args__ = (
        CheckConstraint('balance >= 0', name='customer_balance_non_negative'),
        CheckConstraint('initial_deposit >= 0', name='customer_deposit_non_negative'),
        CheckConstraint('total_price > 0', name='customer_total_price_positive'),
        Index('ix_customers_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique customer identifier (auto-increment)"
    )

    account_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("authentication_accounts.id", ondelete="SET NULL"), nullable=True),
        description="Linked authentication account"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True),
    )

    contact: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Phone number"
    )

    plots_held: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Plot numbers held by the customer"
    )

    price_per_plot: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Per-plot prices as decimal strings, aligned with plots_held"
    )

    date_taken: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )

    payment_schedule: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    plot_size: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    location: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    initial_deposit: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    total_price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Sum of per-plot prices"
    )

    balance: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Money still owed (derived)"
    )

    status: CustomerStatus = Field(
        default=CustomerStatus.ACTIVE,
        description="Active or Completed (derived)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 7,
                "account_id": 15,
                "name": "Amina Bello",
                "email": "amina@example.com",
                "contact": "08030000000",
                "plots_held": ["A-49", "A-50"],
                "price_per_plot": ["4500.00", "4500.00"],
                "initial_deposit": "3000.00",
                "total_price": "9000.00",
                "balance": "6000.00",
                "status": "Active",
            }
        }
