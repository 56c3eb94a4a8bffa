"""Subscription Domain Entity

An application to acquire one or more plots.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Boolean, Date, Numeric, String, Text
from src.domain.base import BaseModel, IdType


class SubscriptionStatus(str, Enum):
    """Subscription status types"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Subscription(BaseModel, table=True):
    """
    Subscription - Application for one or more plots

    Domain Rules:
    - plot_ids is ordered; the first id is the primary plot (also in plot_id)
    - price is the sum of the per-plot prices at submission time
    - Status transitions: pending -> approved | rejected (both terminal)
    - Pending subscriptions hold their plots Reserved, approved ones Sold
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        Index('ix_subscriptions_email', 'email'),
        Index('ix_subscriptions_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique subscription identifier (auto-increment)"
    )

    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.PENDING,
        description="Subscription status (pending, approved, rejected)"
    )

    plot_ids: List[int] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Requested plot ids, primary plot first"
    )

    plot_id: Optional[int] = Field(
        default=None,
        description="Primary plot id (first of plot_ids)"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Total price of all requested plots"
    )

    price_per_plot: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    # Applicant
    title: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    name: str = Field(sa_column=Column(String(255), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False))
    phone_number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    residential_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    occupation: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    office_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    dob: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    state_of_origin: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    lga: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    sex: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    nationality: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    home_number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    identification: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    # Next of kin
    next_of_kin_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    next_of_kin_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    next_of_kin_relationship: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    next_of_kin_phone_number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    next_of_kin_occupation: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    next_of_kin_office_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    # Plot usage
    layout_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    proposed_use: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    proposed_type: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    plot_size: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    payment_terms: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    # Agreement and uploaded documents (blob store references)
    agreed_to_terms: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    signature_text: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    passport_photo_ref: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))
    identification_file_ref: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))
    signature_file_ref: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))

    decided_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp of approval or rejection"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Subscription creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 12,
                "status": "pending",
                "plot_ids": [49, 50],
                "plot_id": 49,
                "price": "5000000.00",
                "price_per_plot": ["2500000.00", "2500000.00"],
                "name": "Amina Bello",
                "email": "amina@example.com",
                "created_at": "2024-03-01T10:00:00Z",
            }
        }
