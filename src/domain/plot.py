"""Plot Domain Entity

A sellable unit of land identified by a unique, human-facing number.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Numeric, String
from src.domain.base import BaseModel, IdType


class PlotStatus(str, Enum):
    """Plot occupancy states"""
    AVAILABLE = "Available"
    RESERVED = "Reserved"  # Held by a pending subscription
    SOLD = "Sold"


class Plot(BaseModel, table=True):
    """
    Plot - Occupancy and ownership of one plot of land

    Domain Rules:
    - number is unique
    - Held by at most one customer or subscription at a time
    - Status changes only through the plot state machine
      (src/domain/plot_state.py)
    - Available plots have no owner and no reservation timestamps
    """

    __tablename__ = "plots"
    __table_args__ = (
        CheckConstraint('price >= 0', name='plot_price_non_negative'),
        Index('ix_plots_status', 'status'),
        Index('ix_plots_owner', 'owner'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique plot identifier (auto-increment)"
    )

    number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Human-facing plot number (unique)"
    )

    status: PlotStatus = Field(
        default=PlotStatus.AVAILABLE,
        description="Occupancy status (Available, Reserved, Sold)"
    )

    owner: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Name of the current holder"
    )

    price: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Plot price"
    )

    reserved_by: Optional[int] = Field(
        default=None,
        description="Subscription holding the reservation"
    )

    plot_size: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    layout_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    reserved_at: Optional[datetime] = Field(default=None)

    sold_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 49,
                "number": "A-49",
                "status": "Reserved",
                "owner": "Amina Bello",
                "price": "2500000.00",
                "reserved_by": 12,
                "reserved_at": "2024-03-01T10:00:00Z",
                "sold_at": None,
            }
        }
