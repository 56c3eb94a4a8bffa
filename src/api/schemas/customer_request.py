"""Request schemas for customer records

plots_held and price_per_plot accept either arrays or comma-joined strings.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from src.api.schemas.list_fields import split_list, split_optional_list


class CreateCustomerRequestSchema(BaseModel):
    """
    Request schema for onboarding a customer

    Used for POST /admin/users endpoint.
    """

    name: str = Field(..., min_length=1, description="Customer full name")

    email: str = Field(..., min_length=3, description="Customer email (unique)")

    contact: str = Field(..., min_length=1, description="Phone number")

    plots_held: List[str] = Field(
        default_factory=list,
        description="Plot numbers, as an array or comma-joined string"
    )

    price_per_plot: List[str] = Field(
        default_factory=list,
        description="Per-plot prices, as an array or comma-joined string"
    )

    initial_deposit: Decimal = Field(default=Decimal("0"), ge=0)

    total_price: Optional[Decimal] = Field(default=None, gt=0)

    date_taken: Optional[date] = None

    payment_schedule: Optional[str] = None

    plot_size: Optional[str] = None

    location: Optional[str] = None

    @field_validator("plots_held", "price_per_plot", mode="before")
    @classmethod
    def parse_list(cls, v):
        return [str(item) for item in split_list(v)]

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Amina Bello",
                "email": "amina@example.com",
                "contact": "08030000000",
                "plots_held": "A-49, A-50",
                "price_per_plot": "4500, 4500",
                "initial_deposit": "3000",
            }
        }


class UpdateCustomerRequestSchema(BaseModel):
    """Request schema for PUT /admin/users/{customer_id}; omitted fields are kept."""

    name: Optional[str] = Field(default=None, min_length=1)
    contact: Optional[str] = None
    plots_held: Optional[List[str]] = None
    price_per_plot: Optional[List[str]] = None
    initial_deposit: Optional[Decimal] = Field(default=None, ge=0)
    total_price: Optional[Decimal] = Field(default=None, gt=0)
    date_taken: Optional[date] = None
    payment_schedule: Optional[str] = None
    plot_size: Optional[str] = None
    location: Optional[str] = None

    @field_validator("plots_held", "price_per_plot", mode="before")
    @classmethod
    def parse_list(cls, v):
        parsed = split_optional_list(v)
        return None if parsed is None else [str(item) for item in parsed]
