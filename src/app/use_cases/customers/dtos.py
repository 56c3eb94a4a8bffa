"""Data Transfer Objects for Customer Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.payments.dtos import PaymentDTO


class CreateCustomerCommandDTO(BaseModel):
    """
    Command DTO for onboarding a customer

    Used as input to CreateCustomer use case. When total_price is omitted it
    is derived from price_per_plot, then from the listed plots' prices.
    """

    name: str = Field(..., description="Customer full name")

    email: str = Field(..., description="Customer email (unique, used to log in)")

    contact: str = Field(..., description="Phone number; also the initial password")

    plots_held: List[str] = Field(
        default_factory=list,
        description="Plot numbers sold to the customer"
    )

    price_per_plot: List[str] = Field(
        default_factory=list,
        description="Per-plot prices aligned with plots_held"
    )

    initial_deposit: Decimal = Field(default=Decimal("0"), description="Deposit paid at onboarding")

    total_price: Optional[Decimal] = Field(default=None, description="Total price of all plots")

    date_taken: Optional[date] = None

    payment_schedule: Optional[str] = None

    plot_size: Optional[str] = None

    location: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Amina Bello",
                "email": "amina@example.com",
                "contact": "08030000000",
                "plots_held": ["A-49", "A-50"],
                "price_per_plot": ["4500", "4500"],
                "initial_deposit": "3000",
                "date_taken": "2024-03-01",
                "payment_schedule": "monthly",
            }
        }


class UpdateCustomerCommandDTO(BaseModel):
    """
    Command DTO for editing a customer

    Fields left as None are not changed. Email, balance and status are not
    editable; balance and status are always recomputed.
    """

    customer_id: int
    name: Optional[str] = None
    contact: Optional[str] = None
    plots_held: Optional[List[str]] = Field(
        default=None,
        description="Replacement plot list; previous plots are released"
    )
    price_per_plot: Optional[List[str]] = None
    initial_deposit: Optional[Decimal] = None
    total_price: Optional[Decimal] = None
    date_taken: Optional[date] = None
    payment_schedule: Optional[str] = None
    plot_size: Optional[str] = None
    location: Optional[str] = None


class CustomerDetailsDTO(BaseModel):
    """
    Customer with its ledger and derived financial figures

    payment_progress is the percentage of total_price paid so far (0-100).
    """

    id: int
    account_id: Optional[int] = None
    name: str
    email: str
    contact: str
    plots_held: List[str]
    price_per_plot: List[str]
    date_taken: Optional[date] = None
    payment_schedule: Optional[str] = None
    plot_size: Optional[str] = None
    location: Optional[str] = None
    initial_deposit: Decimal
    total_price: Decimal
    balance: Decimal
    status: str
    total_paid: Decimal
    total_subsequent_payments: Decimal
    remaining_balance: Decimal
    is_completed: bool
    payment_progress: Decimal
    payments: List[PaymentDTO] = Field(default_factory=list)
    created_at: datetime


class DefaultCredentialDTO(BaseModel):
    """Login generated for a new customer; reported once at creation"""

    email: str
    password: str


class CreateCustomerResultDTO(BaseModel):
    customer: CustomerDetailsDTO
    login: Optional[DefaultCredentialDTO] = Field(
        default=None,
        description="Generated login; None when an existing account was linked"
    )


class CustomerListResponseDTO(BaseModel):
    customers: List[CustomerDetailsDTO]
    count: int


class DeleteCustomerResultDTO(BaseModel):
    deleted_customer_id: int
    released_plots: List[str]
    deleted_payments: int
