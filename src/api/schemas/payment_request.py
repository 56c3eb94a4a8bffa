"""Request schemas for payments and payment requests"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class CreatePaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /admin/payments endpoint.
    """

    customer_id: int = Field(..., description="Customer the payment belongs to")

    amount: Decimal = Field(..., gt=0, description="Amount paid (must be > 0)")

    payment_date: Optional[date] = Field(default=None, description="Defaults to today")

    note: Optional[str] = None

    plot_id: Optional[int] = None

    payment_method: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 7,
                "amount": "2000.00",
                "payment_date": "2024-03-15",
                "note": "Second installment",
            }
        }


class UpdatePaymentRequestSchema(BaseModel):
    amount: Optional[Decimal] = Field(default=None, gt=0)
    payment_date: Optional[date] = None
    note: Optional[str] = None
    plot_id: Optional[int] = None
    payment_method: Optional[str] = None


class SubmitPaymentFormSchema(BaseModel):
    """
    Form fields of a customer payment submission

    Sent as multipart/form-data together with an optional receipt file.
    customer_id is only read for admin callers; customers always submit for
    their own record.
    """

    customer_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0)
    plot_id: Optional[int] = None
    payment_method: str = Field(default="bank_transfer")
    transaction_date: Optional[datetime] = None
    notes: Optional[str] = None


class RejectRequestSchema(BaseModel):
    reason: Optional[str] = Field(default=None, description="Shown to the customer")
