"""Data Transfer Objects for Payment Use Cases

Pydantic models for command inputs and response outputs of the payment
ledger, payment requests and balance reconciliation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class CreatePaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment

    Used as input to CreatePayment use case. The amount is validated by the
    use case (must be > 0) so non-HTTP callers get the same rule.
    """

    customer_id: int = Field(..., description="Customer the payment belongs to")

    amount: Decimal = Field(..., description="Amount paid (must be > 0)")

    payment_date: date = Field(
        default_factory=date.today,
        description="Date the money was received"
    )

    note: Optional[str] = Field(default=None)

    recorded_by: Optional[str] = Field(
        default=None,
        description="Email or name of the admin entering the payment"
    )

    plot_id: Optional[int] = Field(default=None)

    payment_method: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 7,
                "amount": "2000.00",
                "payment_date": "2024-03-15",
                "note": "Second installment",
                "recorded_by": "admin@example.com",
            }
        }


class UpdatePaymentCommandDTO(BaseModel):
    """
    Command DTO for correcting a payment

    Fields left as None are not changed.
    """

    payment_id: int

    amount: Optional[Decimal] = Field(default=None, description="New amount (must be > 0)")

    payment_date: Optional[date] = None

    note: Optional[str] = None

    plot_id: Optional[int] = None

    payment_method: Optional[str] = None


class CustomerFinancialsDTO(BaseModel):
    """Customer balance after a ledger change"""

    customer_id: int
    total_price: Decimal
    initial_deposit: Decimal
    total_paid: Decimal
    balance: Decimal
    status: str


class PaymentDTO(BaseModel):
    """Single payment ledger entry"""

    id: int
    customer_id: int
    customer_name: Optional[str] = None
    amount: Decimal
    payment_date: date
    note: Optional[str] = None
    recorded_by: Optional[str] = None
    status: str
    plot_id: Optional[int] = None
    payment_method: Optional[str] = None
    receipt_ref: Optional[str] = None
    payment_request_id: Optional[int] = None
    created_at: datetime


class PaymentResultDTO(BaseModel):
    """
    Response DTO for payment mutations

    The payment together with the customer's recomputed financials.
    """

    payment: PaymentDTO
    financials: CustomerFinancialsDTO


class DeletePaymentResultDTO(BaseModel):
    deleted_payment_id: int
    financials: CustomerFinancialsDTO


class PaymentListResponseDTO(BaseModel):
    payments: List[PaymentDTO]
    count: int


class SubmitPaymentRequestCommandDTO(BaseModel):
    """
    Command DTO for a customer-submitted payment awaiting approval

    Used as input to SubmitPaymentRequest use case.
    """

    customer_id: int = Field(..., description="Customer submitting the payment")

    amount: Decimal = Field(..., description="Amount paid (must be > 0)")

    plot_id: Optional[int] = Field(default=None, description="Plot the payment is for")

    payment_method: str = Field(default="bank_transfer")

    transaction_date: Optional[datetime] = Field(
        default=None,
        description="When the transfer was made (defaults to now)"
    )

    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 7,
                "amount": "1500.00",
                "plot_id": 49,
                "payment_method": "bank_transfer",
                "transaction_date": "2024-03-20T09:30:00",
                "notes": "Transfer from GTBank",
            }
        }


class PaymentRequestDTO(BaseModel):
    """Payment request with the customer and plot it refers to"""

    id: int
    customer_id: int
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    plot_id: Optional[int] = None
    plot_number: Optional[str] = None
    amount: Decimal
    payment_method: str
    transaction_date: datetime
    notes: Optional[str] = None
    receipt_ref: Optional[str] = None
    status: str
    rejection_reason: Optional[str] = None
    payment_id: Optional[int] = None
    created_at: datetime


class PaymentRequestListResponseDTO(BaseModel):
    requests: List[PaymentRequestDTO]
    count: int


class ApprovePaymentRequestCommandDTO(BaseModel):
    request_id: int
    approved_by: Optional[str] = Field(default=None, description="Admin approving the request")


class ApprovePaymentRequestResultDTO(BaseModel):
    """
    Response DTO for an approved payment request

    Includes the payment materialized from the request and the customer's
    recomputed financials.
    """

    request: PaymentRequestDTO
    payment: PaymentDTO
    financials: CustomerFinancialsDTO


class RejectPaymentRequestCommandDTO(BaseModel):
    request_id: int
    reason: Optional[str] = Field(default=None, description="Why the payment was rejected")


class BalanceDiscrepancyDTO(BaseModel):
    """Stored customer balance that differs from the ledger"""

    customer_id: int
    customer_name: str
    stored_balance: Decimal
    computed_balance: Decimal
    stored_status: str
    computed_status: str


class ReconciliationResultDTO(BaseModel):
    """
    Response DTO for balance reconciliation

    Lists every customer whose stored balance or status differed from the
    value recomputed from the ledger.
    """

    total_customers_checked: int
    discrepancies_found: int
    corrected: bool
    discrepancies: List[BalanceDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
