"""Entity to DTO conversion shared by the payment use cases"""

from typing import Optional
from src.domain.customer import Customer
from src.domain.financials import Financials
from src.domain.payment import Payment
from src.domain.payment_request import PaymentRequest
from src.domain.plot import Plot
from .dtos import CustomerFinancialsDTO, PaymentDTO, PaymentRequestDTO


def to_payment_dto(payment: Payment, customer_name: Optional[str] = None) -> PaymentDTO:
    return PaymentDTO(
        id=payment.id,
        customer_id=payment.customer_id,
        customer_name=customer_name,
        amount=payment.amount,
        payment_date=payment.payment_date,
        note=payment.note,
        recorded_by=payment.recorded_by,
        status=payment.status.value,
        plot_id=payment.plot_id,
        payment_method=payment.payment_method,
        receipt_ref=payment.receipt_ref,
        payment_request_id=payment.payment_request_id,
        created_at=payment.created_at,
    )


def to_financials_dto(customer: Customer, financials: Financials) -> CustomerFinancialsDTO:
    return CustomerFinancialsDTO(
        customer_id=customer.id,
        total_price=customer.total_price,
        initial_deposit=customer.initial_deposit,
        total_paid=financials.total_paid,
        balance=financials.balance,
        status=financials.status.value,
    )


def to_request_dto(
    request: PaymentRequest,
    customer: Optional[Customer] = None,
    plot: Optional[Plot] = None,
) -> PaymentRequestDTO:
    return PaymentRequestDTO(
        id=request.id,
        customer_id=request.customer_id,
        customer_name=customer.name if customer else None,
        customer_email=customer.email if customer else None,
        plot_id=request.plot_id,
        plot_number=plot.number if plot else None,
        amount=request.amount,
        payment_method=request.payment_method,
        transaction_date=request.transaction_date,
        notes=request.notes,
        receipt_ref=request.receipt_ref,
        status=request.status.value,
        rejection_reason=request.rejection_reason,
        payment_id=request.payment_id,
        created_at=request.created_at,
    )
