"""Customer detail assembly shared by the customer use cases"""

from typing import List, Tuple
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases.payments.mappers import to_payment_dto
from src.domain.customer import Customer, CustomerStatus
from src.domain.financials import Financials, compute_financials, payment_progress, sum_payments, to_money
from src.domain.payment import Payment
from .dtos import CustomerDetailsDTO


def to_details_dto(customer: Customer, payments: List[Payment], financials: Financials) -> CustomerDetailsDTO:
    return CustomerDetailsDTO(
        id=customer.id,
        account_id=customer.account_id,
        name=customer.name,
        email=customer.email,
        contact=customer.contact,
        plots_held=list(customer.plots_held or []),
        price_per_plot=list(customer.price_per_plot or []),
        date_taken=customer.date_taken,
        payment_schedule=customer.payment_schedule,
        plot_size=customer.plot_size,
        location=customer.location,
        initial_deposit=customer.initial_deposit,
        total_price=customer.total_price,
        balance=financials.balance,
        status=financials.status.value,
        total_paid=financials.total_paid,
        total_subsequent_payments=sum_payments(payments),
        remaining_balance=financials.balance,
        is_completed=financials.status == CustomerStatus.COMPLETED,
        payment_progress=payment_progress(financials.total_paid, customer.total_price),
        payments=[to_payment_dto(p, customer.name) for p in payments],
        created_at=customer.created_at,
    )


async def load_details(
    customer: Customer,
    customer_repo: CustomerRepository,
    payment_repo: PaymentRepository,
) -> Tuple[CustomerDetailsDTO, bool]:
    """
    Recompute a customer's financials and correct stored values that drifted

    Returns:
        The details DTO and whether the stored balance/status were rewritten
        (the caller commits)
    """
    payments = await payment_repo.list_by_customer(customer.id)
    financials = compute_financials(customer, payments, previous_status=customer.status)

    drifted = to_money(customer.balance) != financials.balance or customer.status != financials.status
    if drifted:
        customer = await customer_repo.update_financials(customer, financials)

    return to_details_dto(customer, payments, financials), drifted
