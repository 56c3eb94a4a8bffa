"""Balance recomputation step shared by every ledger mutation"""

from typing import List, Optional, Tuple
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.customer import Customer
from src.domain.financials import Financials, compute_financials
from src.domain.payment import Payment


async def recompute_balance(
    customer: Customer,
    customer_repo: CustomerRepository,
    payment_repo: PaymentRepository,
    payments: Optional[List[Payment]] = None,
) -> Tuple[Customer, Financials]:
    """
    Recompute a customer's financials from the full ledger and persist them

    The ledger is read after the triggering write so it includes it. Pass
    payments only when the caller already holds the post-write ledger.

    Returns:
        The updated customer and the financials that were stored on it
    """
    if payments is None:
        payments = await payment_repo.list_by_customer(customer.id)
    financials = compute_financials(customer, payments, previous_status=customer.status)
    customer = await customer_repo.update_financials(customer, financials)
    return customer, financials
