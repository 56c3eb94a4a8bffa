"""Customer financials derived from the payment ledger

Pure functions, no I/O. Every coordinator that changes a customer's ledger,
deposit or price runs compute_financials over the full payment set and
persists the result before committing.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Optional
from src.domain.customer import CustomerStatus

ZERO = Decimal("0")
CENT = Decimal("0.01")


@dataclass(frozen=True)
class Financials:
    total_paid: Decimal
    balance: Decimal
    status: CustomerStatus


def to_money(value: Any) -> Decimal:
    """Coerce a stored or submitted amount to Decimal; anything non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def next_status(balance: Decimal, previous_status: Optional[CustomerStatus]) -> CustomerStatus:
    """
    Status transition for a recomputed balance

    A settled balance always completes the customer. An outstanding balance
    reopens a Completed customer and otherwise keeps the previous status
    (Active for new records).
    """
    if balance <= ZERO:
        return CustomerStatus.COMPLETED
    if previous_status is None or previous_status == CustomerStatus.COMPLETED:
        return CustomerStatus.ACTIVE
    return previous_status


def sum_payments(payments: Iterable[Any]) -> Decimal:
    """Sum payment amounts; accepts Payment entities or raw amounts."""
    total = ZERO
    for payment in payments:
        total += to_money(getattr(payment, "amount", payment))
    return total


def compute_financials(
    customer: Any,
    payments: Iterable[Any],
    previous_status: Optional[CustomerStatus] = None,
) -> Financials:
    """
    Derive total paid, balance and status for a customer

    Args:
        customer: Object exposing total_price and initial_deposit
        payments: The customer's full payment set (entities or amounts)
        previous_status: Status before this recomputation (None for new records)

    Returns:
        Financials with balance = max(0, total_price - total_paid)
    """
    total_paid = to_money(customer.initial_deposit) + sum_payments(payments)
    balance = max(ZERO, to_money(customer.total_price) - total_paid)
    return Financials(
        total_paid=total_paid,
        balance=balance,
        status=next_status(balance, previous_status),
    )


def total_price_for(plot_count: int, prices: Iterable[Any]) -> Decimal:
    """Sum the first plot_count per-plot prices (non-numeric prices count as 0)."""
    total = ZERO
    for index, price in enumerate(prices):
        if index >= plot_count:
            break
        total += to_money(price)
    return total


def payment_progress(total_paid: Decimal, total_price: Any) -> Decimal:
    """Percentage of the total price paid so far, capped at 100."""
    price = to_money(total_price)
    if price <= ZERO:
        return Decimal("100.00")
    progress = min(Decimal("100"), total_paid / price * Decimal("100"))
    return progress.quantize(CENT, rounding=ROUND_HALF_UP)
