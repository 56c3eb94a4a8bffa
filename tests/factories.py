"""Entity builders shared by unit tests"""

from datetime import date, datetime
from decimal import Decimal

from src.domain.customer import Customer, CustomerStatus
from src.domain.payment import Payment, PaymentStatus
from src.domain.payment_request import PaymentRequest, PaymentRequestStatus
from src.domain.plot import Plot, PlotStatus
from src.domain.subscription import Subscription, SubscriptionStatus


def make_customer(customer_id=1, total_price="5000", initial_deposit="1000", balance=None, **kwargs):
    total_price, initial_deposit = Decimal(total_price), Decimal(initial_deposit)
    return Customer(
        id=customer_id,
        name=kwargs.pop("name", "Amina Bello"),
        email=kwargs.pop("email", "amina@example.com"),
        contact=kwargs.pop("contact", "08030000000"),
        total_price=total_price,
        initial_deposit=initial_deposit,
        balance=Decimal(balance) if balance is not None else total_price - initial_deposit,
        status=kwargs.pop("status", CustomerStatus.ACTIVE),
        plots_held=kwargs.pop("plots_held", []),
        price_per_plot=kwargs.pop("price_per_plot", []),
        created_at=datetime(2024, 1, 1),
        **kwargs,
    )


def make_payment(payment_id, amount, customer_id=1, status=PaymentStatus.RECORDED):
    return Payment(
        id=payment_id,
        customer_id=customer_id,
        amount=Decimal(amount),
        payment_date=date(2024, 2, payment_id % 28 + 1),
        status=status,
        created_at=datetime(2024, 2, 1),
    )


def make_request(request_id=1, amount="1500", customer_id=1, status=PaymentRequestStatus.PENDING, plot_id=None):
    return PaymentRequest(
        id=request_id,
        customer_id=customer_id,
        plot_id=plot_id,
        amount=Decimal(amount),
        payment_method="bank_transfer",
        transaction_date=datetime(2024, 3, 20, 9, 30),
        status=status,
        created_at=datetime(2024, 3, 20),
    )


def make_plot(plot_id, number=None, status=PlotStatus.AVAILABLE, owner=None, price="0"):
    return Plot(
        id=plot_id,
        number=number or f"A-{plot_id}",
        status=status,
        owner=owner,
        price=Decimal(price),
        created_at=datetime(2024, 1, 1),
    )


def make_subscription(subscription_id=1, plot_ids=(1, 2), status=SubscriptionStatus.PENDING):
    return Subscription(
        id=subscription_id,
        name="Amina Bello",
        email="amina@example.com",
        status=status,
        plot_ids=list(plot_ids),
        plot_id=plot_ids[0] if plot_ids else None,
        price=Decimal("9000"),
        price_per_plot=["4500", "4500"],
        created_at=datetime(2024, 1, 1),
    )


async def created(entity, new_id=100):
    """side_effect for repo.create mocks: assigns an id like a flush would"""
    if entity.id is None:
        entity.id = new_id
    if getattr(entity, "created_at", None) is None:
        entity.created_at = datetime.utcnow()
    return entity


async def returned(entity, *args):
    return entity


async def apply_financials(customer, financials):
    """side_effect for customer_repo.update_financials mocks"""
    customer.balance = financials.balance
    customer.status = financials.status
    return customer
