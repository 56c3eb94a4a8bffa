from .account_repository import AccountRepository
from .customer_repository import CustomerRepository
from .payment_repository import PaymentRepository
from .payment_request_repository import PaymentRequestRepository
from .plot_repository import PlotRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "AccountRepository",
    "CustomerRepository",
    "PaymentRepository",
    "PaymentRequestRepository",
    "PlotRepository",
    "SubscriptionRepository",
]
