from .account_repository import SqlAlchemyAccountRepository
from .customer_repository import SqlAlchemyCustomerRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .payment_request_repository import SqlAlchemyPaymentRequestRepository
from .plot_repository import SqlAlchemyPlotRepository
from .subscription_repository import SqlAlchemySubscriptionRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyPaymentRequestRepository",
    "SqlAlchemyPlotRepository",
    "SqlAlchemySubscriptionRepository",
]
