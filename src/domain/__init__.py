from .base import BaseModel
from .account import AuthenticationAccount, AccountRole
from .customer import Customer, CustomerStatus
from .payment import Payment, PaymentStatus
from .payment_request import PaymentRequest, PaymentRequestStatus, RejectedPayment
from .plot import Plot, PlotStatus
from .subscription import Subscription, SubscriptionStatus

__all__ = [
    "BaseModel",
    "AuthenticationAccount",
    "AccountRole",
    "Customer",
    "CustomerStatus",
    "Payment",
    "PaymentStatus",
    "PaymentRequest",
    "PaymentRequestStatus",
    "RejectedPayment",
    "Plot",
    "PlotStatus",
    "Subscription",
    "SubscriptionStatus",
]
