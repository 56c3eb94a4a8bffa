"""Payment ledger use cases"""
from .create_payment import CreatePayment
from .update_payment import UpdatePayment
from .delete_payment import DeletePayment
from .list_payments import GetPayment, ListCustomerPayments, ListPayments
from .submit_payment_request import SubmitPaymentRequest
from .approve_payment_request import ApprovePaymentRequest
from .reject_payment_request import RejectPaymentRequest
from .list_payment_requests import ListPaymentRequests, ListCustomerPaymentRequests, GetPaymentRequest
from .reconcile_balances import ReconcileBalances
from .dtos import (
    CreatePaymentCommandDTO,
    UpdatePaymentCommandDTO,
    CustomerFinancialsDTO,
    PaymentDTO,
    PaymentResultDTO,
    DeletePaymentResultDTO,
    PaymentListResponseDTO,
    SubmitPaymentRequestCommandDTO,
    PaymentRequestDTO,
    PaymentRequestListResponseDTO,
    ApprovePaymentRequestCommandDTO,
    ApprovePaymentRequestResultDTO,
    RejectPaymentRequestCommandDTO,
    BalanceDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "CreatePayment",
    "UpdatePayment",
    "DeletePayment",
    "GetPayment",
    "ListCustomerPayments",
    "ListPayments",
    "SubmitPaymentRequest",
    "ApprovePaymentRequest",
    "RejectPaymentRequest",
    "ListPaymentRequests",
    "ListCustomerPaymentRequests",
    "GetPaymentRequest",
    "ReconcileBalances",
    "CreatePaymentCommandDTO",
    "UpdatePaymentCommandDTO",
    "CustomerFinancialsDTO",
    "PaymentDTO",
    "PaymentResultDTO",
    "DeletePaymentResultDTO",
    "PaymentListResponseDTO",
    "SubmitPaymentRequestCommandDTO",
    "PaymentRequestDTO",
    "PaymentRequestListResponseDTO",
    "ApprovePaymentRequestCommandDTO",
    "ApprovePaymentRequestResultDTO",
    "RejectPaymentRequestCommandDTO",
    "BalanceDiscrepancyDTO",
    "ReconciliationResultDTO",
]
