"""Payment query use cases (read-only)"""

from libs.result import Result, Return
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases import error_codes
from .dtos import PaymentDTO, PaymentListResponseDTO
from .mappers import to_payment_dto


class GetPayment:
    """Use Case: Retrieve one payment with its customer's name"""

    def __init__(self, customer_repo: CustomerRepository, payment_repo: PaymentRepository):
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self, payment_id: int) -> Result[PaymentDTO]:
        try:
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                return Return.err(error_codes.not_found(error_codes.PAYMENT_NOT_FOUND, "Payment", payment_id))

            customer = await self.customer_repo.get_by_id(payment.customer_id)
            return Return.ok(to_payment_dto(payment, customer.name if customer else None))

        except Exception as e:
            return Return.err(error_codes.from_exception(e, "GET_PAYMENT_FAILED", "Failed to retrieve payment"))


class ListCustomerPayments:
    """
    Use Case: List a customer's payments, newest payment date first

    Fails with CUSTOMER_NOT_FOUND when the customer does not exist, so an
    empty list always means "no payments yet".
    """

    def __init__(self, customer_repo: CustomerRepository, payment_repo: PaymentRepository):
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self, customer_id: int) -> Result[PaymentListResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", customer_id))

            payments = await self.payment_repo.list_by_customer(customer_id)
            return Return.ok(
                PaymentListResponseDTO(
                    payments=[to_payment_dto(p, customer.name) for p in payments],
                    count=len(payments),
                )
            )

        except Exception as e:
            return Return.err(error_codes.from_exception(e, "LIST_PAYMENTS_FAILED", "Failed to list payments"))


class ListPayments:
    """Use Case: List every payment with the name of its customer"""

    def __init__(self, customer_repo: CustomerRepository, payment_repo: PaymentRepository):
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self) -> Result[PaymentListResponseDTO]:
        try:
            payments = await self.payment_repo.list_all()
            names = {c.id: c.name for c in await self.customer_repo.list_all()}
            return Return.ok(
                PaymentListResponseDTO(
                    payments=[to_payment_dto(p, names.get(p.customer_id)) for p in payments],
                    count=len(payments),
                )
            )

        except Exception as e:
            return Return.err(error_codes.from_exception(e, "LIST_PAYMENTS_FAILED", "Failed to list payments"))
