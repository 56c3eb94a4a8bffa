"""DeletePayment Use Case

Removes a payment and recomputes the balance as if it had never existed.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases import error_codes
from .dtos import DeletePaymentResultDTO
from .ledger import recompute_balance
from .mappers import to_financials_dto

logger = logging.getLogger(__name__)


class DeletePayment:
    """
    Use Case: Delete a payment

    Flow:
    1. Find payment (NotFound if absent) and lock its customer
    2. Lock payment
    3. Delete payment
    4. Recompute and persist financials over the remaining ledger
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self, payment_id: int) -> Result[DeletePaymentResultDTO]:
        try:
            # Step 1: Find the payment, then lock its customer before the payment row
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                await self.uow.rollback()
                return Return.err(error_codes.not_found(error_codes.PAYMENT_NOT_FOUND, "Payment", payment_id))

            customer = await self.customer_repo.get_by_id(payment.customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", payment.customer_id)
                )

            # Step 2: Lock the payment
            payment = await self.payment_repo.get_by_id(payment_id, for_update=True)
            if not payment:
                await self.uow.rollback()
                return Return.err(error_codes.not_found(error_codes.PAYMENT_NOT_FOUND, "Payment", payment_id))

            # Step 3: Delete payment
            await self.payment_repo.delete(payment)

            # Step 4: Recompute over the remaining ledger
            customer, financials = await recompute_balance(customer, self.customer_repo, self.payment_repo)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Deleted payment {payment_id} of customer {customer.id}; balance={financials.balance}"
            )

            return Return.ok(
                DeletePaymentResultDTO(
                    deleted_payment_id=payment_id,
                    financials=to_financials_dto(customer, financials),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete payment {payment_id}: {e}")
            return Return.err(error_codes.from_exception(e, "DELETE_PAYMENT_FAILED", "Failed to delete payment"))
