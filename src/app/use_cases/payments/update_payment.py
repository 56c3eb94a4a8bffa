"""UpdatePayment Use Case

Corrects a recorded payment and recomputes the owning customer's balance.
"""

import logging
from datetime import datetime
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases import error_codes
from src.domain.financials import to_money, ZERO
from .dtos import UpdatePaymentCommandDTO, PaymentResultDTO
from .ledger import recompute_balance
from .mappers import to_financials_dto, to_payment_dto

logger = logging.getLogger(__name__)


class UpdatePayment:
    """
    Use Case: Correct an existing payment

    Business Rules:
    1. A supplied amount must be > 0
    2. Only supplied fields change; the payment keeps its customer
    3. Balance recomputed over the customer's full, modified ledger
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

    async def execute(self, command: UpdatePaymentCommandDTO) -> Result[PaymentResultDTO]:
        if command.amount is not None and to_money(command.amount) <= ZERO:
            return Return.err(error_codes.invalid_amount(command.amount))

        try:
            # Step 1: Find the payment, then lock its customer before the payment row
            payment = await self.payment_repo.get_by_id(command.payment_id)
            if not payment:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.PAYMENT_NOT_FOUND, "Payment", command.payment_id)
                )

            customer = await self.customer_repo.get_by_id(payment.customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", payment.customer_id)
                )

            # Step 2: Lock the payment
            payment = await self.payment_repo.get_by_id(command.payment_id, for_update=True)
            if not payment:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.PAYMENT_NOT_FOUND, "Payment", command.payment_id)
                )

            # Step 3: Apply field changes
            if command.amount is not None:
                payment.amount = to_money(command.amount)
            if command.payment_date is not None:
                payment.payment_date = command.payment_date
            if command.note is not None:
                payment.note = command.note
            if command.plot_id is not None:
                payment.plot_id = command.plot_id
            if command.payment_method is not None:
                payment.payment_method = command.payment_method
            payment.updated_at = datetime.utcnow()
            payment = await self.payment_repo.update(payment)

            # Step 4: Recompute over the modified ledger
            customer, financials = await recompute_balance(customer, self.customer_repo, self.payment_repo)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Updated payment {payment.id} for customer {customer.id}; balance={financials.balance}"
            )

            return Return.ok(
                PaymentResultDTO(
                    payment=to_payment_dto(payment, customer.name),
                    financials=to_financials_dto(customer, financials),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update payment {command.payment_id}: {e}")
            return Return.err(error_codes.from_exception(e, "UPDATE_PAYMENT_FAILED", "Failed to update payment"))
