"""CreatePayment Use Case

Records a payment for a customer and recomputes the customer's balance from
the full ledger inside the same transaction.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases import error_codes
from src.domain.financials import to_money, ZERO
from src.domain.payment import Payment, PaymentStatus
from .dtos import CreatePaymentCommandDTO, PaymentResultDTO
from .ledger import recompute_balance
from .mappers import to_financials_dto, to_payment_dto

logger = logging.getLogger(__name__)


class CreatePayment:
    """
    Use Case: Record a payment against a customer

    Business Rules:
    1. amount must be > 0 (checked before any write)
    2. Customer row locked (SELECT FOR UPDATE) so concurrent payments serialize
    3. Balance and status recomputed from initial deposit + all payments
    4. Payment insert and balance update committed together

    Flow:
    1. Validate amount
    2. Get customer with lock
    3. Insert payment
    4. Recompute and persist financials over the post-insert ledger
    5. Commit transaction
    6. Return payment with financials
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

    async def execute(self, command: CreatePaymentCommandDTO) -> Result[PaymentResultDTO]:
        """
        Execute payment creation

        Args:
            command: CreatePaymentCommandDTO with customer_id, amount, payment_date

        Returns:
            Result[PaymentResultDTO]: Success with payment and financials or error
        """
        # Step 1: Validate amount before opening any write
        if to_money(command.amount) <= ZERO:
            return Return.err(error_codes.invalid_amount(command.amount))

        try:
            # Step 2: Get customer with pessimistic lock
            customer = await self.customer_repo.get_by_id(command.customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", command.customer_id)
                )

            # Step 3: Insert payment
            payment = await self.payment_repo.create(
                Payment(
                    customer_id=customer.id,
                    amount=to_money(command.amount),
                    payment_date=command.payment_date,
                    note=command.note,
                    recorded_by=command.recorded_by,
                    status=PaymentStatus.RECORDED,
                    plot_id=command.plot_id,
                    payment_method=command.payment_method,
                )
            )

            # Step 4: Recompute over the ledger that now includes the payment
            customer, financials = await recompute_balance(customer, self.customer_repo, self.payment_repo)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Recorded payment {payment.id} of {payment.amount} for customer {customer.id}; "
                f"balance={financials.balance} status={financials.status.value}"
            )

            # Step 6: Build response
            return Return.ok(
                PaymentResultDTO(
                    payment=to_payment_dto(payment, customer.name),
                    financials=to_financials_dto(customer, financials),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record payment for customer {command.customer_id}: {e}")
            return Return.err(error_codes.from_exception(e, "CREATE_PAYMENT_FAILED", "Failed to record payment"))
