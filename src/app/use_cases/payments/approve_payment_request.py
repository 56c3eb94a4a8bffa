"""ApprovePaymentRequest Use Case

Turns a pending payment request into a ledger payment and recomputes the
customer's balance from the full ledger.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.payment_request_repository import PaymentRequestRepository
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.payment import Payment, PaymentStatus
from src.domain.payment_request import PaymentRequestStatus
from .dtos import ApprovePaymentRequestCommandDTO, ApprovePaymentRequestResultDTO
from .ledger import recompute_balance
from .mappers import to_financials_dto, to_payment_dto, to_request_dto

logger = logging.getLogger(__name__)


class ApprovePaymentRequest:
    """
    Use Case: Approve a pending payment request

    Business Rules:
    1. Only pending requests can be approved (Conflict otherwise, no change)
    2. Customer locked before the request row, the order every ledger
       write uses, so two concurrent approvals cannot both apply
    3. Approval materializes a Payment with status=approved
    4. Balance recomputed from the full ledger, never decremented in place

    Flow:
    1. Lock customer, then request
    2. Check request is pending
    3. Insert payment
    4. Mark request approved, link payment
    5. Recompute and persist financials
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
        request_repo: PaymentRequestRepository,
        plot_repo: PlotRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo
        self.request_repo = request_repo
        self.plot_repo = plot_repo

    async def execute(self, command: ApprovePaymentRequestCommandDTO) -> Result[ApprovePaymentRequestResultDTO]:
        try:
            # Step 1: Find the request, lock its customer, then lock the request
            request = await self.request_repo.get_by_id(command.request_id)
            if not request:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.PAYMENT_REQUEST_NOT_FOUND, "Payment request", command.request_id)
                )

            customer = await self.customer_repo.get_by_id(request.customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", request.customer_id)
                )

            request = await self.request_repo.get_by_id(command.request_id, for_update=True)
            if not request:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.PAYMENT_REQUEST_NOT_FOUND, "Payment request", command.request_id)
                )

            # Step 2: A decided request is never decided again
            if request.status != PaymentRequestStatus.PENDING:
                await self.uow.rollback()
                logger.warning(f"Refused to approve payment request {request.id}: already {request.status.value}")
                return Return.err(
                    Error(
                        code=error_codes.REQUEST_NOT_PENDING,
                        message=f"Payment request {request.id} is already {request.status.value}",
                        reason="Only pending requests can be approved",
                    )
                )

            # Step 3: Materialize the payment
            payment = await self.payment_repo.create(
                Payment(
                    customer_id=customer.id,
                    amount=request.amount,
                    payment_date=request.transaction_date.date(),
                    note=request.notes,
                    recorded_by=command.approved_by,
                    status=PaymentStatus.APPROVED,
                    plot_id=request.plot_id,
                    payment_method=request.payment_method,
                    receipt_ref=request.receipt_ref,
                    payment_request_id=request.id,
                )
            )

            # Step 4: Mark request approved
            request.status = PaymentRequestStatus.APPROVED
            request.payment_id = payment.id
            request.updated_at = datetime.utcnow()
            request = await self.request_repo.update(request)

            # Step 5: Recompute over the ledger that now includes the payment
            customer, financials = await recompute_balance(customer, self.customer_repo, self.payment_repo)

            plot = await self.plot_repo.get_by_id(request.plot_id) if request.plot_id is not None else None

            # Step 6: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Approved payment request {request.id} as payment {payment.id}; "
                f"customer {customer.id} balance={financials.balance} status={financials.status.value}"
            )

            return Return.ok(
                ApprovePaymentRequestResultDTO(
                    request=to_request_dto(request, customer, plot),
                    payment=to_payment_dto(payment, customer.name),
                    financials=to_financials_dto(customer, financials),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to approve payment request {command.request_id}: {e}")
            return Return.err(
                error_codes.from_exception(e, "APPROVE_PAYMENT_REQUEST_FAILED", "Failed to approve payment request")
            )
