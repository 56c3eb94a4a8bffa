"""RejectPaymentRequest Use Case

Rejects a pending payment request. The ledger is untouched; an audit copy of
the request is written on a best-effort basis.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_request_repository import PaymentRequestRepository
from src.app.use_cases import error_codes
from src.domain.payment_request import PaymentRequestStatus, RejectedPayment
from .dtos import RejectPaymentRequestCommandDTO, PaymentRequestDTO
from .mappers import to_request_dto

logger = logging.getLogger(__name__)


class RejectPaymentRequest:
    """
    Use Case: Reject a pending payment request

    Business Rules:
    1. Only pending requests can be rejected (Conflict otherwise, no change)
    2. No balance effect
    3. A failed audit insert is logged and does not fail the rejection
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        request_repo: PaymentRequestRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.request_repo = request_repo

    async def execute(self, command: RejectPaymentRequestCommandDTO) -> Result[PaymentRequestDTO]:
        try:
            # Step 1: Get request with lock
            request = await self.request_repo.get_by_id(command.request_id, for_update=True)
            if not request:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.PAYMENT_REQUEST_NOT_FOUND, "Payment request", command.request_id)
                )

            # Step 2: Check request is pending
            if request.status != PaymentRequestStatus.PENDING:
                await self.uow.rollback()
                logger.warning(f"Refused to reject payment request {request.id}: already {request.status.value}")
                return Return.err(
                    Error(
                        code=error_codes.REQUEST_NOT_PENDING,
                        message=f"Payment request {request.id} is already {request.status.value}",
                        reason="Only pending requests can be rejected",
                    )
                )

            # Step 3: Mark request rejected
            request.status = PaymentRequestStatus.REJECTED
            request.rejection_reason = command.reason
            request.updated_at = datetime.utcnow()
            request = await self.request_repo.update(request)

            # Step 4: Audit copy (best effort)
            try:
                await self.request_repo.add_rejection_audit(
                    RejectedPayment(
                        payment_request_id=request.id,
                        customer_id=request.customer_id,
                        plot_id=request.plot_id,
                        amount=request.amount,
                        payment_method=request.payment_method,
                        transaction_date=request.transaction_date,
                        notes=request.notes,
                        receipt_ref=request.receipt_ref,
                        rejection_reason=command.reason,
                    )
                )
            except SQLAlchemyError as audit_error:
                logger.warning(f"Rejection audit for payment request {request.id} not recorded: {audit_error}")

            customer = await self.customer_repo.get_by_id(request.customer_id)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(f"Rejected payment request {request.id}")
            return Return.ok(to_request_dto(request, customer))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to reject payment request {command.request_id}: {e}")
            return Return.err(
                error_codes.from_exception(e, "REJECT_PAYMENT_REQUEST_FAILED", "Failed to reject payment request")
            )
