"""SubmitPaymentRequest Use Case

Stores a customer-submitted payment (with optional receipt) for admin review.
The request has no effect on the ledger until it is approved.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.blob_store import BlobStore, Upload
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_request_repository import PaymentRequestRepository
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.financials import to_money, ZERO
from src.domain.payment_request import PaymentRequest, PaymentRequestStatus
from .dtos import SubmitPaymentRequestCommandDTO, PaymentRequestDTO
from .mappers import to_request_dto

logger = logging.getLogger(__name__)

RECEIPTS = "receipts"


class SubmitPaymentRequest:
    """
    Use Case: Submit a payment for approval

    Business Rules:
    1. amount must be > 0
    2. Customer must exist; a referenced plot must exist
    3. payment_method defaults to bank_transfer, transaction_date to now
    4. Receipt is written to the blob store; only its reference is persisted
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        plot_repo: PlotRepository,
        request_repo: PaymentRequestRepository,
        blob_store: BlobStore,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.plot_repo = plot_repo
        self.request_repo = request_repo
        self.blob_store = blob_store

    async def execute(
        self,
        command: SubmitPaymentRequestCommandDTO,
        receipt: Optional[Upload] = None,
    ) -> Result[PaymentRequestDTO]:
        if to_money(command.amount) <= ZERO:
            return Return.err(error_codes.invalid_amount(command.amount))

        try:
            # Step 1: Check customer and plot references
            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer:
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", command.customer_id)
                )

            plot = None
            if command.plot_id is not None:
                plot = await self.plot_repo.get_by_id(command.plot_id)
                if not plot:
                    return Return.err(error_codes.not_found(error_codes.PLOT_NOT_FOUND, "Plot", command.plot_id))

            # Step 2: Store receipt
            receipt_ref = await self.blob_store.store_upload(RECEIPTS, receipt)

            # Step 3: Create pending request
            request = await self.request_repo.create(
                PaymentRequest(
                    customer_id=customer.id,
                    plot_id=command.plot_id,
                    amount=to_money(command.amount),
                    payment_method=command.payment_method or "bank_transfer",
                    transaction_date=command.transaction_date or datetime.utcnow(),
                    notes=command.notes,
                    receipt_ref=receipt_ref,
                    status=PaymentRequestStatus.PENDING,
                )
            )

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(f"Payment request {request.id} of {request.amount} submitted by customer {customer.id}")
            return Return.ok(to_request_dto(request, customer, plot))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to submit payment request for customer {command.customer_id}: {e}")
            return Return.err(
                error_codes.from_exception(e, "SUBMIT_PAYMENT_REQUEST_FAILED", "Failed to submit payment request")
            )
