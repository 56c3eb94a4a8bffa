"""Payment request query use cases (read-only)"""

from typing import List, Optional
from libs.result import Result, Return
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_request_repository import PaymentRequestRepository
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.payment_request import PaymentRequest, PaymentRequestStatus
from .dtos import PaymentRequestDTO, PaymentRequestListResponseDTO
from .mappers import to_request_dto


class _RequestReader:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        plot_repo: PlotRepository,
        request_repo: PaymentRequestRepository,
    ):
        self.customer_repo = customer_repo
        self.plot_repo = plot_repo
        self.request_repo = request_repo

    async def _to_dtos(self, requests: List[PaymentRequest]) -> List[PaymentRequestDTO]:
        customers = {c.id: c for c in await self.customer_repo.list_all()}
        plot_ids = [r.plot_id for r in requests if r.plot_id is not None]
        plots = {p.id: p for p in await self.plot_repo.get_by_ids(plot_ids)}
        return [
            to_request_dto(r, customers.get(r.customer_id), plots.get(r.plot_id))
            for r in requests
        ]


class ListPaymentRequests(_RequestReader):
    """Use Case: List all payment requests, optionally by status"""

    async def execute(self, status: Optional[PaymentRequestStatus] = None) -> Result[PaymentRequestListResponseDTO]:
        try:
            requests = await self.request_repo.list_all(status)
            dtos = await self._to_dtos(requests)
            return Return.ok(PaymentRequestListResponseDTO(requests=dtos, count=len(dtos)))
        except Exception as e:
            return Return.err(
                error_codes.from_exception(e, "LIST_PAYMENT_REQUESTS_FAILED", "Failed to list payment requests")
            )


class ListCustomerPaymentRequests(_RequestReader):
    """Use Case: List the payment requests of one customer, newest first"""

    async def execute(self, customer_id: int) -> Result[PaymentRequestListResponseDTO]:
        try:
            requests = await self.request_repo.list_by_customer(customer_id)
            dtos = await self._to_dtos(requests)
            return Return.ok(PaymentRequestListResponseDTO(requests=dtos, count=len(dtos)))
        except Exception as e:
            return Return.err(
                error_codes.from_exception(e, "LIST_PAYMENT_REQUESTS_FAILED", "Failed to list payment requests")
            )


class GetPaymentRequest(_RequestReader):
    """
    Use Case: Retrieve one payment request

    When customer_id is given the request must belong to that customer;
    otherwise it is reported as not found.
    """

    async def execute(self, request_id: int, customer_id: Optional[int] = None) -> Result[PaymentRequestDTO]:
        try:
            request = await self.request_repo.get_by_id(request_id)
            if not request or (customer_id is not None and request.customer_id != customer_id):
                return Return.err(
                    error_codes.not_found(error_codes.PAYMENT_REQUEST_NOT_FOUND, "Payment request", request_id)
                )

            customer = await self.customer_repo.get_by_id(request.customer_id)
            plot = await self.plot_repo.get_by_id(request.plot_id) if request.plot_id is not None else None
            return Return.ok(to_request_dto(request, customer, plot))
        except Exception as e:
            return Return.err(
                error_codes.from_exception(e, "GET_PAYMENT_REQUEST_FAILED", "Failed to retrieve payment request")
            )
