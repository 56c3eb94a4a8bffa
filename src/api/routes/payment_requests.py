"""Payment request API Routes

Customers submit payments (with an optional receipt) for approval;
administrators review, approve or reject them. Approval materializes a
payment and recomputes the customer's balance.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.api.error import ClientError
from src.api.forms import form_model
from src.api.uploads import to_upload
from src.api.schemas.envelope import SuccessResponse, ok
from src.api.schemas.payment_request import RejectRequestSchema, SubmitPaymentFormSchema
from src.app.services.authenticator import Identity
from src.app.services.blob_store import BlobStore
from src.app.use_cases import error_codes
from src.app.use_cases.payments import (
    ApprovePaymentRequest,
    GetPaymentRequest,
    ListCustomerPaymentRequests,
    ListPaymentRequests,
    RejectPaymentRequest,
    SubmitPaymentRequest,
    ApprovePaymentRequestCommandDTO,
    ApprovePaymentRequestResultDTO,
    PaymentRequestDTO,
    PaymentRequestListResponseDTO,
    RejectPaymentRequestCommandDTO,
    SubmitPaymentRequestCommandDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyPaymentRequestRepository,
    SqlAlchemyPlotRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_blob_store, get_current_identity, get_session, require_admin, require_customer
from src.domain.account import AccountRole
from src.domain.payment_request import PaymentRequestStatus

router = APIRouter(prefix="/user-payments", tags=["Payment Requests"])
admin_router = APIRouter(prefix="/admin/payment-requests", tags=["Payment Requests"])


async def own_customer_id(session: AsyncSession, identity: Identity) -> int:
    """Customer record linked to the caller's account."""
    customer = await SqlAlchemyCustomerRepository(session).get_by_account_id(identity.account_id)
    if not customer:
        raise ClientError(
            Error(
                code=error_codes.CUSTOMER_NOT_FOUND,
                message="No customer record is linked to this account",
            )
        )
    return customer.id


def _reader(reader_cls, session: AsyncSession):
    return reader_cls(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPlotRepository(session),
        SqlAlchemyPaymentRequestRepository(session),
    )


@router.post("", response_model=SuccessResponse[PaymentRequestDTO], status_code=status.HTTP_201_CREATED)
async def submit_payment_request(
    form: SubmitPaymentFormSchema = Depends(form_model(SubmitPaymentFormSchema)),
    receipt: Optional[UploadFile] = File(default=None),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """
    Submit a payment for approval (multipart/form-data).

    **Form fields:**
    - `amount` (required): must be > 0
    - `plot_id`, `transaction_date`, `notes` (optional)
    - `payment_method`: defaults to `bank_transfer`
    - `customer_id`: only read when an administrator submits on a customer's behalf
    - `receipt` (file, optional)

    **Returns:**
    - 201: Request recorded as pending
    - 404: Customer or plot not found
    """
    if identity.role == AccountRole.CUSTOMER:
        customer_id = await own_customer_id(session, identity)
    elif form.customer_id is not None:
        customer_id = form.customer_id
    else:
        raise ClientError(Error(code=error_codes.VALIDATION_ERROR, message="customer_id is required"))

    use_case = SubmitPaymentRequest(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPlotRepository(session),
        SqlAlchemyPaymentRequestRepository(session),
        blob_store,
    )
    command = SubmitPaymentRequestCommandDTO(
        customer_id=customer_id,
        **form.model_dump(exclude={"customer_id"}, exclude_none=True),
    )
    result = await use_case.execute(command, receipt=to_upload(receipt))
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Payment submitted successfully")


@router.get("/mine", response_model=SuccessResponse[PaymentRequestListResponseDTO])
async def list_my_payment_requests(
    identity: Identity = Depends(require_customer),
    session: AsyncSession = Depends(get_session),
):
    customer_id = await own_customer_id(session, identity)
    result = await _reader(ListCustomerPaymentRequests, session).execute(customer_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.get("/mine/{request_id}", response_model=SuccessResponse[PaymentRequestDTO])
async def get_my_payment_request(
    request_id: int,
    identity: Identity = Depends(require_customer),
    session: AsyncSession = Depends(get_session),
):
    customer_id = await own_customer_id(session, identity)
    result = await _reader(GetPaymentRequest, session).execute(request_id, customer_id=customer_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@admin_router.get("", response_model=SuccessResponse[PaymentRequestListResponseDTO])
async def list_payment_requests(
    status: Optional[PaymentRequestStatus] = None,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """All payment requests, newest first, optionally filtered by status."""
    result = await _reader(ListPaymentRequests, session).execute(status)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@admin_router.get("/user/{customer_id}", response_model=SuccessResponse[PaymentRequestListResponseDTO])
async def list_customer_payment_requests(
    customer_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    result = await _reader(ListCustomerPaymentRequests, session).execute(customer_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@admin_router.get("/{request_id}", response_model=SuccessResponse[PaymentRequestDTO])
async def get_payment_request(
    request_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    result = await _reader(GetPaymentRequest, session).execute(request_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@admin_router.put(
    "/{request_id}/approve",
    response_model=SuccessResponse[ApprovePaymentRequestResultDTO],
    responses={
        409: {
            "description": "Request already approved or rejected",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Payment request 12 is already approved",
                        "error": {
                            "code": "REQUEST_NOT_PENDING",
                            "message": "Payment request 12 is already approved",
                            "reason": None,
                        },
                    }
                }
            },
        }
    },
)
async def approve_payment_request(
    request_id: int,
    identity: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """
    Approve a pending payment request.

    **Returns:**
    - 200: Request approved, payment recorded, balance recomputed
    - 404: Request not found
    - 409: Request is not pending
    """
    use_case = ApprovePaymentRequest(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyPaymentRequestRepository(session),
        SqlAlchemyPlotRepository(session),
    )
    result = await use_case.execute(
        ApprovePaymentRequestCommandDTO(request_id=request_id, approved_by=identity.email)
    )
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Payment approved successfully")


@admin_router.put("/{request_id}/reject", response_model=SuccessResponse[PaymentRequestDTO])
async def reject_payment_request(
    request_id: int,
    request: Optional[RejectRequestSchema] = None,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Reject a pending payment request; the customer's ledger is unchanged."""
    use_case = RejectPaymentRequest(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRequestRepository(session),
    )
    reason = request.reason if request else None
    result = await use_case.execute(RejectPaymentRequestCommandDTO(request_id=request_id, reason=reason))
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Payment rejected")
