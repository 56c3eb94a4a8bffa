"""Payment ledger API Routes

Admin-only recording, correction and removal of payments. Every mutation
returns the customer's recomputed balance and status.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.schemas.envelope import SuccessResponse, ok
from src.api.schemas.payment_request import CreatePaymentRequestSchema, UpdatePaymentRequestSchema
from src.app.services.authenticator import Identity
from src.app.use_cases.payments import (
    CreatePayment,
    DeletePayment,
    GetPayment,
    ListCustomerPayments,
    ListPayments,
    UpdatePayment,
    CreatePaymentCommandDTO,
    DeletePaymentResultDTO,
    PaymentDTO,
    PaymentListResponseDTO,
    PaymentResultDTO,
    UpdatePaymentCommandDTO,
)
from src.adapter.repositories import SqlAlchemyCustomerRepository, SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, require_admin

router = APIRouter(prefix="/admin/payments", tags=["Payments"])


@router.post(
    "",
    response_model=SuccessResponse[PaymentResultDTO],
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Customer not found",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Customer 7 not found",
                        "error": {"code": "CUSTOMER_NOT_FOUND", "message": "Customer 7 not found", "reason": None},
                    }
                }
            },
        }
    },
)
async def create_payment(
    request: CreatePaymentRequestSchema,
    identity: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """
    Record a payment for a customer.

    **Request body:**
    - `customer_id` (required)
    - `amount` (required): must be > 0
    - `payment_date` (optional): defaults to today
    - `note`, `plot_id`, `payment_method` (optional)

    **Returns:**
    - 201: Payment recorded with the customer's new balance
    - 400: Invalid amount
    - 404: Customer not found
    """
    use_case = CreatePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    command = CreatePaymentCommandDTO(recorded_by=identity.email, **request.model_dump(exclude_none=True))
    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Payment added successfully")


@router.get("", response_model=SuccessResponse[PaymentListResponseDTO])
async def list_payments(
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    use_case = ListPayments(SqlAlchemyCustomerRepository(session), SqlAlchemyPaymentRepository(session))
    result = await use_case.execute()
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.get("/user/{customer_id}", response_model=SuccessResponse[PaymentListResponseDTO])
async def list_customer_payments(
    customer_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Payments of one customer, newest first."""
    use_case = ListCustomerPayments(SqlAlchemyCustomerRepository(session), SqlAlchemyPaymentRepository(session))
    result = await use_case.execute(customer_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.get("/{payment_id}", response_model=SuccessResponse[PaymentDTO])
async def get_payment(
    payment_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetPayment(SqlAlchemyCustomerRepository(session), SqlAlchemyPaymentRepository(session))
    result = await use_case.execute(payment_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.put("/{payment_id}", response_model=SuccessResponse[PaymentResultDTO])
async def update_payment(
    payment_id: int,
    request: UpdatePaymentRequestSchema,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    use_case = UpdatePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    command = UpdatePaymentCommandDTO(payment_id=payment_id, **request.model_dump(exclude_none=True))
    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Payment updated successfully")


@router.delete("/{payment_id}", response_model=SuccessResponse[DeletePaymentResultDTO])
async def delete_payment(
    payment_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Remove a payment; the customer's balance is recomputed from the remaining ledger."""
    use_case = DeletePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(payment_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Payment deleted successfully")
