"""Customer record API Routes

Admin-only management of customers, their plots and financial details.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.schemas.customer_request import CreateCustomerRequestSchema, UpdateCustomerRequestSchema
from src.api.schemas.envelope import SuccessResponse, ok
from src.app.services.authenticator import Authenticator, Identity
from src.app.use_cases.customers import (
    CreateCustomer,
    DeleteCustomer,
    GetCustomer,
    ListCustomers,
    UpdateCustomer,
    CreateCustomerCommandDTO,
    CreateCustomerResultDTO,
    CustomerDetailsDTO,
    CustomerListResponseDTO,
    DeleteCustomerResultDTO,
    UpdateCustomerCommandDTO,
)
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyPaymentRequestRepository,
    SqlAlchemyPlotRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_authenticator, get_session, require_admin

router = APIRouter(prefix="/admin/users", tags=["Customers"])


@router.get("", response_model=SuccessResponse[CustomerListResponseDTO])
async def list_customers(
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """List every customer with payments, total paid and payment progress."""
    use_case = ListCustomers(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute()
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.post(
    "",
    response_model=SuccessResponse[CreateCustomerResultDTO],
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Email already used or a plot is not available",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Plot A-49 is sold and cannot be sold",
                        "error": {
                            "code": "PLOT_UNAVAILABLE",
                            "message": "Plot A-49 is sold and cannot be sold",
                            "reason": "is sold and cannot be sold",
                        },
                    }
                }
            },
        }
    },
)
async def create_customer(
    request: CreateCustomerRequestSchema,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
    authenticator: Authenticator = Depends(get_authenticator),
):
    """
    Onboard a customer and sell the listed plots.

    **Request body:**
    - `name`, `email`, `contact` (required)
    - `plots_held`: plot numbers, array or comma-joined string
    - `price_per_plot`: per-plot prices aligned with `plots_held`
    - `initial_deposit`: deposit paid at onboarding
    - `total_price` (optional): derived from `price_per_plot` when omitted

    **Returns:**
    - 201: Customer created; `login` holds the generated credential when a
      new account was created
    - 400: Missing fields or no usable price
    - 404: A listed plot does not exist
    - 409: Email already used or a plot is not available
    """
    use_case = CreateCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPlotRepository(session),
        authenticator,
    )
    result = await use_case.execute(CreateCustomerCommandDTO(**request.model_dump()))
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "User created successfully")


@router.get("/{customer_id}", response_model=SuccessResponse[CustomerDetailsDTO])
async def get_customer(
    customer_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(customer_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.put("/{customer_id}", response_model=SuccessResponse[CustomerDetailsDTO])
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequestSchema,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """
    Edit a customer.

    Replacing `plots_held` releases the previous plots before the new ones
    are sold. Balance and status are always recomputed from the ledger.
    """
    use_case = UpdateCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyPlotRepository(session),
    )
    command = UpdateCustomerCommandDTO(customer_id=customer_id, **request.model_dump(exclude_none=True))
    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "User updated successfully")


@router.delete("/{customer_id}", response_model=SuccessResponse[DeleteCustomerResultDTO])
async def delete_customer(
    customer_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Delete a customer, its payments and payment requests, and release its plots."""
    use_case = DeleteCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyPaymentRequestRepository(session),
        SqlAlchemyPlotRepository(session),
    )
    result = await use_case.execute(customer_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "User deleted successfully")
