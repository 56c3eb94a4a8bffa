"""Authentication API Routes

Registration, login and profile endpoints for administrators and customers.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.auth_request import (
    LoginRequestSchema,
    RegisterAdminRequestSchema,
    RegisterCustomerRequestSchema,
)
from src.api.schemas.envelope import SuccessResponse, ok
from src.app.services.authenticator import Authenticator, Identity
from src.app.use_cases.accounts import (
    GetMe,
    Login,
    RegisterAdmin,
    RegisterCustomer,
    AccountDTO,
    AuthTokenDTO,
    LoginCommandDTO,
    RegisterAdminCommandDTO,
    RegisterCustomerCommandDTO,
)
from src.app.use_cases.customers import CustomerDetailsDTO, GetCustomerByAccount
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import (
    get_authenticator,
    get_current_identity,
    get_session,
    require_admin,
    require_customer,
)
from src.domain.account import AccountRole

admin_router = APIRouter(prefix="/admin", tags=["Admin Auth"])
router = APIRouter(prefix="/auth", tags=["Auth"])


async def _login(
    request: LoginRequestSchema,
    role: AccountRole,
    session: AsyncSession,
    authenticator: Authenticator,
):
    use_case = Login(
        SqlAlchemyAccountRepository(session),
        SqlAlchemyCustomerRepository(session),
        authenticator,
        role,
    )
    result = await use_case.execute(LoginCommandDTO(email=request.email, password=request.password))
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Login successful")


async def _me(identity: Identity, session: AsyncSession):
    use_case = GetMe(SqlAlchemyAccountRepository(session), SqlAlchemyCustomerRepository(session))
    result = await use_case.execute(identity)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@admin_router.post(
    "/register",
    response_model=SuccessResponse[AccountDTO],
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Email already registered",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Admin already exists with this email",
                        "error": {
                            "code": "EMAIL_ALREADY_REGISTERED",
                            "message": "Admin already exists with this email",
                            "reason": None,
                        },
                    }
                }
            },
        }
    },
)
async def register_admin(
    request: RegisterAdminRequestSchema,
    session: AsyncSession = Depends(get_session),
    authenticator: Authenticator = Depends(get_authenticator),
):
    """
    Register an administrator account.

    **Returns:**
    - 201: Account created
    - 400: Missing fields or password too short
    - 409: Email already registered
    """
    use_case = RegisterAdmin(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        authenticator,
        min_password_length=ApplicationConfig.MIN_PASSWORD_LENGTH,
    )
    result = await use_case.execute(
        RegisterAdminCommandDTO(name=request.name, email=request.email, password=request.password)
    )
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Admin registered successfully")


@admin_router.post("/login", response_model=SuccessResponse[AuthTokenDTO])
async def admin_login(
    request: LoginRequestSchema,
    session: AsyncSession = Depends(get_session),
    authenticator: Authenticator = Depends(get_authenticator),
):
    return await _login(request, AccountRole.ADMIN, session, authenticator)


@admin_router.get("/me", response_model=SuccessResponse[AccountDTO])
async def admin_me(
    identity: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    return await _me(identity, session)


@router.post("/register", response_model=SuccessResponse[AuthTokenDTO], status_code=status.HTTP_201_CREATED)
async def register_customer(
    request: RegisterCustomerRequestSchema,
    session: AsyncSession = Depends(get_session),
    authenticator: Authenticator = Depends(get_authenticator),
):
    """
    Customer self-registration.

    The account is linked to a customer record when an administrator later
    onboards a customer with the same email.
    """
    use_case = RegisterCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        authenticator,
        min_password_length=ApplicationConfig.MIN_PASSWORD_LENGTH,
    )
    result = await use_case.execute(
        RegisterCustomerCommandDTO(
            name=request.name,
            email=request.email,
            password=request.password,
            confirm_password=request.confirm_password,
        )
    )
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "User registered successfully")


@router.post("/login", response_model=SuccessResponse[AuthTokenDTO])
async def customer_login(
    request: LoginRequestSchema,
    session: AsyncSession = Depends(get_session),
    authenticator: Authenticator = Depends(get_authenticator),
):
    return await _login(request, AccountRole.CUSTOMER, session, authenticator)


@router.get("/me", response_model=SuccessResponse[AccountDTO])
async def me(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_session),
):
    return await _me(identity, session)


@router.get("/me/customer", response_model=SuccessResponse[CustomerDetailsDTO])
async def my_customer_record(
    identity: Identity = Depends(require_customer),
    session: AsyncSession = Depends(get_session),
):
    """Customer record, payments and balance of the logged-in customer."""
    use_case = GetCustomerByAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(identity.account_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)
