"""Account registration use cases

RegisterAdmin creates an administrator; RegisterCustomer lets a buyer create
a login of their own and returns a token straight away.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.authenticator import Authenticator, Identity
from src.app.repositories.account_repository import AccountRepository
from src.app.use_cases import error_codes
from src.domain.account import AccountRole, AuthenticationAccount
from .dtos import AccountDTO, AuthTokenDTO, RegisterAdminCommandDTO, RegisterCustomerCommandDTO

logger = logging.getLogger(__name__)


def to_account_dto(account: AuthenticationAccount, customer_id=None) -> AccountDTO:
    return AccountDTO(
        id=account.id,
        name=account.name,
        email=account.email,
        role=account.role.value,
        customer_id=customer_id,
        created_at=account.created_at,
    )


class _Registration:

    role: AccountRole = AccountRole.CUSTOMER

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        authenticator: Authenticator,
        min_password_length: int = 6,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.authenticator = authenticator
        self.min_password_length = min_password_length

    def _validate(self, name: str, email: str, password: str):
        if not name or not email or not password:
            return Error(code=error_codes.VALIDATION_ERROR, message="Please provide all required fields")
        if len(password) < self.min_password_length:
            return Error(
                code=error_codes.PASSWORD_TOO_SHORT,
                message=f"Password must be at least {self.min_password_length} characters",
            )
        return None

    async def _register(self, name: str, email: str, password: str) -> AuthenticationAccount:
        account = await self.account_repo.create(
            AuthenticationAccount(
                name=name,
                email=email,
                password_hash=self.authenticator.hash_secret(password),
                role=self.role,
            )
        )
        await self.uow.commit()
        logger.info(f"Registered {self.role.value} account {account.id} ({account.email})")
        return account


class RegisterAdmin(_Registration):
    """
    Use Case: Register an administrator

    Business Rules:
    1. name, email and password are required
    2. Password length >= min_password_length
    3. Email unique across all accounts (Conflict)
    """

    role = AccountRole.ADMIN

    async def execute(self, command: RegisterAdminCommandDTO) -> Result[AccountDTO]:
        name, email = command.name.strip(), command.email.strip().lower()
        invalid = self._validate(name, email, command.password)
        if invalid:
            return Return.err(invalid)

        try:
            if await self.account_repo.get_by_email(email):
                return Return.err(
                    Error(code=error_codes.EMAIL_ALREADY_REGISTERED, message="Admin already exists with this email")
                )

            account = await self._register(name, email, command.password)
            return Return.ok(to_account_dto(account))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Admin registration failed for {email}: {e}")
            return Return.err(error_codes.from_exception(e, "REGISTRATION_FAILED", "Server error during registration"))


class RegisterCustomer(_Registration):
    """Use Case: Customer self-registration (returns a bearer token)"""

    role = AccountRole.CUSTOMER

    async def execute(self, command: RegisterCustomerCommandDTO) -> Result[AuthTokenDTO]:
        name, email = command.name.strip(), command.email.strip().lower()
        invalid = self._validate(name, email, command.password)
        if invalid:
            return Return.err(invalid)
        if command.password != command.confirm_password:
            return Return.err(Error(code=error_codes.PASSWORD_MISMATCH, message="Passwords do not match"))

        try:
            if await self.account_repo.get_by_email(email):
                return Return.err(
                    Error(code=error_codes.EMAIL_ALREADY_REGISTERED, message="User already exists with this email")
                )

            account = await self._register(name, email, command.password)
            token = self.authenticator.issue_token(
                Identity(account_id=account.id, email=account.email, role=account.role)
            )
            return Return.ok(AuthTokenDTO(account=to_account_dto(account), token=token))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Customer registration failed for {email}: {e}")
            return Return.err(error_codes.from_exception(e, "REGISTRATION_FAILED", "Server error during registration"))
