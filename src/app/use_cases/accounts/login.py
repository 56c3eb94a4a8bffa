"""Login and profile use cases"""

import logging
from libs.result import Result, Return, Error
from src.app.services.authenticator import Authenticator, Identity
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.use_cases import error_codes
from src.domain.account import AccountRole
from .dtos import AccountDTO, AuthTokenDTO, LoginCommandDTO
from .register import to_account_dto

logger = logging.getLogger(__name__)


class Login:
    """
    Use Case: Exchange email and password for a bearer token

    The account must have the requested role; a wrong password, an unknown
    email and a role mismatch all give the same INVALID_CREDENTIALS error.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        customer_repo: CustomerRepository,
        authenticator: Authenticator,
        role: AccountRole,
    ):
        self.account_repo = account_repo
        self.customer_repo = customer_repo
        self.authenticator = authenticator
        self.role = role

    async def execute(self, command: LoginCommandDTO) -> Result[AuthTokenDTO]:
        if not command.email or not command.password:
            return Return.err(
                Error(code=error_codes.VALIDATION_ERROR, message="Please provide both email and password")
            )

        try:
            account = await self.account_repo.get_by_email(command.email.strip().lower())
            if (
                not account
                or account.role != self.role
                or not self.authenticator.verify_secret(command.password, account.password_hash)
            ):
                logger.warning(f"Failed {self.role.value} login for {command.email}")
                return Return.err(Error(code=error_codes.INVALID_CREDENTIALS, message="Invalid email or password"))

            customer = await self.customer_repo.get_by_account_id(account.id)
            token = self.authenticator.issue_token(
                Identity(account_id=account.id, email=account.email, role=account.role)
            )
            return Return.ok(
                AuthTokenDTO(
                    account=to_account_dto(account, customer.id if customer else None),
                    token=token,
                )
            )

        except Exception as e:
            logger.error(f"Login failed for {command.email}: {e}")
            return Return.err(error_codes.from_exception(e, "LOGIN_FAILED", "Server error during login"))


class GetMe:
    """Use Case: Profile of the account behind a verified token"""

    def __init__(self, account_repo: AccountRepository, customer_repo: CustomerRepository):
        self.account_repo = account_repo
        self.customer_repo = customer_repo

    async def execute(self, identity: Identity) -> Result[AccountDTO]:
        try:
            account = await self.account_repo.get_by_id(identity.account_id)
            if not account:
                return Return.err(Error(code=error_codes.UNAUTHORIZED, message="Not authorized, user not found"))

            customer = await self.customer_repo.get_by_account_id(account.id)
            return Return.ok(to_account_dto(account, customer.id if customer else None))

        except Exception as e:
            return Return.err(error_codes.from_exception(e, "GET_PROFILE_FAILED", "Server error"))
