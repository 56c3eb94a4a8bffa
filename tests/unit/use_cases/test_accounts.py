"""Unit tests for registration and login"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.services.authenticator import Authenticator, Identity
from src.app.use_cases import error_codes
from src.app.use_cases.accounts import (
    GetMe,
    Login,
    LoginCommandDTO,
    RegisterAdmin,
    RegisterAdminCommandDTO,
    RegisterCustomer,
    RegisterCustomerCommandDTO,
)
from src.domain.account import AccountRole, AuthenticationAccount
from tests.factories import created, make_customer


def make_account(account_id=9, role=AccountRole.CUSTOMER, email="amina@example.com"):
    return AuthenticationAccount(
        id=account_id,
        name="Amina Bello",
        email=email,
        password_hash="hashed",
        role=role,
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def mock_account_repo():
    repo = MagicMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=created)
    return repo


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_account_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_authenticator():
    authenticator = MagicMock(spec=Authenticator)
    authenticator.hash_secret.return_value = "hashed"
    authenticator.issue_token.return_value = "token-123"
    authenticator.verify_secret.return_value = True
    return authenticator


@pytest.mark.asyncio
class TestRegister:

    async def test_register_admin(self, mock_uow, mock_account_repo, mock_authenticator):
        use_case = RegisterAdmin(mock_uow, mock_account_repo, mock_authenticator)

        result = await use_case.execute(
            RegisterAdminCommandDTO(name="Ops", email=" Ops@Example.com ", password="s3cret!")
        )

        assert result.is_ok()
        assert result.value.email == "ops@example.com"
        assert result.value.role == AccountRole.ADMIN.value
        created_account = mock_account_repo.create.call_args.args[0]
        assert created_account.password_hash == "hashed"
        mock_uow.commit.assert_awaited_once()

    async def test_short_password(self, mock_uow, mock_account_repo, mock_authenticator):
        use_case = RegisterAdmin(mock_uow, mock_account_repo, mock_authenticator, min_password_length=8)

        result = await use_case.execute(RegisterAdminCommandDTO(name="Ops", email="ops@example.com", password="abc"))

        assert result.is_err()
        assert result.error.code == error_codes.PASSWORD_TOO_SHORT
        mock_account_repo.create.assert_not_called()

    async def test_duplicate_email(self, mock_uow, mock_account_repo, mock_authenticator):
        mock_account_repo.get_by_email.return_value = make_account()
        use_case = RegisterCustomer(mock_uow, mock_account_repo, mock_authenticator)

        result = await use_case.execute(
            RegisterCustomerCommandDTO(
                name="Amina", email="amina@example.com", password="s3cret!", confirm_password="s3cret!"
            )
        )

        assert result.is_err()
        assert result.error.code == error_codes.EMAIL_ALREADY_REGISTERED

    async def test_customer_passwords_must_match(self, mock_uow, mock_account_repo, mock_authenticator):
        use_case = RegisterCustomer(mock_uow, mock_account_repo, mock_authenticator)

        result = await use_case.execute(
            RegisterCustomerCommandDTO(
                name="Amina", email="amina@example.com", password="s3cret!", confirm_password="other!"
            )
        )

        assert result.is_err()
        assert result.error.code == error_codes.PASSWORD_MISMATCH

    async def test_customer_registration_returns_token(self, mock_uow, mock_account_repo, mock_authenticator):
        use_case = RegisterCustomer(mock_uow, mock_account_repo, mock_authenticator)

        result = await use_case.execute(
            RegisterCustomerCommandDTO(
                name="Amina", email="amina@example.com", password="s3cret!", confirm_password="s3cret!"
            )
        )

        assert result.is_ok()
        assert result.value.token == "token-123"
        assert result.value.account.role == AccountRole.CUSTOMER.value


@pytest.mark.asyncio
class TestLogin:

    async def test_login_reports_linked_customer(self, mock_account_repo, mock_customer_repo, mock_authenticator):
        mock_account_repo.get_by_email.return_value = make_account()
        mock_customer_repo.get_by_account_id.return_value = make_customer(customer_id=4)

        use_case = Login(mock_account_repo, mock_customer_repo, mock_authenticator, AccountRole.CUSTOMER)
        result = await use_case.execute(LoginCommandDTO(email="AMINA@example.com", password="s3cret!"))

        assert result.is_ok()
        assert result.value.account.customer_id == 4
        mock_account_repo.get_by_email.assert_awaited_once_with("amina@example.com")

    @pytest.mark.parametrize(
        "account, password_ok",
        [
            (None, True),
            (make_account(), False),
            (make_account(role=AccountRole.ADMIN), True),
        ],
    )
    async def test_bad_credentials_look_the_same(
        self, account, password_ok, mock_account_repo, mock_customer_repo, mock_authenticator
    ):
        mock_account_repo.get_by_email.return_value = account
        mock_authenticator.verify_secret.return_value = password_ok

        use_case = Login(mock_account_repo, mock_customer_repo, mock_authenticator, AccountRole.CUSTOMER)
        result = await use_case.execute(LoginCommandDTO(email="amina@example.com", password="s3cret!"))

        assert result.is_err()
        assert result.error.code == error_codes.INVALID_CREDENTIALS
        mock_authenticator.issue_token.assert_not_called()

    async def test_get_me_unknown_account(self, mock_account_repo, mock_customer_repo):
        mock_account_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetMe(mock_account_repo, mock_customer_repo).execute(
            Identity(account_id=5, email="gone@example.com", role=AccountRole.ADMIN)
        )

        assert result.is_err()
        assert result.error.code == error_codes.UNAUTHORIZED
