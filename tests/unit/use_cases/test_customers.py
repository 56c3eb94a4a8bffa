"""Unit tests for customer onboarding, editing and removal"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.authenticator import Authenticator
from src.app.use_cases import error_codes
from src.app.use_cases.customers import (
    CreateCustomer,
    CreateCustomerCommandDTO,
    DeleteCustomer,
    UpdateCustomer,
    UpdateCustomerCommandDTO,
)
from src.domain.account import AccountRole, AuthenticationAccount
from src.domain.customer import CustomerStatus
from src.domain.plot import PlotStatus
from tests.factories import apply_financials, created, make_customer, make_payment, make_plot, returned


async def saved(plots):
    return list(plots)


@pytest.fixture
def mock_account_repo():
    repo = MagicMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=created)
    repo.update = AsyncMock(side_effect=returned)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.get_by_account_id = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=created)
    repo.update = AsyncMock(side_effect=returned)
    repo.update_financials = AsyncMock(side_effect=apply_financials)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_plot_repo():
    repo = MagicMock()
    repo.get_by_numbers = AsyncMock(return_value=[])
    repo.save_all = AsyncMock(side_effect=saved)
    return repo


@pytest.fixture
def mock_authenticator():
    authenticator = MagicMock(spec=Authenticator)
    authenticator.hash_secret.return_value = "hashed"
    return authenticator


def create_command(**overrides):
    fields = dict(
        name="Amina Bello",
        email="Amina@Example.com",
        contact="08030000000",
        plots_held=["A-1", "A-2"],
        price_per_plot=["4500", "4500"],
        initial_deposit=Decimal("3000"),
    )
    fields.update(overrides)
    return CreateCustomerCommandDTO(**fields)


@pytest.mark.asyncio
class TestCreateCustomer:

    async def test_create_sells_plots_and_issues_login(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        plots = [make_plot(1), make_plot(2)]
        mock_plot_repo.get_by_numbers.return_value = plots

        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(create_command())

        assert result.is_ok()
        customer = result.value.customer
        assert customer.email == "amina@example.com"
        assert customer.total_price == Decimal("9000")
        assert customer.balance == Decimal("6000")
        assert customer.status == CustomerStatus.ACTIVE.value
        assert result.value.login.password == "08030000000"
        mock_authenticator.hash_secret.assert_called_once_with("08030000000")
        for plot in plots:
            assert plot.status == PlotStatus.SOLD
            assert plot.owner == "Amina Bello"
        mock_uow.commit.assert_awaited_once()

    async def test_deposit_covering_price_completes(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(
            create_command(plots_held=[], price_per_plot=[], total_price=Decimal("2000"), initial_deposit=Decimal("2500"))
        )

        assert result.is_ok()
        assert result.value.customer.balance == Decimal("0")
        assert result.value.customer.status == CustomerStatus.COMPLETED.value

    async def test_links_existing_customer_login(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        mock_account_repo.get_by_email.return_value = AuthenticationAccount(
            id=9, name="Amina Bello", email="amina@example.com", password_hash="x", role=AccountRole.CUSTOMER
        )

        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(create_command(plots_held=[], total_price=Decimal("9000")))

        assert result.is_ok()
        assert result.value.login is None
        assert result.value.customer.account_id == 9
        mock_account_repo.create.assert_not_called()

    async def test_duplicate_email_is_conflict(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        mock_customer_repo.get_by_email.return_value = make_customer()

        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(create_command())

        assert result.is_err()
        assert result.error.code == error_codes.EMAIL_ALREADY_REGISTERED
        mock_customer_repo.create.assert_not_called()
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_called()

    async def test_sold_plot_is_conflict(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        mock_plot_repo.get_by_numbers.return_value = [
            make_plot(1),
            make_plot(2, status=PlotStatus.SOLD, owner="Bola"),
        ]

        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(create_command())

        assert result.is_err()
        assert result.error.code == error_codes.PLOT_UNAVAILABLE
        mock_account_repo.create.assert_not_called()
        mock_uow.rollback.assert_awaited()

    @pytest.mark.parametrize("overrides", [{"name": "  "}, {"contact": ""}])
    async def test_missing_required_field(
        self, overrides, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(create_command(**overrides))

        assert result.is_err()
        assert result.error.code == error_codes.VALIDATION_ERROR

    async def test_zero_total_price_is_validation_error(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
    ):
        use_case = CreateCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo, mock_authenticator
        )
        result = await use_case.execute(create_command(plots_held=[], price_per_plot=[]))

        assert result.is_err()
        assert result.error.code == error_codes.VALIDATION_ERROR


@pytest.mark.asyncio
class TestUpdateCustomer:

    async def test_update_recomputes_balance(self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo):
        customer = make_customer(total_price="5000", initial_deposit="1000", balance="500")
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        payment_repo = MagicMock()
        payment_repo.list_by_customer = AsyncMock(return_value=[make_payment(1, "2000")])

        use_case = UpdateCustomer(mock_uow, mock_account_repo, mock_customer_repo, payment_repo, mock_plot_repo)
        result = await use_case.execute(
            UpdateCustomerCommandDTO(customer_id=1, total_price=Decimal("6000"), location="Lekki")
        )

        assert result.is_ok()
        assert result.value.balance == Decimal("3000")
        assert result.value.location == "Lekki"
        mock_plot_repo.save_all.assert_not_called()

    async def test_replacing_plots_releases_old_ones(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo
    ):
        customer = make_customer(plots_held=["A-1"])
        old_plot = make_plot(1, status=PlotStatus.SOLD, owner="Amina Bello")
        new_plot = make_plot(3)
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_plot_repo.get_by_numbers = AsyncMock(side_effect=[[old_plot], [new_plot]])
        payment_repo = MagicMock()
        payment_repo.list_by_customer = AsyncMock(return_value=[])

        use_case = UpdateCustomer(mock_uow, mock_account_repo, mock_customer_repo, payment_repo, mock_plot_repo)
        result = await use_case.execute(UpdateCustomerCommandDTO(customer_id=1, plots_held=["A-3"]))

        assert result.is_ok()
        assert result.value.plots_held == ["A-3"]
        assert old_plot.status == PlotStatus.AVAILABLE
        assert old_plot.owner is None
        assert new_plot.status == PlotStatus.SOLD
        assert new_plot.owner == "Amina Bello"

    async def test_update_missing_customer(self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        use_case = UpdateCustomer(mock_uow, mock_account_repo, mock_customer_repo, MagicMock(), mock_plot_repo)
        result = await use_case.execute(UpdateCustomerCommandDTO(customer_id=404, name="X"))

        assert result.is_err()
        assert result.error.code == error_codes.CUSTOMER_NOT_FOUND


@pytest.mark.asyncio
class TestDeleteCustomer:

    async def test_delete_releases_plots_and_ledger(
        self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo
    ):
        customer = make_customer(plots_held=["A-1", "A-2"], account_id=9)
        plots = [
            make_plot(1, status=PlotStatus.SOLD, owner="Amina Bello"),
            make_plot(2, status=PlotStatus.SOLD, owner="Amina Bello"),
        ]
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_plot_repo.get_by_numbers.return_value = plots
        payment_repo = MagicMock()
        payment_repo.delete_by_customer = AsyncMock(return_value=2)
        request_repo = MagicMock()
        request_repo.delete_by_customer = AsyncMock(return_value=1)

        use_case = DeleteCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, payment_repo, request_repo, mock_plot_repo
        )
        result = await use_case.execute(1)

        assert result.is_ok()
        assert result.value.released_plots == ["A-1", "A-2"]
        assert result.value.deleted_payments == 2
        assert all(p.status == PlotStatus.AVAILABLE for p in plots)
        mock_customer_repo.delete.assert_awaited_once_with(customer)
        mock_account_repo.delete.assert_awaited_once_with(9)
        mock_uow.commit.assert_awaited_once()

    async def test_delete_missing_customer(self, mock_uow, mock_account_repo, mock_customer_repo, mock_plot_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        use_case = DeleteCustomer(
            mock_uow, mock_account_repo, mock_customer_repo, MagicMock(), MagicMock(), mock_plot_repo
        )
        result = await use_case.execute(404)

        assert result.is_err()
        assert result.error.code == error_codes.CUSTOMER_NOT_FOUND
