"""Unit tests for CreatePayment, UpdatePayment and DeletePayment

Tests cover:
- Amount validation before any write
- NotFound for absent customer / payment
- Balance recomputed from the full post-write ledger
- Rollback on store failure
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, call
from sqlalchemy.exc import OperationalError

from src.app.use_cases import error_codes
from src.app.use_cases.payments import (
    CreatePayment,
    DeletePayment,
    UpdatePayment,
    CreatePaymentCommandDTO,
    UpdatePaymentCommandDTO,
)
from src.domain.customer import CustomerStatus
from tests.factories import apply_financials, created, make_customer, make_payment, returned


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.update_financials = AsyncMock(side_effect=apply_financials)
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=created)
    repo.update = AsyncMock(side_effect=returned)
    repo.delete = AsyncMock()
    return repo


@pytest.mark.asyncio
class TestCreatePayment:

    async def test_records_payment_and_recomputes_balance(self, mock_uow, mock_customer_repo, mock_payment_repo):
        """
        Given: Customer with price 5000, deposit 1000 and a 2000 payment
        When: A 1500 payment is recorded
        Then: Balance is recomputed over both payments (500) and committed
        """
        customer = make_customer(total_price="5000", initial_deposit="1000", balance="2000")
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_payment_repo.list_by_customer = AsyncMock(
            return_value=[make_payment(1, "2000"), make_payment(2, "1500")]
        )

        use_case = CreatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(CreatePaymentCommandDTO(customer_id=1, amount=Decimal("1500")))

        assert result.is_ok()
        assert result.value.payment.amount == Decimal("1500")
        assert result.value.financials.balance == Decimal("500")
        assert result.value.financials.total_paid == Decimal("4500")
        assert result.value.financials.status == CustomerStatus.ACTIVE.value
        mock_customer_repo.get_by_id.assert_awaited_once_with(1, for_update=True)
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    async def test_rejects_non_positive_amount_before_any_read(
        self, amount, mock_uow, mock_customer_repo, mock_payment_repo
    ):
        mock_customer_repo.get_by_id = AsyncMock()

        use_case = CreatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(CreatePaymentCommandDTO(customer_id=1, amount=amount))

        assert result.is_err()
        assert result.error.code == error_codes.INVALID_AMOUNT
        mock_customer_repo.get_by_id.assert_not_called()
        mock_payment_repo.create.assert_not_called()

    async def test_customer_not_found(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        use_case = CreatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(CreatePaymentCommandDTO(customer_id=42, amount=Decimal("10")))

        assert result.is_err()
        assert result.error.code == error_codes.CUSTOMER_NOT_FOUND
        mock_payment_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_store_failure_rolls_back(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())
        mock_payment_repo.create = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection reset"))
        )

        use_case = CreatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(CreatePaymentCommandDTO(customer_id=1, amount=Decimal("10")))

        assert result.is_err()
        assert result.error.code == error_codes.STORE_UNAVAILABLE
        mock_uow.rollback.assert_awaited()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestUpdatePayment:

    async def test_amount_change_recomputes_balance(self, mock_uow, mock_customer_repo, mock_payment_repo):
        payment = make_payment(1, "2000")
        customer = make_customer(total_price="5000", initial_deposit="1000", balance="2000")
        mock_payment_repo.get_by_id = AsyncMock(return_value=payment)
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_payment_repo.list_by_customer = AsyncMock(return_value=[payment])

        use_case = UpdatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(UpdatePaymentCommandDTO(payment_id=1, amount=Decimal("4000")))

        assert result.is_ok()
        assert payment.amount == Decimal("4000")
        assert result.value.financials.balance == Decimal("0")
        assert result.value.financials.status == CustomerStatus.COMPLETED.value
        mock_uow.commit.assert_awaited_once()

    async def test_payment_not_found(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        use_case = UpdatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(UpdatePaymentCommandDTO(payment_id=9, note="typo"))

        assert result.is_err()
        assert result.error.code == error_codes.PAYMENT_NOT_FOUND

    async def test_rejects_zero_amount(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock()

        use_case = UpdatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(UpdatePaymentCommandDTO(payment_id=1, amount=Decimal("0")))

        assert result.is_err()
        assert result.error.code == error_codes.INVALID_AMOUNT
        mock_payment_repo.get_by_id.assert_not_called()

    async def test_locks_customer_before_payment(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(6, "2000", customer_id=3))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer(customer_id=3))
        mock_payment_repo.list_by_customer = AsyncMock(return_value=[])
        locks = MagicMock()
        locks.attach_mock(mock_payment_repo.get_by_id, "payment")
        locks.attach_mock(mock_customer_repo.get_by_id, "customer")

        use_case = UpdatePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(UpdatePaymentCommandDTO(payment_id=6, note="bank ref 220"))

        assert result.is_ok()
        assert locks.mock_calls == [
            call.payment(6),
            call.customer(3, for_update=True),
            call.payment(6, for_update=True),
        ]


@pytest.mark.asyncio
class TestDeletePayment:

    async def test_balance_recomputed_from_remaining_payments(self, mock_uow, mock_customer_repo, mock_payment_repo):
        """
        Given: price 5000, deposit 1000, payments 2000 and 1500 (balance 500)
        When: The 1500 payment is deleted
        Then: Balance becomes 2000 and status stays Active
        """
        customer = make_customer(total_price="5000", initial_deposit="1000", balance="500")
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(2, "1500"))
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_payment_repo.list_by_customer = AsyncMock(return_value=[make_payment(1, "2000")])

        use_case = DeletePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(2)

        assert result.is_ok()
        assert result.value.deleted_payment_id == 2
        assert result.value.financials.balance == Decimal("2000")
        assert result.value.financials.status == CustomerStatus.ACTIVE.value
        mock_payment_repo.delete.assert_awaited_once()
        mock_uow.commit.assert_awaited_once()

    async def test_delete_reopens_completed_customer(self, mock_uow, mock_customer_repo, mock_payment_repo):
        customer = make_customer(
            total_price="5000", initial_deposit="1000", balance="0", status=CustomerStatus.COMPLETED
        )
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(1, "4000"))
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_payment_repo.list_by_customer = AsyncMock(return_value=[])

        use_case = DeletePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(1)

        assert result.is_ok()
        assert result.value.financials.balance == Decimal("4000")
        assert customer.status == CustomerStatus.ACTIVE

    async def test_payment_not_found(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        use_case = DeletePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(77)

        assert result.is_err()
        assert result.error.code == error_codes.PAYMENT_NOT_FOUND
        mock_payment_repo.delete.assert_not_called()

    async def test_locks_customer_before_payment(self, mock_uow, mock_customer_repo, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(6, "2000", customer_id=3))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer(customer_id=3))
        mock_payment_repo.list_by_customer = AsyncMock(return_value=[])
        locks = MagicMock()
        locks.attach_mock(mock_payment_repo.get_by_id, "payment")
        locks.attach_mock(mock_customer_repo.get_by_id, "customer")

        use_case = DeletePayment(mock_uow, mock_customer_repo, mock_payment_repo)
        result = await use_case.execute(6)

        assert result.is_ok()
        assert locks.mock_calls == [
            call.payment(6),
            call.customer(3, for_update=True),
            call.payment(6, for_update=True),
        ]
