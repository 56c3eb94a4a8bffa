"""Unit tests for the payment request workflow

Tests cover:
- Submission with receipt reference and defaults
- Approval materializes an approved payment and recomputes from the ledger
- Conflict when a request is decided twice
- Rejection succeeds even when the audit copy cannot be written
"""

import io
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, call
from sqlalchemy.exc import OperationalError

from src.app.services.blob_store import BlobStore, Upload
from src.app.use_cases import error_codes
from src.app.use_cases.payments import (
    ApprovePaymentRequest,
    RejectPaymentRequest,
    SubmitPaymentRequest,
    ApprovePaymentRequestCommandDTO,
    RejectPaymentRequestCommandDTO,
    SubmitPaymentRequestCommandDTO,
)
from src.domain.customer import CustomerStatus
from src.domain.payment import PaymentStatus
from src.domain.payment_request import PaymentRequestStatus
from tests.factories import (
    apply_financials,
    created,
    make_customer,
    make_payment,
    make_plot,
    make_request,
    returned,
)


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.update_financials = AsyncMock(side_effect=apply_financials)
    return repo


@pytest.fixture
def mock_payment_repo():
    async def create_payment(payment):
        return await created(payment, new_id=55)

    repo = MagicMock()
    repo.create = AsyncMock(side_effect=create_payment)
    return repo


@pytest.fixture
def mock_request_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=created)
    repo.update = AsyncMock(side_effect=returned)
    repo.add_rejection_audit = AsyncMock()
    return repo


@pytest.fixture
def mock_plot_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_blob_store():
    store = MagicMock(spec=BlobStore)
    store.store_upload = AsyncMock(return_value="receipts/abc.png")
    return store


@pytest.mark.asyncio
class TestSubmitPaymentRequest:

    async def test_creates_pending_request_with_receipt(
        self, mock_uow, mock_customer_repo, mock_plot_repo, mock_request_repo, mock_blob_store
    ):
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())
        mock_plot_repo.get_by_id = AsyncMock(return_value=make_plot(49, "A-49"))
        receipt = Upload(filename="receipt.png", stream=io.BytesIO(b"png"))

        use_case = SubmitPaymentRequest(
            mock_uow, mock_customer_repo, mock_plot_repo, mock_request_repo, mock_blob_store
        )
        result = await use_case.execute(
            SubmitPaymentRequestCommandDTO(customer_id=1, amount=Decimal("1500"), plot_id=49),
            receipt=receipt,
        )

        assert result.is_ok()
        assert result.value.status == PaymentRequestStatus.PENDING.value
        assert result.value.receipt_ref == "receipts/abc.png"
        assert result.value.payment_method == "bank_transfer"
        assert result.value.plot_number == "A-49"
        mock_blob_store.store_upload.assert_awaited_once_with("receipts", receipt)
        mock_uow.commit.assert_awaited_once()

    async def test_unknown_plot_is_not_found(
        self, mock_uow, mock_customer_repo, mock_plot_repo, mock_request_repo, mock_blob_store
    ):
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())

        use_case = SubmitPaymentRequest(
            mock_uow, mock_customer_repo, mock_plot_repo, mock_request_repo, mock_blob_store
        )
        result = await use_case.execute(
            SubmitPaymentRequestCommandDTO(customer_id=1, amount=Decimal("1500"), plot_id=404)
        )

        assert result.is_err()
        assert result.error.code == error_codes.PLOT_NOT_FOUND
        mock_request_repo.create.assert_not_called()

    async def test_rejects_zero_amount(
        self, mock_uow, mock_customer_repo, mock_plot_repo, mock_request_repo, mock_blob_store
    ):
        use_case = SubmitPaymentRequest(
            mock_uow, mock_customer_repo, mock_plot_repo, mock_request_repo, mock_blob_store
        )
        result = await use_case.execute(SubmitPaymentRequestCommandDTO(customer_id=1, amount=Decimal("0")))

        assert result.is_err()
        assert result.error.code == error_codes.INVALID_AMOUNT


@pytest.mark.asyncio
class TestApprovePaymentRequest:

    async def test_approval_recomputes_from_full_ledger(
        self, mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
    ):
        """
        Given: Customer 9000 / deposit 3000 with stored balance 6000
        When: A 6000 request is approved
        Then: An approved payment is created, request links to it, balance 0 Completed
        """
        request = make_request(amount="6000")
        customer = make_customer(total_price="9000", initial_deposit="3000", balance="6000")
        mock_request_repo.get_by_id = AsyncMock(return_value=request)
        mock_customer_repo.get_by_id = AsyncMock(return_value=customer)
        mock_payment_repo.list_by_customer = AsyncMock(
            return_value=[make_payment(55, "6000", status=PaymentStatus.APPROVED)]
        )

        use_case = ApprovePaymentRequest(
            mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
        )
        result = await use_case.execute(ApprovePaymentRequestCommandDTO(request_id=1, approved_by="admin@example.com"))

        assert result.is_ok()
        created_payment = mock_payment_repo.create.await_args.args[0]
        assert created_payment.status == PaymentStatus.APPROVED
        assert created_payment.payment_request_id == 1
        assert created_payment.amount == Decimal("6000")
        assert request.status == PaymentRequestStatus.APPROVED
        assert request.payment_id == 55
        assert result.value.financials.balance == Decimal("0")
        assert customer.status == CustomerStatus.COMPLETED
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.parametrize("status", [PaymentRequestStatus.APPROVED, PaymentRequestStatus.REJECTED])
    async def test_decided_request_is_conflict(
        self, status, mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
    ):
        mock_request_repo.get_by_id = AsyncMock(return_value=make_request(status=status))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())

        use_case = ApprovePaymentRequest(
            mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
        )
        result = await use_case.execute(ApprovePaymentRequestCommandDTO(request_id=1))

        assert result.is_err()
        assert result.error.code == error_codes.REQUEST_NOT_PENDING
        assert error_codes.kind_of(result.error.code) == error_codes.ErrorKind.CONFLICT
        mock_payment_repo.create.assert_not_called()
        mock_uow.rollback.assert_awaited()

    async def test_locks_customer_before_request(
        self, mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
    ):
        mock_request_repo.get_by_id = AsyncMock(return_value=make_request(request_id=4, customer_id=2))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer(customer_id=2))
        mock_payment_repo.list_by_customer = AsyncMock(return_value=[])
        locks = MagicMock()
        locks.attach_mock(mock_request_repo.get_by_id, "request")
        locks.attach_mock(mock_customer_repo.get_by_id, "customer")

        use_case = ApprovePaymentRequest(
            mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
        )
        result = await use_case.execute(ApprovePaymentRequestCommandDTO(request_id=4))

        assert result.is_ok()
        assert locks.mock_calls == [
            call.request(4),
            call.customer(2, for_update=True),
            call.request(4, for_update=True),
        ]

    async def test_request_not_found(
        self, mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
    ):
        mock_request_repo.get_by_id = AsyncMock(return_value=None)

        use_case = ApprovePaymentRequest(
            mock_uow, mock_customer_repo, mock_payment_repo, mock_request_repo, mock_plot_repo
        )
        result = await use_case.execute(ApprovePaymentRequestCommandDTO(request_id=3))

        assert result.is_err()
        assert result.error.code == error_codes.PAYMENT_REQUEST_NOT_FOUND


@pytest.mark.asyncio
class TestRejectPaymentRequest:

    async def test_rejects_with_reason_and_audit(self, mock_uow, mock_customer_repo, mock_request_repo):
        request = make_request()
        mock_request_repo.get_by_id = AsyncMock(return_value=request)
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())

        use_case = RejectPaymentRequest(mock_uow, mock_customer_repo, mock_request_repo)
        result = await use_case.execute(RejectPaymentRequestCommandDTO(request_id=1, reason="Blurry receipt"))

        assert result.is_ok()
        assert result.value.status == PaymentRequestStatus.REJECTED.value
        assert result.value.rejection_reason == "Blurry receipt"
        audit = mock_request_repo.add_rejection_audit.await_args.args[0]
        assert audit.payment_request_id == 1
        assert audit.rejection_reason == "Blurry receipt"
        mock_customer_repo.update_financials.assert_not_called()
        mock_uow.commit.assert_awaited_once()

    async def test_audit_failure_does_not_fail_rejection(self, mock_uow, mock_customer_repo, mock_request_repo):
        mock_request_repo.get_by_id = AsyncMock(return_value=make_request())
        mock_request_repo.add_rejection_audit = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("no such table: rejected_payments"))
        )
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())

        use_case = RejectPaymentRequest(mock_uow, mock_customer_repo, mock_request_repo)
        result = await use_case.execute(RejectPaymentRequestCommandDTO(request_id=1))

        assert result.is_ok()
        assert result.value.status == PaymentRequestStatus.REJECTED.value
        mock_uow.commit.assert_awaited_once()

    async def test_re_reject_is_conflict(self, mock_uow, mock_customer_repo, mock_request_repo):
        mock_request_repo.get_by_id = AsyncMock(return_value=make_request(status=PaymentRequestStatus.REJECTED))

        use_case = RejectPaymentRequest(mock_uow, mock_customer_repo, mock_request_repo)
        result = await use_case.execute(RejectPaymentRequestCommandDTO(request_id=1))

        assert result.is_err()
        assert result.error.code == error_codes.REQUEST_NOT_PENDING
        mock_request_repo.update.assert_not_called()
