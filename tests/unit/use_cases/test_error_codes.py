"""Unit tests for error code classification"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.app.use_cases import error_codes
from src.app.use_cases.error_codes import ErrorKind
from src.domain.plot_state import PlotTransitionError


@pytest.mark.parametrize(
    "code, kind",
    [
        (error_codes.INVALID_AMOUNT, ErrorKind.VALIDATION),
        (error_codes.INVALID_CREDENTIALS, ErrorKind.AUTH),
        (error_codes.FORBIDDEN, ErrorKind.FORBIDDEN),
        (error_codes.PAYMENT_REQUEST_NOT_FOUND, ErrorKind.NOT_FOUND),
        (error_codes.PLOT_UNAVAILABLE, ErrorKind.CONFLICT),
        (error_codes.STORE_UNAVAILABLE, ErrorKind.TRANSIENT),
        ("CREATE_PAYMENT_FAILED", ErrorKind.INTERNAL),
    ],
)
def test_kind_of(code, kind):
    assert error_codes.kind_of(code) == kind


def test_plot_transition_becomes_conflict():
    error = error_codes.from_exception(PlotTransitionError("A-7", "already Sold"), "X_FAILED", "failed")

    assert error.code == error_codes.PLOT_UNAVAILABLE
    assert "A-7" in error.message


def test_integrity_error_becomes_constraint_violation():
    error = error_codes.from_exception(
        IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")), "X_FAILED", "failed"
    )

    assert error.code == error_codes.CONSTRAINT_VIOLATION


def test_driver_error_is_transient():
    error = error_codes.from_exception(OperationalError("SELECT", {}, Exception("down")), "X_FAILED", "failed")

    assert error.code == error_codes.STORE_UNAVAILABLE


def test_other_exceptions_keep_use_case_code():
    error = error_codes.from_exception(ValueError("boom"), "X_FAILED", "failed")

    assert error.code == "X_FAILED"
    assert error.reason == "boom"
