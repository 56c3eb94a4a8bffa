"""Error codes returned by use cases

Each code belongs to one ErrorKind; the API maps kinds to HTTP statuses.
"""

from enum import Enum
from sqlalchemy.exc import DBAPIError, IntegrityError
from libs.result import Error
from src.domain.plot_state import PlotTransitionError


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT = "transient"
    INTERNAL = "internal"


# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_AMOUNT = "INVALID_AMOUNT"
PASSWORD_TOO_SHORT = "PASSWORD_TOO_SHORT"
PASSWORD_MISMATCH = "PASSWORD_MISMATCH"

# Auth
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"

# Not found
ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
PAYMENT_REQUEST_NOT_FOUND = "PAYMENT_REQUEST_NOT_FOUND"
SUBSCRIPTION_NOT_FOUND = "SUBSCRIPTION_NOT_FOUND"
PLOT_NOT_FOUND = "PLOT_NOT_FOUND"
ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

# Conflict
EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
PLOT_NUMBER_TAKEN = "PLOT_NUMBER_TAKEN"
PLOT_UNAVAILABLE = "PLOT_UNAVAILABLE"
REQUEST_NOT_PENDING = "REQUEST_NOT_PENDING"
SUBSCRIPTION_NOT_PENDING = "SUBSCRIPTION_NOT_PENDING"
CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

# Transient
STORE_UNAVAILABLE = "STORE_UNAVAILABLE"

INTERNAL_ERROR = "INTERNAL_ERROR"

_KINDS = {
    VALIDATION_ERROR: ErrorKind.VALIDATION,
    INVALID_AMOUNT: ErrorKind.VALIDATION,
    PASSWORD_TOO_SHORT: ErrorKind.VALIDATION,
    PASSWORD_MISMATCH: ErrorKind.VALIDATION,
    INVALID_CREDENTIALS: ErrorKind.AUTH,
    UNAUTHORIZED: ErrorKind.AUTH,
    FORBIDDEN: ErrorKind.FORBIDDEN,
    ACCOUNT_NOT_FOUND: ErrorKind.NOT_FOUND,
    CUSTOMER_NOT_FOUND: ErrorKind.NOT_FOUND,
    PAYMENT_NOT_FOUND: ErrorKind.NOT_FOUND,
    PAYMENT_REQUEST_NOT_FOUND: ErrorKind.NOT_FOUND,
    SUBSCRIPTION_NOT_FOUND: ErrorKind.NOT_FOUND,
    PLOT_NOT_FOUND: ErrorKind.NOT_FOUND,
    ROUTE_NOT_FOUND: ErrorKind.NOT_FOUND,
    EMAIL_ALREADY_REGISTERED: ErrorKind.CONFLICT,
    PLOT_NUMBER_TAKEN: ErrorKind.CONFLICT,
    PLOT_UNAVAILABLE: ErrorKind.CONFLICT,
    REQUEST_NOT_PENDING: ErrorKind.CONFLICT,
    SUBSCRIPTION_NOT_PENDING: ErrorKind.CONFLICT,
    CONSTRAINT_VIOLATION: ErrorKind.CONFLICT,
    STORE_UNAVAILABLE: ErrorKind.TRANSIENT,
    INTERNAL_ERROR: ErrorKind.INTERNAL,
}


def kind_of(code: str) -> ErrorKind:
    """Classify an error code; codes not listed here are internal errors."""
    return _KINDS.get(code, ErrorKind.INTERNAL)


def from_exception(e: Exception, code: str, message: str) -> Error:
    """
    Translate an exception caught by a use case into an Error

    Plot transition failures become PLOT_UNAVAILABLE, integrity violations
    CONSTRAINT_VIOLATION and other driver errors STORE_UNAVAILABLE. Anything
    else keeps the use case's own failure code.
    """
    if isinstance(e, PlotTransitionError):
        return Error(code=PLOT_UNAVAILABLE, message=str(e), reason=e.reason)
    if isinstance(e, IntegrityError):
        return Error(code=CONSTRAINT_VIOLATION, message=message, reason=str(e.orig))
    if isinstance(e, DBAPIError):
        return Error(code=STORE_UNAVAILABLE, message="Datastore unavailable, operation rolled back", reason=str(e.orig))
    return Error(code=code, message=message, reason=str(e))


def not_found(code: str, entity: str, entity_id) -> Error:
    return Error(code=code, message=f"{entity} {entity_id} not found")


def invalid_amount(amount) -> Error:
    return Error(
        code=INVALID_AMOUNT,
        message="Amount must be greater than 0",
        reason=f"Got {amount}",
    )
