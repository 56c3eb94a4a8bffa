"""API error handling

ClientError carries a use-case Error up to the exception handlers, which
render every failure as the same JSON envelope:

    {"success": false, "message": "...", "error": {"code", "message", "reason"}}
"""

import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from libs.result import Error
from src.app.use_cases import error_codes
from src.app.use_cases.error_codes import ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    """Raised by routes when a use case returns an error"""

    def __init__(self, error: Error, status_code: Optional[int] = None):
        self.error = error
        self.status_code = status_code or STATUS_BY_KIND[error_codes.kind_of(error.code)]
        super().__init__(error.message)


def error_response(error: Error, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": error.message,
            "error": error.to_dict(),
        },
    )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} {exc.error.reason}")
    return error_response(exc.error, exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return error_response(
        Error(code=error_codes.VALIDATION_ERROR, message="Invalid request", reason=details),
        status.HTTP_400_BAD_REQUEST,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = Error(
            code=error_codes.ROUTE_NOT_FOUND,
            message=f"Route {request.method} {request.url.path} not found",
        )
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        error = Error(code="METHOD_NOT_ALLOWED", message=str(exc.detail))
    else:
        error = Error(code="HTTP_ERROR", message=str(exc.detail))
    return error_response(error, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        Error(code=error_codes.INTERNAL_ERROR, message="Internal server error"),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
