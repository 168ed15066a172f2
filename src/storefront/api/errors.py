"""Translate domain failures into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ValidationError

from storefront.errors import ErrorKind, StorefrontError

logger = structlog.get_logger(__name__)

_STATUS_FOR_KIND = {
    ErrorKind.PRODUCT_NOT_FOUND: 404,
    ErrorKind.ORDER_NOT_FOUND: 404,
    ErrorKind.INSUFFICIENT_STOCK: 400,
    ErrorKind.INVALID_TRANSITION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
}


def _error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": error},
    )


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return _error_response(_STATUS_FOR_KIND[exc.kind], exc.message, exc.kind.value)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    messages = []
    for field_name, errors in (exc.messages or {}).items():
        messages.extend(f"{field_name}: {error}" for error in errors)
    return _error_response(400, "Validation failed", ", ".join(messages) or None)


async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("Version conflict not resolved by retries", path=request.url.path)
    return _error_response(409, "The resource was modified concurrently, please retry", "conflict")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return _error_response(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
