from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

Every ``SellerAuthError`` is rendered with the same envelope::

    {"success": false, "kind": ..., "code": ..., "message": ..., "detail": ...}

``detail`` is only present when the error carries one, which the domain
services only do in debug mode.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette import status
from structlog import get_logger

from sellerauth.core.exceptions import AccountAccessError, SellerAuthError

__all__ = [
    "error_payload",
    "status_code_for",
    "seller_auth_error_handler",
    "request_validation_error_handler",
    "rate_limit_exception_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)

_STATUS_BY_KIND = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "conflict": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "auth": status.HTTP_401_UNAUTHORIZED,
    "dependency": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: SellerAuthError) -> int:
    """Map an error to its HTTP status. Account-state refusals are 403."""
    if isinstance(exc, AccountAccessError):
        return status.HTTP_403_FORBIDDEN
    return _STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_payload(kind: str, code: str, message: str, detail=None) -> dict:
    payload = {"success": False, "kind": kind, "code": code, "message": message}
    if detail is not None:
        payload["detail"] = detail
    return payload


async def seller_auth_error_handler(request: Request, exc: SellerAuthError) -> JSONResponse:
    """Handles every ``SellerAuthError`` subclass.

    Args:
        request: The incoming `Request` object.
        exc: The `SellerAuthError` instance.

    Returns:
        A `JSONResponse` with the mapped status code and the error envelope.
    """
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Request failed",
        kind=exc.kind,
        error=exc.code,
        status_code=status_code,
        path=request.url.path,
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=error_payload(exc.kind, exc.code, exc.message, exc.detail),
        headers=headers,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handles body/query validation failures, returning a `400 Bad Request`.

    The message names the first offending field; the full error list is
    not echoed back.
    """
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)
    logger.info("Request validation failed", path=request.url.path, error_count=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_payload("validation", "invalid_request", message),
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handles exceptions raised by slowapi when a rate limit is exceeded."""
    logger.warning(
        "rate_limit_exceeded",
        client_ip=request.client.host if request.client else None,
        path=request.url.path,
        limit=str(exc.limit.limit) if exc.limit else None,
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_payload("rate_limit", "too_many_requests", "Too many requests, please try again later"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SellerAuthError, seller_auth_error_handler)
