from __future__ import annotations

"""Centralized, structured exception hierarchy for sellerauth.

Every error raised by the domain carries a machine-readable ``code`` and a
human-readable ``message``. Each class also names the ``kind`` it belongs to
(validation, not_found, auth, conflict, dependency, internal), which the API
layer uses to pick an HTTP status and to shape the error payload.

``detail`` holds raw diagnostic information about the underlying failure. It
is only populated when the orchestrator runs in debug mode, and the handlers
only serialize it when present.
"""

from typing import Final, Optional

__all__: Final = [
    "SellerAuthError",
    "ValidationError",
    "OtpVerificationError",
    "NotFoundError",
    "UserNotFoundError",
    "SellerNotFoundError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "AccountAccessError",
    "ConflictError",
    "DuplicateEmailError",
    "DuplicateBlacklistEntryError",
    "DependencyError",
    "EmailServiceError",
    "SellerTokenExchangeError",
    "InternalError",
]


class SellerAuthError(Exception):
    """Base exception class for all custom errors in the application.

    Attributes:
        message (str): A human-readable error message, safe to return to clients.
        code (str): A unique, machine-readable error code.
        detail (Optional[str]): Raw diagnostic detail, debug mode only.
    """

    kind: str = "internal"
    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error", detail: Optional[str] = None):
        self.message = message
        self.code = code
        self.detail = detail
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors (map to 400 Bad Request)
# ---------------------------------------------------------------------------


class ValidationError(SellerAuthError):
    """Raised for malformed input or a request that is invalid in the current state."""

    kind = "validation"

    def __init__(self, message: str, code: str = "validation_error", detail: Optional[str] = None):
        super().__init__(message, code, detail)


class OtpVerificationError(ValidationError):
    """Raised when a submitted one-time code is rejected.

    The ``code`` is one of ``no_otp``, ``too_many_attempts``, ``otp_expired``
    or ``invalid_otp``.
    """

    def __init__(self, message: str, code: str = "invalid_otp"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Lookup errors (map to 404 Not Found)
# ---------------------------------------------------------------------------


class NotFoundError(SellerAuthError):
    """Raised when a requested record does not exist."""

    kind = "not_found"

    def __init__(self, message: str = "Not found", code: str = "not_found"):
        super().__init__(message, code)


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found", code: str = "user_not_found"):
        super().__init__(message, code)


class SellerNotFoundError(NotFoundError):
    def __init__(self, message: str = "Seller not found", code: str = "seller_not_found"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Auth errors (map to 401 Unauthorized / 403 Forbidden)
# ---------------------------------------------------------------------------


class AuthenticationError(SellerAuthError):
    """Raised for general authentication failures.

    Maps to a ``401 Unauthorized`` HTTP status code.
    """

    kind = "auth"

    def __init__(self, message: str, code: str = "authentication_error"):
        super().__init__(message, code)


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match.

    The message is deliberately generic so callers cannot tell an unknown
    email from a wrong password.
    """

    def __init__(self, message: str = "Invalid email or password", code: str = "invalid_credentials"):
        super().__init__(message, code)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT is malformed, badly signed or revoked.

    ``code`` is ``malformed_token``, ``bad_signature`` or ``token_revoked``.
    """

    def __init__(self, message: str = "Invalid token", code: str = "malformed_token"):
        super().__init__(message, code)


class TokenExpiredError(AuthenticationError):
    def __init__(self, message: str = "Token expired", code: str = "token_expired"):
        super().__init__(message, code)


class AccountAccessError(AuthenticationError):
    """Raised when a known user is refused for an account-state reason.

    Covers unverified email, locked and deactivated accounts. Maps to
    ``403 Forbidden``.
    """

    def __init__(self, message: str, code: str = "account_access_denied"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Conflict errors
# ---------------------------------------------------------------------------


class ConflictError(SellerAuthError):
    """Raised when a write collides with an existing record."""

    kind = "conflict"

    def __init__(self, message: str, code: str = "conflict"):
        super().__init__(message, code)


class DuplicateEmailError(ConflictError):
    def __init__(self, message: str = "User with this email already exists", code: str = "duplicate_email"):
        super().__init__(message, code)


class DuplicateBlacklistEntryError(ConflictError):
    """Raised by blacklist stores when the token is already present.

    The revocation registry swallows it; it never reaches a client.
    """

    def __init__(self, message: str = "Token already revoked", code: str = "token_already_revoked"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Dependency / internal errors (map to 500 Internal Server Error)
# ---------------------------------------------------------------------------


class DependencyError(SellerAuthError):
    """Raised when an external provider (email, OAuth) fails."""

    kind = "dependency"

    def __init__(self, message: str, code: str = "dependency_error", detail: Optional[str] = None):
        super().__init__(message, code, detail)


class EmailServiceError(DependencyError):
    def __init__(self, message: str, code: str = "email_service_error", detail: Optional[str] = None):
        super().__init__(message, code, detail)


class SellerTokenExchangeError(DependencyError):
    def __init__(self, message: str, code: str = "seller_token_exchange_failed", detail: Optional[str] = None):
        super().__init__(message, code, detail)


class InternalError(SellerAuthError):
    """Raised for unexpected failures caught at the orchestrator boundary."""

    kind = "internal"

    def __init__(self, message: str, code: str = "internal_error", detail: Optional[str] = None):
        super().__init__(message, code, detail)
