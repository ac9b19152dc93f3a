from __future__ import annotations

"""Request-payload Pydantic models for authentication endpoints."""

from typing import Optional

from pydantic import EmailStr, Field, constr

from sellerauth.adapters.api.auth.schemas.base import CamelModel

# ---------------------------------------------------------------------------
# Shared / primitive types ---------------------------------------------------
# ---------------------------------------------------------------------------

NameStr = constr(strip_whitespace=True, min_length=2, max_length=50)
NewPasswordStr = constr(min_length=6)

# ---------------------------------------------------------------------------
# Concrete request models ----------------------------------------------------
# ---------------------------------------------------------------------------


class SignupRequest(CamelModel):
    """Payload expected by ``POST /auth/signup``."""

    name: NameStr = Field(..., examples=["Jane Seller"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: NewPasswordStr = Field(..., examples=["s3cret-pass"])


class VerifyEmailRequest(CamelModel):
    """Payload expected by ``POST /auth/verify-email``."""

    email: EmailStr = Field(..., examples=["jane@example.com"])
    otp: str = Field(..., examples=["042519"])


class EmailRequest(CamelModel):
    """Payload for ``/auth/resend-verification`` and ``/auth/forgot-password``."""

    email: EmailStr = Field(..., examples=["jane@example.com"])


class LoginRequest(CamelModel):
    """Payload expected by ``POST /auth/login``."""

    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., min_length=1, examples=["s3cret-pass"])


class RefreshTokenRequest(CamelModel):
    """Payload expected by ``POST /auth/refresh-token``.

    Optional so that an absent token is reported as ``missing_token``.
    """

    refresh_token: Optional[str] = Field(default=None, examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."])


class LogoutRequest(CamelModel):
    """Payload expected by ``POST /auth/logout``."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class ReactivateRequest(CamelModel):
    """Payload expected by ``POST /auth/reactivate``."""

    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(CamelModel):
    """Payload expected by ``POST /auth/reset-password``."""

    email: EmailStr = Field(..., examples=["jane@example.com"])
    otp: str = Field(..., examples=["042519"])
    password: NewPasswordStr = Field(..., description="The new password")
