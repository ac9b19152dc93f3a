from .requests import (
    EmailRequest,
    LoginRequest,
    LogoutRequest,
    ReactivateRequest,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SignupRequest,
    VerifyEmailRequest,
)
from .responses import (
    AccessTokenOut,
    LoginResponse,
    LoginUserOut,
    MessageResponse,
    RefreshTokenResponse,
    SignupResponse,
    SignupUserOut,
)

__all__ = [
    "AccessTokenOut",
    "EmailRequest",
    "LoginRequest",
    "LoginResponse",
    "LoginUserOut",
    "LogoutRequest",
    "MessageResponse",
    "ReactivateRequest",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
    "ResetPasswordRequest",
    "SignupRequest",
    "SignupResponse",
    "SignupUserOut",
    "VerifyEmailRequest",
]
