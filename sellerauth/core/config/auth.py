"""Authentication settings: JWT signing keys, token lifetimes, OTP and lockout limits.
"""

import logging

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines settings for token issuance, password hashing, OTPs and lockout.

    Access and refresh tokens are signed with two distinct HMAC secrets so that
    one class of token can never be validated with the other's key.

    Security Note:
        - Both secrets must be long random strings and must never be logged.
        - Rotating either secret invalidates every outstanding token of that class.
    """

    # JWT settings
    JWT_ACCESS_SECRET: SecretStr = SecretStr("")
    JWT_REFRESH_SECRET: SecretStr = SecretStr("")
    JWT_ALGORITHM: str = Field(default="HS256", pattern="^HS(256|384|512)$")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=1)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, ge=1)

    # Password hashing
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    # One-time codes
    OTP_EXPIRE_MINUTES: int = Field(default=10, ge=1)
    OTP_MAX_ATTEMPTS: int = Field(default=3, ge=1)

    # Account lockout
    MAX_LOGIN_ATTEMPTS: int = Field(default=5, ge=1)
    ACCOUNT_LOCK_MINUTES: int = Field(default=30, ge=1)

    @model_validator(mode="after")
    def _validate_jwt_secrets(self) -> "AuthSettings":
        """Rejects missing, short or shared signing secrets."""
        access = self.JWT_ACCESS_SECRET.get_secret_value()
        refresh = self.JWT_REFRESH_SECRET.get_secret_value()

        if not access or not refresh:
            error_msg = "JWT secrets not found. Please provide JWT_ACCESS_SECRET and JWT_REFRESH_SECRET."
            logger.error(error_msg)
            raise ValueError(error_msg)
        if len(access) < 32 or len(refresh) < 32:
            raise ValueError("JWT secrets must be at least 32 characters long")
        if access == refresh:
            raise ValueError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")

        return self
