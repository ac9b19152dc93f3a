from .lockout import AccountLockPolicy
from .otp import OtpEngine
from .password import MIN_PASSWORD_LENGTH, PasswordHasher
from .revocation import TokenRevocationRegistry
from .token import TokenService

__all__ = [
    "AccountLockPolicy",
    "MIN_PASSWORD_LENGTH",
    "OtpEngine",
    "PasswordHasher",
    "TokenRevocationRegistry",
    "TokenService",
]
