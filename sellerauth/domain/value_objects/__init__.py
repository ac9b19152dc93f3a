"""Immutable value objects shared by the domain services."""

from .email_dispatch import EmailDispatchResult
from .jwt_token import TokenClass, TokenPair
from .lock_state import LockState
from .otp import OTP_FAILURE_MESSAGES, OtpPurpose, OtpVerificationResult
from .seller_token import SellerTokenGrant

__all__ = [
    "EmailDispatchResult",
    "LockState",
    "OTP_FAILURE_MESSAGES",
    "OtpPurpose",
    "OtpVerificationResult",
    "SellerTokenGrant",
    "TokenClass",
    "TokenPair",
]
