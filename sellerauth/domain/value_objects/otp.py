"""One-time code value objects.

A code is six decimal digits drawn uniformly from ``000000``-``999999``. It is
kept as a string so leading zeros survive storage and comparison.
"""

from enum import Enum


class OtpPurpose(str, Enum):
    """Which slot on the user a code belongs to."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"


class OtpVerificationResult(str, Enum):
    """Outcome of checking a submitted code against a slot.

    Attributes:
        NO_OTP: The slot is empty.
        TOO_MANY_ATTEMPTS: The attempt budget was already spent.
        EXPIRED: The slot's expiry instant has passed.
        INVALID: The submitted code does not match.
        VALID: The code matched; the slot has been cleared.
    """

    NO_OTP = "no_otp"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    EXPIRED = "otp_expired"
    INVALID = "invalid_otp"
    VALID = "valid"

    @property
    def is_valid(self) -> bool:
        return self is OtpVerificationResult.VALID


OTP_FAILURE_MESSAGES = {
    OtpVerificationResult.NO_OTP: "No OTP found. Please request a new one",
    OtpVerificationResult.TOO_MANY_ATTEMPTS: "Too many attempts. Please request a new OTP",
    OtpVerificationResult.EXPIRED: "OTP has expired. Please request a new one",
    OtpVerificationResult.INVALID: "Invalid OTP",
}
