"""One-time code generation and verification for email verification and password reset."""

import hmac
import secrets
from datetime import timedelta
from random import Random
from typing import Optional

from structlog import get_logger

from sellerauth.domain.entities.user import OtpSlot, User
from sellerauth.domain.value_objects.otp import OtpPurpose, OtpVerificationResult
from sellerauth.utils.clock import Clock, utc_now

logger = get_logger(__name__)

_SLOT_FIELDS = {
    OtpPurpose.EMAIL_VERIFICATION: "verification_otp",
    OtpPurpose.PASSWORD_RESET: "password_reset_otp",
}


class OtpEngine:
    """Issues and checks 6-digit codes stored in the user's OTP slots.

    Each purpose owns one slot on the user. Generating a code replaces the
    slot, which also resets its attempt counter. Verification consumes one
    attempt once the slot is known to be present, unspent and unexpired, and
    clears the slot on success.

    Attributes:
        expire_minutes (int): Lifetime of a code.
        max_attempts (int): Attempts allowed before the slot is refused.
    """

    def __init__(
        self,
        expire_minutes: int = 10,
        max_attempts: int = 3,
        clock: Optional[Clock] = None,
        rng: Optional[Random] = None,
    ):
        self.expire_minutes = expire_minutes
        self.max_attempts = max_attempts
        self._clock = clock or utc_now
        self._rng = rng or secrets.SystemRandom()

    def generate(self, user: User, purpose: OtpPurpose) -> str:
        """Create a fresh code for ``purpose`` and store it on ``user``.

        Returns:
            str: The code, zero-padded to six digits.
        """
        code = f"{self._rng.randint(0, 999999):06d}"
        slot = OtpSlot(
            code=code,
            expires_at=self._clock() + timedelta(minutes=self.expire_minutes),
            attempts=0,
        )
        setattr(user, _SLOT_FIELDS[purpose], slot)
        logger.debug("OTP generated", user_id=user.id, purpose=purpose.value)
        return code

    def verify(self, user: User, purpose: OtpPurpose, submitted: str) -> OtpVerificationResult:
        """Check ``submitted`` against the slot for ``purpose``.

        The user is mutated in place (attempt counter, slot cleared and
        purpose flag applied on success); persisting it is the caller's job
        whatever the outcome.
        """
        field = _SLOT_FIELDS[purpose]
        slot: Optional[OtpSlot] = getattr(user, field)

        if slot is None:
            return OtpVerificationResult.NO_OTP
        if slot.attempts >= self.max_attempts:
            return OtpVerificationResult.TOO_MANY_ATTEMPTS
        if self._clock() > slot.expires_at:
            return OtpVerificationResult.EXPIRED

        slot.attempts += 1
        if not hmac.compare_digest(slot.code.encode(), str(submitted or "").encode()):
            logger.info("OTP mismatch", user_id=user.id, purpose=purpose.value, attempts=slot.attempts)
            return OtpVerificationResult.INVALID

        setattr(user, field, None)
        if purpose is OtpPurpose.EMAIL_VERIFICATION:
            user.is_email_verified = True
        return OtpVerificationResult.VALID
