"""Injectable time source.

Services that compare against "now" (OTP expiry, lockout, token expiry)
accept a ``Clock`` so tests can pin or advance time.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
