"""Rate limiting for the unauthenticated auth endpoints.

Counters are per client address and kept in the process (``memory://`` by
default); there is no cross-instance coordination.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from sellerauth.core.config.settings import settings


def get_limiter() -> Limiter:
    """Factory function for the rate limiter.

    Returns:
        Limiter: A configured slowapi.Limiter instance.
    """
    return Limiter(
        key_func=get_remote_address,
        enabled=settings.RATE_LIMIT_ENABLED,
        storage_uri=settings.RATE_LIMIT_STORAGE_URL,
    )


# Shared by the route decorators and ``app.state.limiter``
limiter = get_limiter()

AUTH_LIMIT = settings.RATE_LIMIT_AUTH
OTP_LIMIT = settings.RATE_LIMIT_OTP
