"""
Storage and rate limiting settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class StorageSettings(BaseSettings):
    """
    Defines the credential store backend and the rate limiter storage.

    ``redis`` persists users, blacklist entries and seller credentials as JSON
    documents and relies on native key expiry for the blacklist. ``memory``
    keeps everything in-process and runs a periodic sweep of expired
    blacklist entries; it is meant for development and tests.

    Security Note:
        - REDIS_URL should use ``rediss://`` and a password outside trusted networks.
    """
    STORAGE_BACKEND: str = Field(default="redis", pattern="^(redis|memory)$")
    REDIS_URL: str = "redis://localhost:6379/0"
    BLACKLIST_SWEEP_INTERVAL_SECONDS: int = Field(default=300, ge=1)

    # Rate limiting settings (single-process counters)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_AUTH: str = "20/15minutes"
    RATE_LIMIT_OTP: str = "5/15minutes"
    RATE_LIMIT_STORAGE_URL: str = "memory://"
