"""Helpers for handling bearer tokens without exposing them."""

import hashlib


def token_fingerprint(token: str) -> str:
    """SHA-256 hex digest of ``token``, used as a storage key."""
    return hashlib.sha256(token.encode()).hexdigest()


def mask_token(token: str) -> str:
    """Return a short prefix suitable for log output."""
    if not token:
        return "***"
    return f"{token[:8]}..."
