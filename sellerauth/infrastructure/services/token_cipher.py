"""Encryption at rest for third-party OAuth tokens."""

from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from structlog import get_logger

logger = get_logger(__name__)


class SellerTokenCipher:
    """Fernet wrapper used by the seller credential store.

    Attributes:
        fernet (Fernet): Symmetric cipher keyed from ``SELLER_TOKEN_ENCRYPTION_KEY``.
    """

    def __init__(self, fernet: Fernet):
        self.fernet = fernet

    @classmethod
    def from_key(cls, key: Optional[str], required: bool = False) -> "SellerTokenCipher":
        """Build a cipher from a urlsafe base64 Fernet key.

        Outside production the key may be missing or malformed; a
        per-process key is generated instead, which makes stored seller
        tokens unreadable after a restart.

        Raises:
            ValueError: If ``required`` and the key is missing or invalid.
        """
        try:
            return cls(Fernet(key.encode()))
        except (AttributeError, ValueError):
            if required:
                raise ValueError("SELLER_TOKEN_ENCRYPTION_KEY must be a valid Fernet key")
            logger.warning(
                "Invalid SELLER_TOKEN_ENCRYPTION_KEY - falling back to a generated key. "
                "This should only happen in non-prod environments."
            )
            return cls(Fernet(Fernet.generate_key()))

    def encrypt(self, value: str) -> str:
        return self.fernet.encrypt(value.encode()).decode()

    def decrypt(self, value: str) -> str:
        """Raises ``ValueError`` if the ciphertext was not produced with this key."""
        try:
            return self.fernet.decrypt(value.encode()).decode()
        except InvalidToken as exc:
            raise ValueError("Stored seller token cannot be decrypted with the configured key") from exc
