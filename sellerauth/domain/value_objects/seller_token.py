"""Token grant returned by the Login with Amazon token endpoint."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SellerTokenGrant:
    """Tokens issued for a selling partner.

    ``refresh_token`` is only present on ``authorization_code`` grants; LWA
    refresh grants return the access token alone.
    """

    access_token: str
    expires_in: int
    token_type: str = "bearer"
    refresh_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"SellerTokenGrant(token_type={self.token_type!r}, expires_in={self.expires_in})"
