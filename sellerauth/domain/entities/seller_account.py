from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from sellerauth.utils.clock import utc_now


class SellerAccount(BaseModel):
    """OAuth credential for one Amazon selling partner.

    Keyed by ``seller_id``: the OAuth callback creates or updates the single
    record for a seller. It is independent of any user until a user links it.

    Attributes:
        seller_id: Selling partner identifier (unique).
        marketplace_id: Marketplace the consent was granted from.
        refresh_token: LWA refresh token. Not rotated by refresh grants.
        access_token: Current LWA access token.
        token_expires_at: When ``access_token`` stops being accepted.
    """

    seller_id: str = Field(min_length=1)
    marketplace_id: str = Field(min_length=1)
    refresh_token: str = Field(repr=False)
    access_token: str = Field(repr=False)
    token_type: str = "bearer"
    token_expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
