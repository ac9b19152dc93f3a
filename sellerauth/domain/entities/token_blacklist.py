from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from sellerauth.utils.clock import utc_now


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class BlacklistedToken(BaseModel):
    """A revoked JWT.

    Entries are an authoritative negative cache: a token listed here is
    invalid whatever its signature says. ``expires_at`` is copied from the
    token's own ``exp`` claim; past that instant the entry carries no
    information and the store drops it.
    """

    token: str = Field(repr=False)
    token_type: TokenType
    expires_at: datetime
    user_id: str
    created_at: datetime = Field(default_factory=utc_now)
