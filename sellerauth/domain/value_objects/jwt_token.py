"""Signed session token value objects."""

from dataclasses import dataclass
from enum import Enum


class TokenClass(str, Enum):
    """Selects the signing key a token is minted or verified with."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
