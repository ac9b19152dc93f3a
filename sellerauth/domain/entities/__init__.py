"""Domain entities: the user aggregate, revoked tokens and seller credentials."""

from .seller_account import SellerAccount
from .token_blacklist import BlacklistedToken, TokenType
from .user import LinkedSellerAccount, OtpSlot, Role, User

__all__ = [
    "User",
    "Role",
    "OtpSlot",
    "LinkedSellerAccount",
    "BlacklistedToken",
    "TokenType",
    "SellerAccount",
]
