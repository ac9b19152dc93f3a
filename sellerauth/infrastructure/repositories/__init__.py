from .memory import (
    MemorySellerAccountRepository,
    MemoryTokenBlacklistRepository,
    MemoryUserRepository,
)
from .redis_seller_account_repository import RedisSellerAccountRepository
from .redis_token_blacklist_repository import RedisTokenBlacklistRepository
from .redis_user_repository import RedisUserRepository

__all__ = [
    "MemorySellerAccountRepository",
    "MemoryTokenBlacklistRepository",
    "MemoryUserRepository",
    "RedisSellerAccountRepository",
    "RedisTokenBlacklistRepository",
    "RedisUserRepository",
]
