"""In-process repositories for development and tests.

They mirror the Redis adapters' behavior: documents are copied on the way in
and out, email uniqueness is enforced on create, and duplicate blacklist
inserts raise. Blacklist entries are not expired natively; the application
lifespan calls ``sweep_expired`` periodically.
"""

from typing import Dict, Optional

from structlog import get_logger

from sellerauth.core.exceptions import DuplicateBlacklistEntryError, DuplicateEmailError
from sellerauth.domain.entities.seller_account import SellerAccount
from sellerauth.domain.entities.token_blacklist import BlacklistedToken
from sellerauth.domain.entities.user import User
from sellerauth.domain.interfaces.repositories import (
    ISellerAccountRepository,
    ITokenBlacklistRepository,
    IUserRepository,
)
from sellerauth.infrastructure.repositories.redis_user_repository import normalize_email
from sellerauth.utils.clock import Clock, utc_now
from sellerauth.utils.security import token_fingerprint

logger = get_logger(__name__)


class MemoryUserRepository(IUserRepository):
    def __init__(self, clock: Optional[Clock] = None):
        self._users: Dict[str, User] = {}
        self._email_index: Dict[str, str] = {}
        self._clock = clock or utc_now

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        user_id = self._email_index.get(normalize_email(email))
        if user_id is None:
            return None
        return await self.get_by_id(user_id)

    async def create(self, user: User) -> User:
        if user.email in self._email_index:
            raise DuplicateEmailError()
        self._email_index[user.email] = user.id
        self._users[user.id] = user.model_copy(deep=True)
        return user

    async def save(self, user: User) -> User:
        user.updated_at = self._clock()
        self._users[user.id] = user.model_copy(deep=True)
        return user

    async def delete(self, user: User) -> None:
        self._users.pop(user.id, None)
        self._email_index.pop(user.email, None)

    def __len__(self) -> int:
        return len(self._users)


class MemoryTokenBlacklistRepository(ITokenBlacklistRepository):
    def __init__(self, clock: Optional[Clock] = None):
        self._entries: Dict[str, BlacklistedToken] = {}
        self._clock = clock or utc_now

    async def add(self, entry: BlacklistedToken) -> None:
        key = token_fingerprint(entry.token)
        existing = self._entries.get(key)
        if existing is not None and existing.expires_at > self._clock():
            raise DuplicateBlacklistEntryError()
        self._entries[key] = entry.model_copy()

    async def exists(self, token: str) -> bool:
        entry = self._entries.get(token_fingerprint(token))
        return entry is not None and entry.expires_at > self._clock()

    def sweep_expired(self) -> int:
        """Drop entries past their expiry and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Swept expired blacklist entries", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)


class MemorySellerAccountRepository(ISellerAccountRepository):
    def __init__(self):
        self._accounts: Dict[str, SellerAccount] = {}

    async def get_by_seller_id(self, seller_id: str) -> Optional[SellerAccount]:
        account = self._accounts.get(seller_id)
        return account.model_copy(deep=True) if account else None

    async def upsert(self, account: SellerAccount) -> SellerAccount:
        self._accounts[account.seller_id] = account.model_copy(deep=True)
        return account

    def __len__(self) -> int:
        return len(self._accounts)
