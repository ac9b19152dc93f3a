"""Redis-backed token blacklist.

Entries live at ``token_blacklist:<sha256(token)>`` with a native expiry at
the token's own ``exp`` (``SET NX EXAT``), so Redis drops them on its own.
"""

import math
from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from sellerauth.core.exceptions import DuplicateBlacklistEntryError
from sellerauth.domain.entities.token_blacklist import BlacklistedToken
from sellerauth.domain.interfaces.repositories import ITokenBlacklistRepository
from sellerauth.utils.clock import Clock, utc_now
from sellerauth.utils.security import token_fingerprint

logger = get_logger(__name__)

BLACKLIST_KEY = "token_blacklist:{fingerprint}"


class RedisTokenBlacklistRepository(ITokenBlacklistRepository):
    def __init__(self, redis: Redis, clock: Optional[Clock] = None):
        self.redis = redis
        self._clock = clock or utc_now

    async def add(self, entry: BlacklistedToken) -> None:
        if entry.expires_at <= self._clock():
            # Already past exp: verification rejects the token on its own.
            logger.debug("Skipping blacklist entry for expired token", user_id=entry.user_id)
            return

        stored = await self.redis.set(
            BLACKLIST_KEY.format(fingerprint=token_fingerprint(entry.token)),
            entry.model_dump_json(exclude={"token"}),
            nx=True,
            exat=math.ceil(entry.expires_at.timestamp()),
        )
        if not stored:
            raise DuplicateBlacklistEntryError()

    async def exists(self, token: str) -> bool:
        return bool(await self.redis.exists(BLACKLIST_KEY.format(fingerprint=token_fingerprint(token))))
