"""Redis-backed seller credential store.

One JSON document per seller at ``seller_account:<seller_id>``. The access and
refresh tokens are Fernet-encrypted before they are written.
"""

import json
from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from sellerauth.domain.entities.seller_account import SellerAccount
from sellerauth.domain.interfaces.repositories import ISellerAccountRepository
from sellerauth.infrastructure.services.token_cipher import SellerTokenCipher

logger = get_logger(__name__)

SELLER_ACCOUNT_KEY = "seller_account:{seller_id}"
_ENCRYPTED_FIELDS = ("access_token", "refresh_token")


class RedisSellerAccountRepository(ISellerAccountRepository):
    def __init__(self, redis: Redis, cipher: SellerTokenCipher):
        self.redis = redis
        self.cipher = cipher

    async def get_by_seller_id(self, seller_id: str) -> Optional[SellerAccount]:
        raw = await self.redis.get(SELLER_ACCOUNT_KEY.format(seller_id=seller_id))
        if raw is None:
            return None
        document = json.loads(raw)
        for field in _ENCRYPTED_FIELDS:
            document[field] = self.cipher.decrypt(document[field])
        return SellerAccount.model_validate(document)

    async def upsert(self, account: SellerAccount) -> SellerAccount:
        document = account.model_dump(mode="json")
        for field in _ENCRYPTED_FIELDS:
            document[field] = self.cipher.encrypt(document[field])
        await self.redis.set(SELLER_ACCOUNT_KEY.format(seller_id=account.seller_id), json.dumps(document))
        logger.debug("Seller account stored", seller_id=account.seller_id)
        return account
