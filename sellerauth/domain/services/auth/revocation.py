from datetime import datetime

from structlog import get_logger

from sellerauth.core.exceptions import DuplicateBlacklistEntryError
from sellerauth.domain.entities.token_blacklist import BlacklistedToken, TokenType
from sellerauth.domain.interfaces.repositories import ITokenBlacklistRepository
from sellerauth.utils.security import mask_token

logger = get_logger(__name__)


class TokenRevocationRegistry:
    """Denylist of tokens invalidated before their natural expiry.

    Entries live until the token's own ``exp``; the store is responsible for
    dropping them afterwards (native TTL or a periodic sweep).
    """

    def __init__(self, repository: ITokenBlacklistRepository):
        self.repository = repository

    async def revoke(self, token: str, token_type: TokenType, expires_at: datetime, user_id: str) -> bool:
        """Add ``token`` to the denylist.

        Returns:
            bool: False if the token was already revoked. A repeated revoke is
            not an error.
        """
        entry = BlacklistedToken(token=token, token_type=token_type, expires_at=expires_at, user_id=user_id)
        try:
            await self.repository.add(entry)
        except DuplicateBlacklistEntryError:
            logger.info("Token already revoked", token=mask_token(token), token_type=token_type.value)
            return False
        logger.info("Token revoked", token=mask_token(token), token_type=token_type.value, user_id=user_id)
        return True

    async def is_revoked(self, token: str) -> bool:
        return await self.repository.exists(token)
