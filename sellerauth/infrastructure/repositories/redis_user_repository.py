"""Redis-backed user repository.

Each user is a JSON document at ``user:<id>``; ``user:email:<email>`` maps the
normalized email to the id and enforces uniqueness via ``SET NX``.
"""

from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from sellerauth.core.exceptions import DuplicateEmailError
from sellerauth.core.logging import mask_email
from sellerauth.domain.entities.user import User
from sellerauth.domain.interfaces.repositories import IUserRepository
from sellerauth.utils.clock import Clock, utc_now

logger = get_logger(__name__)

USER_KEY = "user:{user_id}"
EMAIL_INDEX_KEY = "user:email:{email}"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class RedisUserRepository(IUserRepository):
    """Stores ``User`` aggregates as whole JSON documents.

    Writes replace the full document, so concurrent updates to one user are
    last-write-wins.
    """

    def __init__(self, redis: Redis, clock: Optional[Clock] = None):
        self.redis = redis
        self._clock = clock or utc_now

    async def get_by_id(self, user_id: str) -> Optional[User]:
        raw = await self.redis.get(USER_KEY.format(user_id=user_id))
        if raw is None:
            return None
        return User.model_validate_json(raw)

    async def get_by_email(self, email: str) -> Optional[User]:
        user_id = await self.redis.get(EMAIL_INDEX_KEY.format(email=normalize_email(email)))
        if user_id is None:
            return None
        return await self.get_by_id(user_id)

    async def create(self, user: User) -> User:
        email_key = EMAIL_INDEX_KEY.format(email=user.email)
        claimed = await self.redis.set(email_key, user.id, nx=True)
        if not claimed:
            logger.info("Email already registered", email=mask_email(user.email))
            raise DuplicateEmailError()
        try:
            await self.redis.set(USER_KEY.format(user_id=user.id), user.model_dump_json())
        except Exception:
            logger.error("User document write failed, releasing email claim", user_id=user.id)
            await self.redis.delete(email_key)
            raise
        logger.debug("User created", user_id=user.id)
        return user

    async def save(self, user: User) -> User:
        user.updated_at = self._clock()
        await self.redis.set(USER_KEY.format(user_id=user.id), user.model_dump_json())
        return user

    async def delete(self, user: User) -> None:
        await self.redis.delete(
            USER_KEY.format(user_id=user.id),
            EMAIL_INDEX_KEY.format(email=user.email),
        )
        logger.info("User deleted", user_id=user.id)
