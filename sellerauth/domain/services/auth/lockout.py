"""Account lockout after repeated failed password checks."""

import math
from datetime import timedelta
from typing import Optional

from structlog import get_logger

from sellerauth.domain.entities.user import User
from sellerauth.domain.value_objects.lock_state import LockState
from sellerauth.utils.clock import Clock, utc_now

logger = get_logger(__name__)


class AccountLockPolicy:
    """Tracks failed logins on the user and decides whether it is locked.

    The account moves ``OPEN -> LOCKED`` after ``max_attempts`` consecutive
    failures and back to ``OPEN`` lazily: the first evaluation after
    ``lock_until`` clears the lock fields. No background sweep is needed.
    """

    def __init__(self, max_attempts: int = 5, lock_minutes: int = 30, clock: Optional[Clock] = None):
        self.max_attempts = max_attempts
        self.lock_minutes = lock_minutes
        self._clock = clock or utc_now

    def evaluate(self, user: User) -> LockState:
        """Return the current lock state, clearing an elapsed lock in place.

        When ``recovered`` is set on the result the user was modified and
        must be saved.
        """
        if not user.is_locked:
            return LockState.open()

        now = self._clock()
        if user.lock_until is None or user.lock_until <= now:
            self._clear(user)
            logger.info("Account lock expired", user_id=user.id)
            return LockState.open(recovered=True)

        return LockState(locked=True, remaining_minutes=self._remaining_minutes(user, now))

    def is_account_locked(self, user: User) -> bool:
        return self.evaluate(user).locked

    def register_failure(self, user: User) -> LockState:
        """Count one failed password check, locking once the limit is reached."""
        user.login_attempts += 1
        if user.login_attempts >= self.max_attempts:
            now = self._clock()
            user.is_locked = True
            user.lock_until = now + timedelta(minutes=self.lock_minutes)
            logger.warning("Account locked", user_id=user.id, attempts=user.login_attempts)
            return LockState(locked=True, remaining_minutes=self._remaining_minutes(user, now))
        return LockState.open()

    def register_success(self, user: User) -> None:
        self._clear(user)

    def can_login(self, user: User) -> bool:
        return user.is_active and not self.is_account_locked(user)

    @staticmethod
    def _clear(user: User) -> None:
        user.login_attempts = 0
        user.is_locked = False
        user.lock_until = None

    @staticmethod
    def _remaining_minutes(user: User, now) -> int:
        return math.ceil((user.lock_until - now).total_seconds() / 60)
