"""Lock state value object returned by the account lock policy."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LockState:
    """Result of evaluating a user's lockout fields at a given instant.

    Attributes:
        locked: Whether the account is currently locked.
        remaining_minutes: Minutes until the lock lapses, rounded up. Zero when unlocked.
        recovered: True when an elapsed lock was just cleared on the user and
            the change still has to be persisted.
    """

    locked: bool
    remaining_minutes: int = 0
    recovered: bool = False

    @classmethod
    def open(cls, recovered: bool = False) -> "LockState":
        return cls(locked=False, remaining_minutes=0, recovered=recovered)
