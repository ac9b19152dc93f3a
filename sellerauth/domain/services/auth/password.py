from passlib.context import CryptContext
from structlog import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


class PasswordHasher:
    """bcrypt hashing through a passlib ``CryptContext``.

    Hashes are only produced from raw passwords; an existing hash is never
    fed back in. Verification is constant-time and fails closed when the
    stored hash cannot be parsed.
    """

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, raw_password: str) -> str:
        return self.pwd_context.hash(raw_password)

    def verify(self, candidate: str, password_hash: str) -> bool:
        if not candidate or not password_hash:
            return False
        try:
            return self.pwd_context.verify(candidate, password_hash)
        except (ValueError, TypeError) as exc:
            logger.warning("Password verification failed", error=type(exc).__name__)
            return False
