import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from structlog import get_logger

from sellerauth.core.exceptions import InvalidTokenError, TokenExpiredError
from sellerauth.domain.entities.user import User
from sellerauth.domain.value_objects.jwt_token import TokenClass, TokenPair
from sellerauth.utils.clock import Clock, utc_now

logger = get_logger(__name__)


class TokenService:
    """Service for minting and verifying JWT access and refresh tokens.

    Access and refresh tokens are HMAC-signed with two distinct secrets, so a
    token of one class never validates under the other's key. Expiry is
    checked against the injected clock rather than the wall clock.

    Access claims: ``{id, role, iat, exp, jti}``.
    Refresh claims: ``{id, iat, exp, jti}``.

    Attributes:
        algorithm (str): HMAC algorithm, HS256 by default.
        access_ttl (timedelta): Lifetime of access tokens.
        refresh_ttl (timedelta): Lifetime of refresh tokens.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(hours=1),
        refresh_ttl: timedelta = timedelta(days=7),
        clock: Optional[Clock] = None,
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("Both access and refresh signing secrets are required")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh signing secrets must differ")
        self._secrets = {TokenClass.ACCESS: access_secret, TokenClass.REFRESH: refresh_secret}
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self._clock = clock or utc_now

    def create_access_token(self, user: User) -> str:
        now = self._clock()
        payload = {
            "id": user.id,
            "role": user.role.value,
            "iat": now,
            "exp": now + self.access_ttl,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._secrets[TokenClass.ACCESS], algorithm=self.algorithm)

    def create_refresh_token(self, user: User) -> str:
        now = self._clock()
        payload = {
            "id": user.id,
            "iat": now,
            "exp": now + self.refresh_ttl,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._secrets[TokenClass.REFRESH], algorithm=self.algorithm)

    def issue_pair(self, user: User) -> TokenPair:
        pair = TokenPair(
            access_token=self.create_access_token(user),
            refresh_token=self.create_refresh_token(user),
        )
        logger.debug("Token pair issued", user_id=user.id)
        return pair

    def verify(self, token: str, token_class: TokenClass) -> Dict[str, Any]:
        """Validate a token's signature and expiry and return its claims.

        Args:
            token: Encoded JWT.
            token_class: Which signing key to verify with.

        Raises:
            TokenExpiredError: If ``exp`` is at or before the current instant.
            InvalidTokenError: ``bad_signature`` if the signature does not match
                the key for ``token_class``, ``malformed_token`` otherwise.
        """
        if not token:
            raise InvalidTokenError("Token is required", code="malformed_token")

        required = ["id", "exp", "iat"]
        if token_class is TokenClass.ACCESS:
            required.append("role")

        try:
            claims = jwt.decode(
                token,
                self._secrets[token_class],
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": required,
                },
            )
        except jwt.InvalidSignatureError:
            logger.info("Token signature mismatch", token_class=token_class.value)
            raise InvalidTokenError("Invalid token signature", code="bad_signature")
        except jwt.PyJWTError as exc:
            logger.info("Malformed token", token_class=token_class.value, error=type(exc).__name__)
            raise InvalidTokenError("Malformed token", code="malformed_token")

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise InvalidTokenError("Malformed token", code="malformed_token")
        if exp <= self._clock().timestamp():
            raise TokenExpiredError("Token expired", code="token_expired")
        return claims

    @staticmethod
    def decode_unverified(token: str) -> Dict[str, Any]:
        """Recover claims without checking signature or expiry.

        Raises:
            InvalidTokenError: If the token cannot be decoded at all.
        """
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("Malformed token", code="malformed_token") from exc

    @staticmethod
    def expiry_of(claims: Dict[str, Any]) -> datetime:
        """Return the ``exp`` claim as an aware datetime.

        Raises:
            InvalidTokenError: If the claim is missing or not numeric.
        """
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise InvalidTokenError("Token has no expiry", code="malformed_token")
        return datetime.fromtimestamp(exp, tz=timezone.utc)
