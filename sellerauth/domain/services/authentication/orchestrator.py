"""Authentication orchestrator.

Composes the OTP engine, the lock policy, password hashing, token issuance
and the revocation registry into the account flows: signup, email
verification, login, token refresh, logout, deactivation, reactivation and
password reset.

Every public flow runs behind ``orchestrated``: domain errors pass through
untouched, anything else (a store or transport failure) is logged and
surfaced as ``InternalError``. Raw failure detail is only attached when the
orchestrator was built with ``debug=True``.
"""

import asyncio
import functools
from dataclasses import dataclass
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from sellerauth.core.exceptions import (
    AccountAccessError,
    AuthenticationError,
    DependencyError,
    DuplicateEmailError,
    EmailServiceError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    OtpVerificationError,
    SellerAuthError,
    UserNotFoundError,
    ValidationError,
)
from sellerauth.core.logging import mask_email
from sellerauth.domain.entities.token_blacklist import TokenType
from sellerauth.domain.entities.user import User
from sellerauth.domain.interfaces.repositories import IUserRepository
from sellerauth.domain.interfaces.services import IEmailSender
from sellerauth.domain.services.auth.lockout import AccountLockPolicy
from sellerauth.domain.services.auth.otp import OtpEngine
from sellerauth.domain.services.auth.password import MIN_PASSWORD_LENGTH, PasswordHasher
from sellerauth.domain.services.auth.revocation import TokenRevocationRegistry
from sellerauth.domain.services.auth.token import TokenService
from sellerauth.domain.value_objects.email_dispatch import EmailDispatchResult
from sellerauth.domain.value_objects.jwt_token import TokenClass, TokenPair
from sellerauth.domain.value_objects.otp import OTP_FAILURE_MESSAGES, OtpPurpose
from sellerauth.utils.clock import Clock, utc_now

logger = structlog.get_logger(__name__)


def orchestrated(operation):
    """Map unexpected failures inside a flow to ``InternalError``.

    The wrapped coroutine's owner must expose a ``debug`` attribute.
    """

    @functools.wraps(operation)
    async def wrapper(self, *args, **kwargs):
        try:
            return await operation(self, *args, **kwargs)
        except SellerAuthError:
            raise
        except Exception as exc:
            logger.exception("Unexpected failure in auth flow", operation=operation.__name__)
            raise InternalError(
                "An unexpected error occurred",
                detail=f"{type(exc).__name__}: {exc}" if self.debug else None,
            ) from exc

    return wrapper


@dataclass(frozen=True)
class SignupResult:
    user: User
    preview_url: Optional[str] = None


@dataclass(frozen=True)
class LoginResult:
    user: User
    tokens: TokenPair


class AuthOrchestrator:
    """Runs the account flows against an injected user store and collaborators.

    Attributes:
        users (IUserRepository): Credential store for user documents.
        otp_engine (OtpEngine): Issues and checks one-time codes.
        lock_policy (AccountLockPolicy): Failed-login accounting.
        password_hasher (PasswordHasher): bcrypt hashing.
        token_service (TokenService): JWT issuance and verification.
        revocation_registry (TokenRevocationRegistry): Logout denylist.
        email_sender (IEmailSender): Delivers codes.
        debug (bool): Attach raw failure detail to ``InternalError`` and
            ``DependencyError``.
    """

    def __init__(
        self,
        users: IUserRepository,
        otp_engine: OtpEngine,
        lock_policy: AccountLockPolicy,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        revocation_registry: TokenRevocationRegistry,
        email_sender: IEmailSender,
        clock: Optional[Clock] = None,
        debug: bool = False,
    ):
        self.users = users
        self.otp_engine = otp_engine
        self.lock_policy = lock_policy
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.revocation_registry = revocation_registry
        self.email_sender = email_sender
        self._clock = clock or utc_now
        self.debug = debug

    # ------------------------------------------------------------------
    # Registration and email verification
    # ------------------------------------------------------------------

    @orchestrated
    async def signup(self, name: str, email: str, password: str) -> SignupResult:
        """Register an unverified user and email them a verification code.

        If the email cannot be dispatched the freshly created user is
        deleted again, so the address can be retried.

        Raises:
            DuplicateEmailError: If the email is already registered.
            ValidationError: If the name, email or password is unacceptable.
            DependencyError: ``email_dispatch_failed`` when sending fails.
        """
        self._check_password(password)
        try:
            user = User(name=name, email=email)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid registration data",
                code="invalid_user_data",
                detail=str(exc) if self.debug else None,
            ) from exc

        if await self.users.get_by_email(user.email) is not None:
            logger.info("Signup with existing email", email=mask_email(user.email))
            raise DuplicateEmailError()

        user.set_password(password, self.password_hasher)
        code = self.otp_engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
        user = await self.users.create(user)

        try:
            dispatch = await self.email_sender.send_otp(
                user.email, code, OtpPurpose.EMAIL_VERIFICATION, name=user.name
            )
        except Exception as exc:
            logger.error("Verification email failed, rolling back signup", user_id=user.id)
            await self.users.delete(user)
            raise self._dispatch_failed("Failed to send verification email", exc) from exc

        logger.info("User registered", user_id=user.id, email=mask_email(user.email))
        return SignupResult(user=user, preview_url=dispatch.preview_url)

    @orchestrated
    async def verify_email(self, email: str, otp: str) -> User:
        """Accept a verification code and mark the email verified.

        The attempt counter is persisted whatever the outcome.

        Raises:
            UserNotFoundError: If no user has this email.
            OtpVerificationError: For a missing, spent, expired or wrong code.
        """
        user = await self._get_user_by_email(email)
        result = self.otp_engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, otp)
        user = await self.users.save(user)
        if not result.is_valid:
            raise OtpVerificationError(OTP_FAILURE_MESSAGES[result], code=result.value)
        logger.info("Email verified", user_id=user.id)
        return user

    @orchestrated
    async def resend_verification(self, email: str) -> EmailDispatchResult:
        user = await self._get_user_by_email(email)
        if user.is_email_verified:
            raise ValidationError("Email is already verified", code="already_verified")

        code = self.otp_engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
        user = await self.users.save(user)
        try:
            return await self.email_sender.send_otp(
                user.email, code, OtpPurpose.EMAIL_VERIFICATION, name=user.name
            )
        except Exception as exc:
            raise self._dispatch_failed("Failed to send verification email", exc) from exc

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @orchestrated
    async def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue a token pair.

        The checks run in a fixed order: unknown email, active lock,
        deactivation, unverified email, then the password itself. Only the
        password check feeds the lock policy.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            AccountAccessError: ``account_locked``, ``account_deactivated`` or
                ``email_not_verified``.
        """
        user = await self.users.get_by_email(email or "")
        if user is None:
            logger.info("Login for unknown email", email=mask_email(email))
            raise InvalidCredentialsError()

        state = self.lock_policy.evaluate(user)
        if state.recovered:
            user = await self.users.save(user)
        if state.locked:
            raise self._locked(state.remaining_minutes)
        if not user.is_active:
            raise AccountAccessError("Account is deactivated. Please reactivate it first", code="account_deactivated")
        if not user.is_email_verified:
            raise AccountAccessError("Please verify your email before logging in", code="email_not_verified")

        if not self.password_hasher.verify(password, user.password_hash):
            state = self.lock_policy.register_failure(user)
            await self.users.save(user)
            logger.info("Invalid password", user_id=user.id, attempts=user.login_attempts)
            if state.locked:
                raise self._locked(state.remaining_minutes)
            raise InvalidCredentialsError()

        self.lock_policy.register_success(user)
        tokens = self.token_service.issue_pair(user)
        user.set_session_tokens(tokens.access_token, tokens.refresh_token)
        user.last_login = self._clock()
        user = await self.users.save(user)
        logger.info("User logged in", user_id=user.id)
        return LoginResult(user=user, tokens=tokens)

    @orchestrated
    async def refresh_token(self, refresh_token: Optional[str]) -> str:
        """Mint a new access token from a refresh token.

        The refresh token itself is not rotated.

        Raises:
            ValidationError: ``missing_token``.
            InvalidTokenError: Bad signature, malformed or revoked token.
            TokenExpiredError: Past ``exp``.
            AuthenticationError: ``user_not_found`` if the user is gone.
            AccountAccessError: ``account_deactivated``.
        """
        if not refresh_token:
            raise ValidationError("Refresh token is required", code="missing_token")

        claims = self.token_service.verify(refresh_token, TokenClass.REFRESH)
        if await self.revocation_registry.is_revoked(refresh_token):
            logger.warning("Revoked refresh token presented", user_id=claims.get("id"))
            raise InvalidTokenError("Token has been revoked", code="token_revoked")

        user = await self.users.get_by_id(str(claims["id"]))
        if user is None:
            raise AuthenticationError("User not found", code="user_not_found")
        if not user.is_active:
            raise AccountAccessError("Account is deactivated", code="account_deactivated")

        access_token = self.token_service.create_access_token(user)
        user.access_token = access_token
        await self.users.save(user)
        logger.info("Access token refreshed", user_id=user.id)
        return access_token

    @orchestrated
    async def logout(self, user: User, access_token: Optional[str], refresh_token: Optional[str]) -> None:
        """Revoke both tokens until their own expiry and clear the stored pair.

        Tokens are decoded without verification: an already expired or
        otherwise unverifiable token can still be listed. Revoking a token
        twice is not an error.

        Raises:
            ValidationError: ``missing_tokens`` or ``invalid_tokens``.
        """
        if not access_token or not refresh_token:
            raise ValidationError("Access token and refresh token are required", code="missing_tokens")

        try:
            access_exp = TokenService.expiry_of(TokenService.decode_unverified(access_token))
            refresh_exp = TokenService.expiry_of(TokenService.decode_unverified(refresh_token))
        except InvalidTokenError as exc:
            raise ValidationError("Invalid tokens", code="invalid_tokens") from exc

        await asyncio.gather(
            self.revocation_registry.revoke(access_token, TokenType.ACCESS, access_exp, user.id),
            self.revocation_registry.revoke(refresh_token, TokenType.REFRESH, refresh_exp, user.id),
        )

        user.clear_session_tokens()
        await self.users.save(user)
        logger.info("User logged out", user_id=user.id)

    # ------------------------------------------------------------------
    # Account state
    # ------------------------------------------------------------------

    @orchestrated
    async def deactivate(self, user: User) -> User:
        user.is_active = False
        user.deactivated_at = self._clock()
        user = await self.users.save(user)
        logger.info("Account deactivated", user_id=user.id)
        return user

    @orchestrated
    async def reactivate(self, email: str, password: str) -> User:
        """Re-enable a deactivated account after a password check.

        Raises:
            UserNotFoundError: If no user has this email.
            ValidationError: ``already_active``.
            InvalidCredentialsError: Wrong password.
        """
        user = await self._get_user_by_email(email)
        if user.is_active:
            raise ValidationError("Account is already active", code="already_active")
        if not self.password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        user.is_active = True
        user.deactivated_at = None
        user = await self.users.save(user)
        logger.info("Account reactivated", user_id=user.id)
        return user

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    @orchestrated
    async def request_password_reset(self, email: str) -> Optional[EmailDispatchResult]:
        """Email a reset code if the address is registered.

        Unknown addresses return ``None`` without error so the caller can
        answer identically in both cases.
        """
        user = await self.users.get_by_email(email or "")
        if user is None:
            logger.info("Password reset for unknown email", email=mask_email(email))
            return None

        code = self.otp_engine.generate(user, OtpPurpose.PASSWORD_RESET)
        user = await self.users.save(user)
        try:
            dispatch = await self.email_sender.send_otp(user.email, code, OtpPurpose.PASSWORD_RESET, name=user.name)
        except Exception as exc:
            raise self._dispatch_failed("Failed to send password reset email", exc) from exc
        logger.info("Password reset requested", user_id=user.id)
        return dispatch

    @orchestrated
    async def reset_password(self, email: str, otp: str, new_password: str) -> User:
        """Replace the password after a reset code is accepted.

        A successful reset also clears the lock state and the stored
        session tokens.

        Raises:
            ValidationError: If the new password is too short.
            UserNotFoundError: If no user has this email.
            OtpVerificationError: For a missing, spent, expired or wrong code.
        """
        self._check_password(new_password)
        user = await self._get_user_by_email(email)
        result = self.otp_engine.verify(user, OtpPurpose.PASSWORD_RESET, otp)
        if not result.is_valid:
            await self.users.save(user)
            raise OtpVerificationError(OTP_FAILURE_MESSAGES[result], code=result.value)

        user.set_password(new_password, self.password_hasher)
        self.lock_policy.register_success(user)
        user.clear_session_tokens()
        user = await self.users.save(user)
        logger.info("Password reset", user_id=user.id)
        return user

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_user_by_email(self, email: str) -> User:
        user = await self.users.get_by_email(email or "")
        if user is None:
            raise UserNotFoundError()
        return user

    @staticmethod
    def _check_password(password: Optional[str]) -> None:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                code="weak_password",
            )

    @staticmethod
    def _locked(remaining_minutes: int) -> AccountAccessError:
        return AccountAccessError(
            f"Account is temporarily locked. Try again in {remaining_minutes} minutes",
            code="account_locked",
        )

    def _dispatch_failed(self, message: str, exc: Exception) -> DependencyError:
        if isinstance(exc, EmailServiceError):
            detail = exc.detail or exc.message
        else:
            detail = f"{type(exc).__name__}: {exc}"
        return DependencyError(message, code="email_dispatch_failed", detail=detail if self.debug else None)
