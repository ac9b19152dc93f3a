"""Composition root.

``build_container`` wires the concrete adapters selected by settings into the
domain services. Tests pass their own collaborators through the keyword
overrides; anything not overridden is built from settings.
"""

from dataclasses import dataclass
from datetime import timedelta
from random import Random
from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from sellerauth.domain.interfaces.repositories import (
    ISellerAccountRepository,
    ITokenBlacklistRepository,
    IUserRepository,
)
from sellerauth.domain.interfaces.services import IEmailSender, ISellerTokenExchanger
from sellerauth.domain.services.auth import (
    AccountLockPolicy,
    OtpEngine,
    PasswordHasher,
    TokenRevocationRegistry,
    TokenService,
)
from sellerauth.domain.services.authentication import AuthOrchestrator
from sellerauth.domain.services.seller import SellerCredentialLinker
from sellerauth.infrastructure.redis import close_redis_client, create_redis_client
from sellerauth.infrastructure.repositories import (
    MemorySellerAccountRepository,
    MemoryTokenBlacklistRepository,
    MemoryUserRepository,
    RedisSellerAccountRepository,
    RedisTokenBlacklistRepository,
    RedisUserRepository,
)
from sellerauth.infrastructure.services.amazon import AmazonTokenClient
from sellerauth.infrastructure.services.email import EmailService
from sellerauth.infrastructure.services.token_cipher import SellerTokenCipher
from sellerauth.utils.clock import Clock, utc_now

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Everything a request handler may need, built once per application."""

    users: IUserRepository
    blacklist: ITokenBlacklistRepository
    seller_accounts: ISellerAccountRepository
    email_sender: IEmailSender
    token_exchanger: ISellerTokenExchanger
    token_service: TokenService
    revocation_registry: TokenRevocationRegistry
    orchestrator: AuthOrchestrator
    seller_linker: SellerCredentialLinker
    redis: Optional[Redis] = None


def build_container(
    settings,
    *,
    users: Optional[IUserRepository] = None,
    blacklist: Optional[ITokenBlacklistRepository] = None,
    seller_accounts: Optional[ISellerAccountRepository] = None,
    email_sender: Optional[IEmailSender] = None,
    token_exchanger: Optional[ISellerTokenExchanger] = None,
    redis: Optional[Redis] = None,
    clock: Optional[Clock] = None,
    rng: Optional[Random] = None,
) -> ServiceContainer:
    """Assemble the service graph.

    Args:
        settings: Application ``Settings``.
        users, blacklist, seller_accounts: Repository overrides.
        email_sender, token_exchanger: Adapter overrides.
        redis: Client to use for the Redis backend instead of creating one.
        clock: Time source shared by every service.
        rng: Random source for OTP generation.
    """
    clock = clock or utc_now

    if settings.STORAGE_BACKEND == "redis":
        redis = redis or create_redis_client(settings.REDIS_URL)
        cipher = SellerTokenCipher.from_key(
            settings.SELLER_TOKEN_ENCRYPTION_KEY.get_secret_value(),
            required=settings.is_production,
        )
        users = users or RedisUserRepository(redis, clock=clock)
        blacklist = blacklist or RedisTokenBlacklistRepository(redis, clock=clock)
        seller_accounts = seller_accounts or RedisSellerAccountRepository(redis, cipher)
    else:
        users = users or MemoryUserRepository(clock=clock)
        blacklist = blacklist or MemoryTokenBlacklistRepository(clock=clock)
        seller_accounts = seller_accounts or MemorySellerAccountRepository()

    email_sender = email_sender or EmailService.from_settings(settings)
    token_exchanger = token_exchanger or AmazonTokenClient.from_settings(settings)

    token_service = TokenService(
        access_secret=settings.JWT_ACCESS_SECRET.get_secret_value(),
        refresh_secret=settings.JWT_REFRESH_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        clock=clock,
    )
    revocation_registry = TokenRevocationRegistry(blacklist)

    orchestrator = AuthOrchestrator(
        users=users,
        otp_engine=OtpEngine(
            expire_minutes=settings.OTP_EXPIRE_MINUTES,
            max_attempts=settings.OTP_MAX_ATTEMPTS,
            clock=clock,
            rng=rng,
        ),
        lock_policy=AccountLockPolicy(
            max_attempts=settings.MAX_LOGIN_ATTEMPTS,
            lock_minutes=settings.ACCOUNT_LOCK_MINUTES,
            clock=clock,
        ),
        password_hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        token_service=token_service,
        revocation_registry=revocation_registry,
        email_sender=email_sender,
        clock=clock,
        debug=settings.DEBUG,
    )
    seller_linker = SellerCredentialLinker(
        accounts=seller_accounts,
        users=users,
        exchanger=token_exchanger,
        client_id=settings.AMAZON_CLIENT_ID,
        clock=clock,
        debug=settings.DEBUG,
    )

    logger.info("Service container built", storage_backend=settings.STORAGE_BACKEND)
    return ServiceContainer(
        users=users,
        blacklist=blacklist,
        seller_accounts=seller_accounts,
        email_sender=email_sender,
        token_exchanger=token_exchanger,
        token_service=token_service,
        revocation_registry=revocation_registry,
        orchestrator=orchestrator,
        seller_linker=seller_linker,
        redis=redis,
    )


async def close_container(container: ServiceContainer) -> None:
    """Release network resources held by the container."""
    aclose = getattr(container.token_exchanger, "aclose", None)
    if aclose is not None:
        await aclose()
    if container.redis is not None:
        await close_redis_client(container.redis)
