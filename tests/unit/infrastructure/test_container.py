import pytest
from redis.asyncio import Redis

from sellerauth.core.config.settings import settings
from sellerauth.infrastructure.dependency_injection import build_container, close_container
from sellerauth.infrastructure.repositories import (
    MemoryUserRepository,
    RedisSellerAccountRepository,
    RedisTokenBlacklistRepository,
    RedisUserRepository,
)
from sellerauth.infrastructure.services.amazon import AmazonTokenClient
from sellerauth.infrastructure.services.email import EmailService


def test_memory_backend_from_settings():
    container = build_container(settings)

    assert isinstance(container.users, MemoryUserRepository)
    assert isinstance(container.email_sender, EmailService)
    assert isinstance(container.token_exchanger, AmazonTokenClient)
    assert container.redis is None
    assert container.orchestrator.users is container.users
    assert container.seller_linker.users is container.users


def test_redis_backend_uses_given_client(mocker):
    redis_client = mocker.AsyncMock(spec=Redis)
    redis_settings = settings.model_copy(update={"STORAGE_BACKEND": "redis"})

    container = build_container(redis_settings, redis=redis_client)

    assert isinstance(container.users, RedisUserRepository)
    assert isinstance(container.blacklist, RedisTokenBlacklistRepository)
    assert isinstance(container.seller_accounts, RedisSellerAccountRepository)
    assert container.redis is redis_client


@pytest.mark.asyncio
async def test_close_container_releases_clients(mocker):
    redis_client = mocker.AsyncMock(spec=Redis)
    redis_settings = settings.model_copy(update={"STORAGE_BACKEND": "redis"})
    container = build_container(redis_settings, redis=redis_client)

    await close_container(container)

    redis_client.aclose.assert_awaited_once()
