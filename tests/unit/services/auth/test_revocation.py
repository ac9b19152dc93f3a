from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from sellerauth.core.exceptions import DuplicateBlacklistEntryError
from sellerauth.domain.entities.token_blacklist import TokenType
from sellerauth.domain.interfaces.repositories import ITokenBlacklistRepository
from sellerauth.domain.services.auth import TokenRevocationRegistry
from sellerauth.infrastructure.repositories import MemoryTokenBlacklistRepository


@pytest.fixture
def registry(clock):
    return TokenRevocationRegistry(MemoryTokenBlacklistRepository(clock=clock))


@pytest.mark.asyncio
async def test_revoked_token_is_reported(registry, clock):
    assert await registry.is_revoked("token-a") is False

    added = await registry.revoke("token-a", TokenType.ACCESS, clock() + timedelta(hours=1), "user-1")

    assert added is True
    assert await registry.is_revoked("token-a") is True
    assert await registry.is_revoked("token-b") is False


@pytest.mark.asyncio
async def test_second_revoke_is_not_an_error(registry, clock):
    expires_at = clock() + timedelta(hours=1)
    await registry.revoke("token-a", TokenType.REFRESH, expires_at, "user-1")

    assert await registry.revoke("token-a", TokenType.REFRESH, expires_at, "user-1") is False
    assert await registry.is_revoked("token-a") is True


@pytest.mark.asyncio
async def test_entry_lapses_with_token_expiry(registry, clock):
    await registry.revoke("token-a", TokenType.ACCESS, clock() + timedelta(minutes=5), "user-1")
    clock.advance(minutes=5)

    assert await registry.is_revoked("token-a") is False


@pytest.mark.asyncio
async def test_duplicate_from_store_is_swallowed(clock):
    repository = AsyncMock(spec=ITokenBlacklistRepository)
    repository.add.side_effect = DuplicateBlacklistEntryError()
    registry = TokenRevocationRegistry(repository)

    assert await registry.revoke("token-a", TokenType.ACCESS, clock(), "user-1") is False
    repository.add.assert_awaited_once()
