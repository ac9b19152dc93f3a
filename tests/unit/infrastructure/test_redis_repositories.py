import json
from datetime import timedelta

import pytest
from cryptography.fernet import Fernet
from redis.asyncio import Redis

from sellerauth.core.exceptions import DuplicateBlacklistEntryError, DuplicateEmailError
from sellerauth.domain.entities.seller_account import SellerAccount
from sellerauth.domain.entities.token_blacklist import BlacklistedToken, TokenType
from sellerauth.infrastructure.repositories import (
    RedisSellerAccountRepository,
    RedisTokenBlacklistRepository,
    RedisUserRepository,
)
from sellerauth.infrastructure.services.token_cipher import SellerTokenCipher
from sellerauth.utils.security import token_fingerprint
from tests.factories.user import create_fake_user


@pytest.fixture
def redis_client(mocker):
    client = mocker.AsyncMock(spec=Redis)
    # redis-py defines its asyncio command methods as plain functions, so the
    # spec alone yields sync child mocks; wire the awaited commands explicitly.
    for command in ("get", "set", "exists", "delete"):
        setattr(client, command, mocker.AsyncMock())
    return client


class TestRedisUserRepository:
    @pytest.mark.asyncio
    async def test_create_claims_email_then_writes_document(self, redis_client, clock):
        redis_client.set.return_value = True
        repository = RedisUserRepository(redis_client, clock=clock)
        user = create_fake_user(email="jane@example.com")

        await repository.create(user)

        first, second = redis_client.set.await_args_list
        assert first.args == ("user:email:jane@example.com", user.id)
        assert first.kwargs == {"nx": True}
        assert second.args[0] == f"user:{user.id}"
        assert json.loads(second.args[1])["email"] == "jane@example.com"

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, redis_client, clock):
        redis_client.set.return_value = None
        repository = RedisUserRepository(redis_client, clock=clock)

        with pytest.raises(DuplicateEmailError):
            await repository.create(create_fake_user(email="jane@example.com"))
        redis_client.set.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_document_write_releases_email_claim(self, redis_client, clock):
        redis_client.set.side_effect = [True, ConnectionError("redis down")]
        repository = RedisUserRepository(redis_client, clock=clock)
        user = create_fake_user(email="jane@example.com")

        with pytest.raises(ConnectionError):
            await repository.create(user)

        assert [call.args[0] for call in redis_client.set.await_args_list] == [
            "user:email:jane@example.com",
            f"user:{user.id}",
        ]
        redis_client.delete.assert_awaited_once_with("user:email:jane@example.com")

    @pytest.mark.asyncio
    async def test_get_by_email_follows_index(self, redis_client, clock):
        user = create_fake_user(email="jane@example.com")
        documents = {"user:email:jane@example.com": user.id, f"user:{user.id}": user.model_dump_json()}
        redis_client.get.side_effect = lambda key: documents.get(key)
        repository = RedisUserRepository(redis_client, clock=clock)

        loaded = await repository.get_by_email("Jane@Example.com ")

        assert loaded.id == user.id
        assert loaded.password_hash == user.password_hash
        assert await repository.get_by_email("other@example.com") is None

    @pytest.mark.asyncio
    async def test_save_overwrites_document(self, redis_client, clock):
        repository = RedisUserRepository(redis_client, clock=clock)
        user = create_fake_user()

        await repository.save(user)

        key, payload = redis_client.set.await_args.args
        assert key == f"user:{user.id}"
        assert json.loads(payload)["updated_at"] is not None
        assert user.updated_at == clock()

    @pytest.mark.asyncio
    async def test_delete_removes_document_and_index(self, redis_client, clock):
        repository = RedisUserRepository(redis_client, clock=clock)
        user = create_fake_user(email="jane@example.com")

        await repository.delete(user)

        redis_client.delete.assert_awaited_once_with(f"user:{user.id}", "user:email:jane@example.com")


class TestRedisTokenBlacklistRepository:
    @pytest.mark.asyncio
    async def test_add_sets_expiry_at_token_exp(self, redis_client, clock):
        redis_client.set.return_value = True
        repository = RedisTokenBlacklistRepository(redis_client, clock=clock)
        expires_at = clock() + timedelta(hours=1)

        await repository.add(
            BlacklistedToken(token="token-a", token_type=TokenType.ACCESS, expires_at=expires_at, user_id="u1")
        )

        call = redis_client.set.await_args
        assert call.args[0] == f"token_blacklist:{token_fingerprint('token-a')}"
        assert "token-a" not in call.args[1]
        assert call.kwargs == {"nx": True, "exat": int(expires_at.timestamp())}

    @pytest.mark.asyncio
    async def test_fractional_expiry_rounds_up(self, redis_client, clock):
        redis_client.set.return_value = True
        repository = RedisTokenBlacklistRepository(redis_client, clock=clock)
        expires_at = clock() + timedelta(minutes=15, milliseconds=400)

        await repository.add(
            BlacklistedToken(token="token-a", token_type=TokenType.ACCESS, expires_at=expires_at, user_id="u1")
        )

        assert redis_client.set.await_args.kwargs["exat"] == int(expires_at.timestamp()) + 1

    @pytest.mark.asyncio
    async def test_add_duplicate(self, redis_client, clock):
        redis_client.set.return_value = None
        repository = RedisTokenBlacklistRepository(redis_client, clock=clock)

        with pytest.raises(DuplicateBlacklistEntryError):
            await repository.add(
                BlacklistedToken(
                    token="token-a",
                    token_type=TokenType.REFRESH,
                    expires_at=clock() + timedelta(days=1),
                    user_id="u1",
                )
            )

    @pytest.mark.asyncio
    async def test_already_expired_token_is_not_stored(self, redis_client, clock):
        repository = RedisTokenBlacklistRepository(redis_client, clock=clock)

        await repository.add(
            BlacklistedToken(token="token-a", token_type=TokenType.ACCESS, expires_at=clock(), user_id="u1")
        )

        redis_client.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exists(self, redis_client, clock):
        redis_client.exists.return_value = 1
        repository = RedisTokenBlacklistRepository(redis_client, clock=clock)

        assert await repository.exists("token-a") is True
        redis_client.exists.assert_awaited_once_with(f"token_blacklist:{token_fingerprint('token-a')}")


class TestRedisSellerAccountRepository:
    @pytest.mark.asyncio
    async def test_tokens_are_encrypted_at_rest(self, redis_client, clock):
        cipher = SellerTokenCipher(Fernet(Fernet.generate_key()))
        repository = RedisSellerAccountRepository(redis_client, cipher)
        account = SellerAccount(
            seller_id="SELLER1",
            marketplace_id="ATVPDKIKX0DER",
            refresh_token="Atzr|secret-refresh",
            access_token="Atza|secret-access",
            token_expires_at=clock() + timedelta(hours=1),
        )

        await repository.upsert(account)

        key, payload = redis_client.set.await_args.args
        assert key == "seller_account:SELLER1"
        assert "Atzr|secret-refresh" not in payload
        assert "Atza|secret-access" not in payload

        redis_client.get.return_value = payload
        loaded = await repository.get_by_seller_id("SELLER1")
        assert loaded.refresh_token == "Atzr|secret-refresh"
        assert loaded.access_token == "Atza|secret-access"

    @pytest.mark.asyncio
    async def test_missing_seller(self, redis_client):
        redis_client.get.return_value = None
        repository = RedisSellerAccountRepository(redis_client, SellerTokenCipher(Fernet(Fernet.generate_key())))

        assert await repository.get_by_seller_id("SELLER1") is None
