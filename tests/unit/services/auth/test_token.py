from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest
from jose import jwt

from sellerauth.core.exceptions import InvalidTokenError, TokenExpiredError
from sellerauth.domain.entities.user import Role
from sellerauth.domain.services.auth import TokenService
from sellerauth.domain.value_objects.jwt_token import TokenClass
from tests.factories.user import create_fake_user

ACCESS_SECRET = "unit-access-secret-0123456789abcdefghij"
REFRESH_SECRET = "unit-refresh-secret-0123456789abcdefghij"


@pytest.fixture
def token_service(clock):
    return TokenService(ACCESS_SECRET, REFRESH_SECRET, clock=clock)


@pytest.fixture
def user():
    return create_fake_user(role=Role.ADMIN)


def test_create_access_token(token_service, user, clock):
    # Act
    token = token_service.create_access_token(user)

    # Assert
    payload = jwt.decode(token, ACCESS_SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert payload["id"] == user.id
    assert payload["role"] == "admin"
    assert payload["iat"] == int(clock().timestamp())
    assert payload["exp"] == int((clock() + timedelta(hours=1)).timestamp())
    assert "jti" in payload


def test_create_refresh_token(token_service, user, clock):
    token = token_service.create_refresh_token(user)

    payload = jwt.decode(token, REFRESH_SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert payload["id"] == user.id
    assert "role" not in payload
    assert payload["exp"] == int((clock() + timedelta(days=7)).timestamp())


def test_tokens_are_unique(token_service, user):
    assert token_service.create_access_token(user) != token_service.create_access_token(user)


def test_issue_pair_round_trips(token_service, user):
    pair = token_service.issue_pair(user)

    assert token_service.verify(pair.access_token, TokenClass.ACCESS)["id"] == user.id
    assert token_service.verify(pair.refresh_token, TokenClass.REFRESH)["id"] == user.id


def test_access_token_does_not_verify_as_refresh(token_service, user):
    pair = token_service.issue_pair(user)

    with pytest.raises(InvalidTokenError) as exc_info:
        token_service.verify(pair.access_token, TokenClass.REFRESH)
    assert exc_info.value.code == "bad_signature"

    with pytest.raises(InvalidTokenError) as exc_info:
        token_service.verify(pair.refresh_token, TokenClass.ACCESS)
    assert exc_info.value.code == "bad_signature"


def test_expired_at_the_exp_instant(token_service, user, clock):
    token = token_service.create_access_token(user)
    clock.advance(hours=1)

    with pytest.raises(TokenExpiredError) as exc_info:
        token_service.verify(token, TokenClass.ACCESS)
    assert exc_info.value.code == "token_expired"


def test_valid_just_before_exp(token_service, user, clock):
    token = token_service.create_access_token(user)
    clock.advance(minutes=59, seconds=59)

    assert token_service.verify(token, TokenClass.ACCESS)["id"] == user.id


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_tokens(token_service, token):
    with pytest.raises(InvalidTokenError) as exc_info:
        token_service.verify(token, TokenClass.ACCESS)
    assert exc_info.value.code == "malformed_token"


def test_missing_required_claim_is_malformed(token_service, clock):
    token = pyjwt.encode({"iat": clock(), "exp": clock() + timedelta(hours=1)}, ACCESS_SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError) as exc_info:
        token_service.verify(token, TokenClass.ACCESS)
    assert exc_info.value.code == "malformed_token"


@pytest.mark.parametrize(
    "access,refresh",
    [("", REFRESH_SECRET), (ACCESS_SECRET, ""), (ACCESS_SECRET, ACCESS_SECRET)],
)
def test_secrets_must_be_present_and_distinct(access, refresh):
    with pytest.raises(ValueError):
        TokenService(access, refresh)


def test_decode_unverified_and_expiry_of(token_service, user, clock):
    token = token_service.create_refresh_token(user)
    clock.advance(days=30)

    claims = TokenService.decode_unverified(token)

    expected = (datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc) + timedelta(days=7))
    assert TokenService.expiry_of(claims) == expected


def test_decode_unverified_rejects_garbage():
    with pytest.raises(InvalidTokenError):
        TokenService.decode_unverified("garbage")


def test_expiry_of_requires_numeric_exp():
    with pytest.raises(InvalidTokenError):
        TokenService.expiry_of({"id": "abc"})
