import pytest

from sellerauth.domain.services.auth import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_default_cost_factor_is_ten():
    password_hash = PasswordHasher().hash("s3cret-pass")

    assert password_hash.startswith("$2b$10$")


def test_hash_is_salted(hasher):
    assert hasher.hash("s3cret-pass") != hasher.hash("s3cret-pass")


def test_verify_round_trip(hasher):
    password_hash = hasher.hash("s3cret-pass")

    assert hasher.verify("s3cret-pass", password_hash) is True
    assert hasher.verify("wrong-pass", password_hash) is False


@pytest.mark.parametrize("candidate,stored", [("", "$2b$04$abc"), ("s3cret-pass", None), ("s3cret-pass", "")])
def test_verify_fails_closed_on_empty_input(hasher, candidate, stored):
    assert hasher.verify(candidate, stored) is False


def test_verify_fails_closed_on_unparseable_hash(hasher):
    assert hasher.verify("s3cret-pass", "not-a-bcrypt-hash") is False
