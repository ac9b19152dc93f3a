from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from sellerauth.domain.entities.user import LinkedSellerAccount, Role, User
from tests.factories.user import DEFAULT_PASSWORD, create_fake_user


def _linked(seller_id="A1SELLER", marketplace_ids=None, created_at=None):
    fields = dict(
        seller_id=seller_id,
        refresh_token="Atzr|refresh",
        access_token="Atza|access",
        expires_in=3600,
        marketplace_ids=marketplace_ids or ["ATVPDKIKX0DER"],
    )
    if created_at is not None:
        fields["created_at"] = created_at
    return LinkedSellerAccount(**fields)


def test_user_defaults():
    user = User(name="Jane Seller", email="jane@example.com")

    assert user.role == Role.USER
    assert user.is_active is True
    assert user.is_email_verified is False
    assert user.login_attempts == 0
    assert user.is_locked is False
    assert user.lock_until is None
    assert user.verification_otp is None
    assert user.password_reset_otp is None
    assert user.amazon_accounts == []
    assert len(user.id) == 32


def test_email_is_trimmed_and_lowercased():
    user = User(name="Jane Seller", email="  Jane.Seller@Example.COM ")

    assert user.email == "jane.seller@example.com"


def test_name_is_trimmed():
    user = User(name="   Jane   ", email="jane@example.com")

    assert user.name == "Jane"


@pytest.mark.parametrize("name", ["J", " J ", "x" * 51])
def test_name_length_is_enforced(name):
    with pytest.raises(ValidationError):
        User(name=name, email="jane@example.com")


def test_invalid_email_is_rejected():
    with pytest.raises(ValidationError):
        User(name="Jane Seller", email="not-an-email")


def test_secrets_do_not_appear_in_repr():
    user = create_fake_user()
    user.set_session_tokens("access-token-value", "refresh-token-value")

    text = repr(user)

    assert user.password_hash not in text
    assert "access-token-value" not in text
    assert "refresh-token-value" not in text


def test_set_password_stores_a_hash_not_the_raw_password():
    user = create_fake_user(password=DEFAULT_PASSWORD)

    assert user.password_hash is not None
    assert user.password_hash != DEFAULT_PASSWORD
    assert user.password_hash.startswith("$2b$")


def test_clear_session_tokens():
    user = create_fake_user()
    user.set_session_tokens("a", "r")

    user.clear_session_tokens()

    assert user.access_token is None
    assert user.refresh_token is None


class TestLinkedAccounts:
    def test_upsert_appends_new_seller(self):
        user = create_fake_user()

        user.upsert_linked_account(_linked("SELLER1"))
        user.upsert_linked_account(_linked("SELLER2"))

        assert [a.seller_id for a in user.amazon_accounts] == ["SELLER1", "SELLER2"]

    def test_upsert_merges_marketplaces_and_keeps_link_time(self):
        user = create_fake_user()
        first_link = datetime(2024, 6, 1, tzinfo=timezone.utc)
        user.upsert_linked_account(_linked("SELLER1", ["ATVPDKIKX0DER"], created_at=first_link))

        merged = user.upsert_linked_account(_linked("SELLER1", ["A2EUQ1WTGCTBG2"]))

        assert len(user.amazon_accounts) == 1
        assert merged.marketplace_ids == ["A2EUQ1WTGCTBG2", "ATVPDKIKX0DER"]
        assert merged.created_at == first_link

    def test_remove_by_marketplace(self):
        user = create_fake_user()
        user.upsert_linked_account(_linked("SELLER1", ["ATVPDKIKX0DER"]))
        user.upsert_linked_account(_linked("SELLER2", ["A1F83G8C2ARO7P"]))

        assert user.remove_linked_account("ATVPDKIKX0DER") is True
        assert [a.seller_id for a in user.amazon_accounts] == ["SELLER2"]
        assert user.remove_linked_account("ATVPDKIKX0DER") is False
