import pytest

from tests.utils.api_helpers import bearer, login, signup_and_verify

SELLER_ID = "A3SELLER0EXAMPLE"
MARKETPLACE_ID = "ATVPDKIKX0DER"
CALLBACK = "/api/amazon/callback"


def _callback_params(**overrides):
    params = {"code": "auth-code-1", "selling_partner_id": SELLER_ID, "marketplace_id": MARKETPLACE_ID}
    params.update(overrides)
    return {key: value for key, value in params.items() if value is not None}


class TestAuthUrlEndpoint:
    @pytest.mark.asyncio
    async def test_default_region(self, async_client):
        response = await async_client.get("/api/amazon/auth-url")

        assert response.status_code == 200
        auth_url = response.json()["authUrl"]
        assert auth_url.startswith("https://sellercentral.amazon.com/apps/authorize/consent?")
        assert "application_id=amzn1.application-oa2-client.test" in auth_url
        assert "version=beta" in auth_url

    @pytest.mark.asyncio
    async def test_europe(self, async_client):
        response = await async_client.get("/api/amazon/auth-url", params={"region": "eu"})

        assert response.json()["authUrl"].startswith("https://sellercentral-europe.amazon.com/")

    @pytest.mark.asyncio
    async def test_unknown_region(self, async_client):
        response = await async_client.get("/api/amazon/auth-url", params={"region": "mars"})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_region"


class TestCallbackEndpoint:
    @pytest.mark.asyncio
    async def test_success_redirects_to_frontend(self, async_client, container):
        response = await async_client.get(CALLBACK, params=_callback_params())

        assert response.status_code == 302
        assert response.headers["location"] == "http://frontend.example.com/auth/success"
        stored = await container.seller_accounts.get_by_seller_id(SELLER_ID)
        assert stored.marketplace_id == MARKETPLACE_ID

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["code", "selling_partner_id", "marketplace_id"])
    async def test_missing_parameters(self, async_client, token_exchanger, missing):
        response = await async_client.get(CALLBACK, params=_callback_params(**{missing: None}))

        assert response.status_code == 400
        assert response.json()["code"] == "missing_parameters"
        assert token_exchanger.exchanged_codes == []

    @pytest.mark.asyncio
    async def test_exchange_failure_redirects_to_error_page(self, async_client, token_exchanger, container):
        token_exchanger.fail = True

        response = await async_client.get(CALLBACK, params=_callback_params())

        assert response.status_code == 302
        assert response.headers["location"] == "http://frontend.example.com/auth/error"
        assert await container.seller_accounts.get_by_seller_id(SELLER_ID) is None


class TestRefreshSellerTokenEndpoint:
    @pytest.mark.asyncio
    async def test_refresh(self, async_client, container):
        await async_client.get(CALLBACK, params=_callback_params())

        response = await async_client.post(f"/api/amazon/refresh-token/{SELLER_ID}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        stored = await container.seller_accounts.get_by_seller_id(SELLER_ID)
        assert stored.access_token.startswith("Atza|refreshed-")

    @pytest.mark.asyncio
    async def test_unknown_seller(self, async_client):
        response = await async_client.post("/api/amazon/refresh-token/UNKNOWN")

        assert response.status_code == 404
        assert response.json()["code"] == "seller_not_found"

    @pytest.mark.asyncio
    async def test_provider_failure(self, async_client, token_exchanger):
        await async_client.get(CALLBACK, params=_callback_params())
        token_exchanger.fail = True

        response = await async_client.post(f"/api/amazon/refresh-token/{SELLER_ID}")

        assert response.status_code == 500
        assert response.json()["code"] == "seller_token_exchange_failed"


class TestLinkAccountEndpoint:
    @pytest.mark.asyncio
    async def test_link_requires_authentication(self, async_client):
        response = await async_client.post(f"/api/amazon/accounts/{SELLER_ID}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_link_seller_to_current_user(self, async_client, email_sender, container):
        email = "seller.owner@example.com"
        await signup_and_verify(async_client, email_sender, email)
        tokens = await login(async_client, email)
        await async_client.get(CALLBACK, params=_callback_params())

        response = await async_client.post(f"/api/amazon/accounts/{SELLER_ID}", headers=bearer(tokens["accessToken"]))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["sellerId"] == SELLER_ID
        assert data["marketplaceIds"] == [MARKETPLACE_ID]
        assert "refreshToken" not in data
        user = await container.users.get_by_email(email)
        assert [account.seller_id for account in user.amazon_accounts] == [SELLER_ID]

    @pytest.mark.asyncio
    async def test_link_unknown_seller(self, async_client, email_sender):
        email = "seller.owner@example.com"
        await signup_and_verify(async_client, email_sender, email)
        tokens = await login(async_client, email)

        response = await async_client.post("/api/amazon/accounts/UNKNOWN", headers=bearer(tokens["accessToken"]))

        assert response.status_code == 404
