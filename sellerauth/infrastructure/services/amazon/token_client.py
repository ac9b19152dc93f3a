"""Login with Amazon token endpoint client.

Posts ``authorization_code`` and ``refresh_token`` grants with httpx. There are
no automatic retries; any transport failure or non-2xx reply surfaces as
``SellerTokenExchangeError``.
"""

from typing import Any, Dict, Optional

import httpx
from structlog import get_logger

from sellerauth.core.exceptions import SellerTokenExchangeError
from sellerauth.domain.interfaces.services import ISellerTokenExchanger
from sellerauth.domain.value_objects.seller_token import SellerTokenGrant

logger = get_logger(__name__)


class AmazonTokenClient(ISellerTokenExchanger):
    """Async client for the LWA ``/auth/o2/token`` endpoint.

    Attributes:
        token_url (str): LWA token endpoint.
        client_id (str): LWA application client id.
        redirect_uri (str): Redirect URI registered for the application.
        http_client (httpx.AsyncClient): Shared client; closed by ``aclose``.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.token_url = token_url
        self.client_id = client_id
        self._client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings, http_client: Optional[httpx.AsyncClient] = None) -> "AmazonTokenClient":
        return cls(
            token_url=settings.AMAZON_TOKEN_URL,
            client_id=settings.AMAZON_CLIENT_ID,
            client_secret=settings.AMAZON_CLIENT_SECRET.get_secret_value(),
            redirect_uri=settings.AMAZON_REDIRECT_URI,
            timeout=settings.AMAZON_HTTP_TIMEOUT_SECONDS,
            http_client=http_client,
        )

    async def exchange_authorization_code(self, code: str) -> SellerTokenGrant:
        return await self._request_token(
            {
                "grant_type": "authorization_code",
                "code": code,
                "client_id": self.client_id,
                "client_secret": self._client_secret,
                "redirect_uri": self.redirect_uri,
            }
        )

    async def refresh_access_token(self, refresh_token: str) -> SellerTokenGrant:
        return await self._request_token(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.client_id,
                "client_secret": self._client_secret,
            }
        )

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def _request_token(self, form: Dict[str, Any]) -> SellerTokenGrant:
        grant_type = form["grant_type"]
        try:
            response = await self.http_client.post(
                self.token_url,
                data=form,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "LWA token request rejected",
                grant_type=grant_type,
                status_code=e.response.status_code,
            )
            raise SellerTokenExchangeError(
                "Amazon token request was rejected",
                detail=f"HTTP {e.response.status_code}: {e.response.text[:200]}",
            ) from e
        except httpx.HTTPError as e:
            logger.error("LWA token request failed", grant_type=grant_type, error=type(e).__name__)
            raise SellerTokenExchangeError("Amazon token request failed", detail=str(e)) from e
        except ValueError as e:
            raise SellerTokenExchangeError("Amazon token response was not JSON", detail=str(e)) from e

        try:
            grant = SellerTokenGrant(
                access_token=payload["access_token"],
                expires_in=int(payload["expires_in"]),
                token_type=payload.get("token_type", "bearer"),
                refresh_token=payload.get("refresh_token"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SellerTokenExchangeError("Amazon token response was incomplete", detail=str(e)) from e

        logger.info("LWA token request succeeded", grant_type=grant_type, expires_in=grant.expires_in)
        return grant
