"""Amazon Selling Partner credential linking.

Seller credentials are top-level records keyed by seller id, written by the
OAuth callback and refreshed on demand. A signed-in user can then associate
a stored credential with their own account.
"""

from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode

from structlog import get_logger

from sellerauth.core.config.amazon import AUTHORIZE_PATH, SELLER_CENTRAL_URLS
from sellerauth.core.exceptions import (
    SellerNotFoundError,
    SellerTokenExchangeError,
    ValidationError,
)
from sellerauth.domain.entities.seller_account import SellerAccount
from sellerauth.domain.entities.user import LinkedSellerAccount, User
from sellerauth.domain.interfaces.repositories import ISellerAccountRepository, IUserRepository
from sellerauth.domain.interfaces.services import ISellerTokenExchanger
from sellerauth.domain.services.authentication.orchestrator import orchestrated
from sellerauth.utils.clock import Clock, utc_now

logger = get_logger(__name__)


class SellerCredentialLinker:
    """Stores and refreshes Login with Amazon tokens per selling partner.

    Attributes:
        accounts (ISellerAccountRepository): Seller credential store.
        users (IUserRepository): User store, for association.
        exchanger (ISellerTokenExchanger): LWA token endpoint client.
        client_id (str): LWA application id placed in consent URLs.
        debug (bool): Attach raw failure detail to unexpected errors.
    """

    def __init__(
        self,
        accounts: ISellerAccountRepository,
        users: IUserRepository,
        exchanger: ISellerTokenExchanger,
        client_id: str,
        clock: Optional[Clock] = None,
        debug: bool = False,
    ):
        self.accounts = accounts
        self.users = users
        self.exchanger = exchanger
        self.client_id = client_id
        self._clock = clock or utc_now
        self.debug = debug

    def authorization_url(self, region: str = "na") -> str:
        """Build the Seller Central consent URL for ``region``.

        Raises:
            ValidationError: ``invalid_region`` for an unknown region code.
        """
        base_url = SELLER_CENTRAL_URLS.get((region or "").lower())
        if base_url is None:
            raise ValidationError(f"Invalid region: {region}", code="invalid_region")
        query = urlencode({"application_id": self.client_id, "version": "beta"})
        return f"{base_url}{AUTHORIZE_PATH}?{query}"

    @orchestrated
    async def exchange_code(self, code: str, seller_id: str, marketplace_id: str) -> SellerAccount:
        """Trade an authorization code for tokens and upsert the seller record.

        Raises:
            ValidationError: ``missing_parameters`` if any input is empty.
            SellerTokenExchangeError: If the provider rejects the code.
        """
        if not code or not seller_id or not marketplace_id:
            raise ValidationError("Missing required parameters", code="missing_parameters")

        grant = await self.exchanger.exchange_authorization_code(code)
        if not grant.refresh_token:
            raise SellerTokenExchangeError("Token response did not include a refresh token")

        now = self._clock()
        existing = await self.accounts.get_by_seller_id(seller_id)
        account = SellerAccount(
            seller_id=seller_id,
            marketplace_id=marketplace_id,
            refresh_token=grant.refresh_token,
            access_token=grant.access_token,
            token_type=grant.token_type,
            token_expires_at=now + timedelta(seconds=grant.expires_in),
            created_at=existing.created_at if existing else now,
            updated_at=now if existing else None,
        )
        account = await self.accounts.upsert(account)
        logger.info("Seller credentials stored", seller_id=seller_id, updated=existing is not None)
        return account

    @orchestrated
    async def refresh(self, seller_id: str) -> SellerAccount:
        """Renew the access token for ``seller_id``. The refresh token is kept.

        Raises:
            SellerNotFoundError: If no credential is stored for the seller.
            SellerTokenExchangeError: If the provider rejects the refresh.
        """
        account = await self.accounts.get_by_seller_id(seller_id)
        if account is None:
            raise SellerNotFoundError()

        grant = await self.exchanger.refresh_access_token(account.refresh_token)
        now = self._clock()
        account.access_token = grant.access_token
        account.token_type = grant.token_type
        account.token_expires_at = now + timedelta(seconds=grant.expires_in)
        account.updated_at = now
        account = await self.accounts.upsert(account)
        logger.info("Seller access token refreshed", seller_id=seller_id)
        return account

    @orchestrated
    async def associate(self, user: User, seller_id: str) -> LinkedSellerAccount:
        """Copy the stored credential for ``seller_id`` into the user's linked accounts.

        Raises:
            SellerNotFoundError: If no credential is stored for the seller.
        """
        account = await self.accounts.get_by_seller_id(seller_id)
        if account is None:
            raise SellerNotFoundError()

        remaining = int((account.token_expires_at - self._clock()).total_seconds())
        linked = user.upsert_linked_account(
            LinkedSellerAccount(
                seller_id=account.seller_id,
                refresh_token=account.refresh_token,
                access_token=account.access_token,
                token_type=account.token_type,
                expires_in=max(remaining, 0),
                marketplace_ids=[account.marketplace_id],
                created_at=self._clock(),
            )
        )
        await self.users.save(user)
        logger.info("Seller account linked", user_id=user.id, seller_id=seller_id)
        return linked
