"""Service interfaces for the external collaborators of the domain.

The orchestrator only ever sees these contracts; the composition root
injects the concrete SMTP and Login with Amazon adapters.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sellerauth.domain.value_objects.email_dispatch import EmailDispatchResult
from sellerauth.domain.value_objects.otp import OtpPurpose
from sellerauth.domain.value_objects.seller_token import SellerTokenGrant


class IEmailSender(ABC):
    """Interface for delivering one-time codes by email."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the transport. Called once by the composition root."""
        pass

    @abstractmethod
    async def send_otp(
        self,
        email: str,
        code: str,
        purpose: OtpPurpose,
        name: Optional[str] = None,
    ) -> EmailDispatchResult:
        """Send ``code`` to ``email``.

        Args:
            email: Recipient address
            code: The 6-digit code
            purpose: Selects the template (verification or password reset)
            name: Recipient display name used in the greeting

        Returns:
            EmailDispatchResult: Transport identifiers for the message

        Raises:
            EmailServiceError: If the message could not be handed off
        """
        pass


class ISellerTokenExchanger(ABC):
    """Interface for the Login with Amazon token endpoint."""

    @abstractmethod
    async def exchange_authorization_code(self, code: str) -> SellerTokenGrant:
        """Trade an OAuth authorization code for an access/refresh token pair.

        Raises:
            SellerTokenExchangeError: On transport failure or a non-2xx reply
        """
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> SellerTokenGrant:
        """Mint a new access token from a stored refresh token.

        Raises:
            SellerTokenExchangeError: On transport failure or a non-2xx reply
        """
        pass
