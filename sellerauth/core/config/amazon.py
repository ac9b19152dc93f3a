"""Amazon Selling Partner OAuth settings.
"""

from typing import Dict

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

# Seller Central consent hosts per region
SELLER_CENTRAL_URLS: Dict[str, str] = {
    "na": "https://sellercentral.amazon.com",
    "eu": "https://sellercentral-europe.amazon.com",
    "fe": "https://sellercentral.amazon.com.au",
    "in": "https://sellercentral.amazon.in",
}

AUTHORIZE_PATH = "/apps/authorize/consent"


class AmazonSettings(BaseSettings):
    """Defines the Login-with-Amazon client used to link seller accounts.

    Security Note:
        - AMAZON_CLIENT_SECRET must never be logged.
        - SELLER_TOKEN_ENCRYPTION_KEY is a Fernet key used to encrypt seller
          tokens at rest. It is mandatory in production; other environments
          fall back to a per-process key.
    """

    AMAZON_CLIENT_ID: str = ""
    AMAZON_CLIENT_SECRET: SecretStr = SecretStr("")
    AMAZON_REDIRECT_URI: str = ""
    AMAZON_TOKEN_URL: str = "https://api.amazon.in/auth/o2/token"
    AMAZON_HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    SELLER_TOKEN_ENCRYPTION_KEY: SecretStr = SecretStr("")
