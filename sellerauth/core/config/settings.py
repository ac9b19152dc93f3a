"""Main application settings and configuration management.

This module composes the settings from the different modules (app, auth,
storage, email, amazon) into a single ``Settings`` class and exposes one
``settings`` singleton for use throughout the application.

Environment Support:
- Development: Uses .env, email test mode and debug mode enabled
- Test: Uses .env.test, email test mode enabled
- Staging: Uses .env.staging, SMTP credentials required
- Production: Uses .env.production, SMTP credentials and a seller token key required
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .amazon import AmazonSettings
from .app import AppSettings
from .auth import AuthSettings
from .email import EmailSettings
from .storage import StorageSettings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logging.getLogger("passlib").setLevel(logging.ERROR)


class Settings(AppSettings, StorageSettings, AuthSettings, EmailSettings, AmazonSettings):
    """The main settings class that aggregates all application configurations.

    Security Note:
        - Signing secrets, SMTP passwords, the Amazon client secret and the
          seller token key are ``SecretStr`` and never logged.
    Usage:
        - Access settings via the singleton instance ``settings``.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._set_environment_defaults(self.APP_ENV)

    def _set_environment_defaults(self, env: str) -> None:
        """Set environment-specific default values.

        Args:
            env: Environment name
        """
        if env in ("development", "test"):
            self.EMAIL_TEST_MODE = True

        if env == "development":
            self.DEBUG = True

        logger.info(
            "Application running in %s environment (email test mode: %s, debug: %s)",
            env,
            self.EMAIL_TEST_MODE,
            self.DEBUG,
        )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    def validate_required_fields(self) -> None:
        """Validates environment-dependent configuration.

        Raises:
            ValueError: If production is missing mandatory settings.
        """
        missing_fields = []
        if self.is_production:
            if not self.SELLER_TOKEN_ENCRYPTION_KEY.get_secret_value():
                missing_fields.append("SELLER_TOKEN_ENCRYPTION_KEY")
            if not self.AMAZON_CLIENT_ID:
                missing_fields.append("AMAZON_CLIENT_ID")
        if missing_fields:
            error_msg = f"Missing required environment variables: {', '.join(missing_fields)}"
            logger.error(error_msg)
            raise ValueError(error_msg)

        try:
            self.validate_smtp_config()
        except ValueError as e:
            # Degrade gracefully: signup will surface dispatch failures per request
            logger.error("Email configuration error: %s", e)


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }
    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info("Loading environment configuration from %s", env_file)
        return Settings(_env_file=env_file)
    if not Path(".env").exists():
        logger.warning("No .env file found, using environment variables only (environment: %s)", env)
    return Settings()


# Singleton instance of the settings used across the application.
settings = create_settings()
settings.validate_required_fields()
