import os

# Settings are read once at import time; pin the test environment first.
os.environ["APP_ENV"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_TEST_MODE"] = "true"
os.environ["LOG_JSON"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret-0123456789abcdefghijklmnop"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret-0123456789abcdefghijklmnop"
os.environ["FRONTEND_URL"] = "http://frontend.example.com"
os.environ["AMAZON_CLIENT_ID"] = "amzn1.application-oa2-client.test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sellerauth.core.application import create_application
from sellerauth.core.config.settings import settings
from sellerauth.domain.services.auth import PasswordHasher
from sellerauth.infrastructure.dependency_injection import build_container
from tests.utils.clock import FrozenClock
from tests.utils.fakes import FakeEmailSender, FakeSellerTokenExchanger


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
def token_exchanger():
    return FakeSellerTokenExchanger()


@pytest.fixture
def container(clock, email_sender, token_exchanger):
    return build_container(
        settings,
        email_sender=email_sender,
        token_exchanger=token_exchanger,
        clock=clock,
    )


@pytest.fixture
def app(container):
    return create_application(container)


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
