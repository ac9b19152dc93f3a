"""Application lifecycle management.

Startup builds the service container (unless one was supplied to the
application factory), initializes the email transport and, for the
in-memory store, starts the periodic blacklist sweep. Shutdown stops the
sweep and releases network clients.
"""

import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI

from sellerauth.core.config.settings import settings
from sellerauth.core.logging import logger
from sellerauth.infrastructure.dependency_injection import build_container, close_container
from sellerauth.infrastructure.repositories import MemoryTokenBlacklistRepository


async def sweep_blacklist_periodically(blacklist: MemoryTokenBlacklistRepository, interval_seconds: float) -> None:
    """Drop expired in-memory blacklist entries every ``interval_seconds``."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = blacklist.sweep_expired()
        if removed:
            logger.info("blacklist_swept", removed=removed)


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = getattr(app.state, "container", None)
        owns_container = container is None
        if owns_container:
            container = build_container(settings)
            app.state.container = container

        await container.email_sender.initialize()

        sweeper = None
        if isinstance(container.blacklist, MemoryTokenBlacklistRepository):
            sweeper = asyncio.create_task(
                sweep_blacklist_periodically(container.blacklist, settings.BLACKLIST_SWEEP_INTERVAL_SECONDS)
            )

        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        if sweeper is not None:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        if owns_container:
            await close_container(container)
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
