"""
Main application entry point for sellerauth.

This module initializes and runs the FastAPI application using the application
factory pattern, e.g. ``uvicorn sellerauth.main:app``.
"""

from sellerauth.core.application import create_application
from sellerauth.core.initialization import initialize_application

initialize_application()

app = create_application()

if __name__ == "__main__":
    import uvicorn

    from sellerauth.core.config.settings import settings

    uvicorn.run("sellerauth.main:app", host=settings.API_HOST, port=settings.API_PORT)
