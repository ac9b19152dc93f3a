"""API router configuration.
"""

from fastapi import APIRouter

from .amazon import router as amazon_router
from .auth import router as auth_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(amazon_router)
