"""Schemas for the Amazon seller linking endpoints."""

from datetime import datetime
from typing import List

from sellerauth.adapters.api.auth.schemas.base import CamelModel


class AuthUrlResponse(CamelModel):
    auth_url: str


class SuccessResponse(CamelModel):
    success: bool = True


class LinkedAccountOut(CamelModel):
    """A linked seller account as returned to its owner. Tokens are omitted."""

    seller_id: str
    token_type: str
    expires_in: int
    marketplace_ids: List[str]
    created_at: datetime


class LinkAccountResponse(CamelModel):
    success: bool = True
    message: str
    data: LinkedAccountOut
