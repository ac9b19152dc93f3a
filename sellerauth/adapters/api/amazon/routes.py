"""Amazon Selling Partner OAuth endpoints.

``/auth-url`` builds the Seller Central consent link, ``/callback`` receives
the authorization code and stores the seller credential, and the two POST
routes refresh a stored credential or attach it to the signed-in user.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Query, status
from fastapi.responses import RedirectResponse

from sellerauth.adapters.api.amazon.schemas import (
    AuthUrlResponse,
    LinkAccountResponse,
    LinkedAccountOut,
    SuccessResponse,
)
from sellerauth.core.config.settings import settings
from sellerauth.core.dependencies.auth import CurrentUser
from sellerauth.core.exceptions import SellerAuthError, ValidationError
from sellerauth.infrastructure.dependency_injection.auth_dependencies import SellerLinkerDep

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/amazon", tags=["amazon"])


@router.get("/auth-url", response_model=AuthUrlResponse, summary="Seller Central consent URL")
async def get_auth_url(linker: SellerLinkerDep, region: str = Query(default="na")) -> AuthUrlResponse:
    return AuthUrlResponse(auth_url=linker.authorization_url(region))


@router.get(
    "/callback",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    summary="OAuth callback from Seller Central",
    responses={400: {"description": "Missing required parameters"}},
)
async def oauth_callback(
    linker: SellerLinkerDep,
    code: Optional[str] = None,
    selling_partner_id: Optional[str] = None,
    marketplace_id: Optional[str] = None,
):
    """Exchange the authorization code and redirect the browser to the frontend.

    Missing parameters are a client error (400). Any failure after that
    sends the browser to ``/auth/error`` instead of rendering an error body.
    """
    if not code or not selling_partner_id or not marketplace_id:
        raise ValidationError("Missing required parameters", code="missing_parameters")

    try:
        await linker.exchange_code(code, selling_partner_id, marketplace_id)
    except SellerAuthError as exc:
        logger.error("OAuth callback failed", seller_id=selling_partner_id, error=exc.code)
        return RedirectResponse(f"{settings.FRONTEND_URL}/auth/error", status_code=status.HTTP_302_FOUND)

    return RedirectResponse(f"{settings.FRONTEND_URL}/auth/success", status_code=status.HTTP_302_FOUND)


@router.post(
    "/refresh-token/{seller_id}",
    response_model=SuccessResponse,
    summary="Refresh a stored seller access token",
    responses={404: {"description": "Seller not found"}, 500: {"description": "Token refresh failed"}},
)
async def refresh_seller_token(seller_id: str, linker: SellerLinkerDep) -> SuccessResponse:
    await linker.refresh(seller_id)
    return SuccessResponse()


@router.post(
    "/accounts/{seller_id}",
    response_model=LinkAccountResponse,
    summary="Link a stored seller credential to the current user",
    responses={401: {"description": "Not authenticated"}, 404: {"description": "Seller not found"}},
)
async def link_seller_account(seller_id: str, current_user: CurrentUser, linker: SellerLinkerDep) -> LinkAccountResponse:
    linked = await linker.associate(current_user, seller_id)
    return LinkAccountResponse(
        message="Seller account linked successfully",
        data=LinkedAccountOut(
            seller_id=linked.seller_id,
            token_type=linked.token_type,
            expires_in=linked.expires_in,
            marketplace_ids=linked.marketplace_ids,
            created_at=linked.created_at,
        ),
    )
