from fastapi import APIRouter, status

from sellerauth.adapters.api.auth.schemas import (
    AccessTokenOut,
    RefreshTokenRequest,
    RefreshTokenResponse,
)
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=RefreshTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Exchange a refresh token for a new access token",
    responses={
        400: {"description": "Refresh token missing"},
        401: {"description": "Invalid, expired or revoked refresh token"},
        403: {"description": "Account is deactivated"},
    },
)
async def refresh_token(payload: RefreshTokenRequest, orchestrator: AuthOrchestratorDep) -> RefreshTokenResponse:
    access_token = await orchestrator.refresh_token(payload.refresh_token)
    return RefreshTokenResponse(
        message="Token refreshed successfully",
        data=AccessTokenOut(access_token=access_token),
    )
