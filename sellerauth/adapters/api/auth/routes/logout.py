"""Logout endpoint.

Requires a valid bearer access token. Both tokens in the body are added to
the revocation list until their own expiry, so they are rejected from then
on even though their signatures still verify.
"""

from fastapi import APIRouter, status

from sellerauth.adapters.api.auth.schemas import LogoutRequest, MessageResponse
from sellerauth.core.dependencies.auth import CurrentUser
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Revoke the current session tokens",
    responses={
        400: {"description": "Tokens missing or undecodable"},
        401: {"description": "Not authenticated"},
    },
)
async def logout(
    payload: LogoutRequest, current_user: CurrentUser, orchestrator: AuthOrchestratorDep
) -> MessageResponse:
    await orchestrator.logout(current_user, payload.access_token, payload.refresh_token)
    return MessageResponse(message="Logged out successfully")
