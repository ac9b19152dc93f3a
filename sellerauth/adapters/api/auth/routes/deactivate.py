from fastapi import APIRouter, status

from sellerauth.adapters.api.auth.schemas import MessageResponse
from sellerauth.core.dependencies.auth import CurrentUser
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Deactivate the current account",
)
async def deactivate(current_user: CurrentUser, orchestrator: AuthOrchestratorDep) -> MessageResponse:
    await orchestrator.deactivate(current_user)
    return MessageResponse(message="Account deactivated successfully")
