from fastapi import APIRouter, status

from sellerauth.adapters.api.auth.schemas import MessageResponse, ReactivateRequest
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Reactivate a deactivated account",
    responses={
        400: {"description": "Account is already active"},
        401: {"description": "Invalid credentials"},
        404: {"description": "Unknown email"},
    },
)
async def reactivate(payload: ReactivateRequest, orchestrator: AuthOrchestratorDep) -> MessageResponse:
    await orchestrator.reactivate(payload.email, payload.password)
    return MessageResponse(message="Account reactivated successfully")
