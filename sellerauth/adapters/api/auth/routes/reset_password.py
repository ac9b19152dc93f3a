from fastapi import APIRouter, Request, status

from sellerauth.adapters.api.auth.schemas import MessageResponse, ResetPasswordRequest
from sellerauth.core.ratelimiter import OTP_LIMIT, limiter
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Set a new password using a reset code",
    responses={
        400: {"description": "No code, too many attempts, expired or wrong code"},
        404: {"description": "Unknown email"},
    },
)
@limiter.limit(OTP_LIMIT)
async def reset_password(
    request: Request, payload: ResetPasswordRequest, orchestrator: AuthOrchestratorDep
) -> MessageResponse:
    await orchestrator.reset_password(payload.email, payload.otp, payload.password)
    return MessageResponse(message="Password has been reset successfully")
