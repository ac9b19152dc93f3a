from fastapi import APIRouter, Request, status

from sellerauth.adapters.api.auth.schemas import EmailRequest, MessageResponse
from sellerauth.core.ratelimiter import OTP_LIMIT, limiter
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Send a new verification code",
    responses={
        400: {"description": "Email already verified"},
        404: {"description": "Unknown email"},
    },
)
@limiter.limit(OTP_LIMIT)
async def resend_verification(
    request: Request, payload: EmailRequest, orchestrator: AuthOrchestratorDep
) -> MessageResponse:
    dispatch = await orchestrator.resend_verification(payload.email)
    return MessageResponse(message="Verification OTP sent successfully", preview_url=dispatch.preview_url)
