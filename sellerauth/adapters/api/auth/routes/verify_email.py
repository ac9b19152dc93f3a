from fastapi import APIRouter, Request, status

from sellerauth.adapters.api.auth.schemas import MessageResponse, VerifyEmailRequest
from sellerauth.core.ratelimiter import AUTH_LIMIT, OTP_LIMIT, limiter
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Verify an email address with the code sent at signup",
    responses={
        400: {"description": "No code, too many attempts, expired or wrong code"},
        404: {"description": "Unknown email"},
    },
)
@limiter.limit(f"{AUTH_LIMIT};{OTP_LIMIT}")
async def verify_email(
    request: Request, payload: VerifyEmailRequest, orchestrator: AuthOrchestratorDep
) -> MessageResponse:
    await orchestrator.verify_email(payload.email, payload.otp)
    return MessageResponse(message="Email verified successfully")
