"""Password reset request endpoint.

Always answers with the same message whether or not the email is
registered, so it cannot be used to enumerate accounts.
"""

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
    summary="Request a password reset code",
)
@limiter.limit(OTP_LIMIT)
async def forgot_password(
    request: Request, payload: EmailRequest, orchestrator: AuthOrchestratorDep
) -> MessageResponse:
    await orchestrator.request_password_reset(payload.email)
    return MessageResponse(message="If an account exists for this email, a password reset code has been sent")
