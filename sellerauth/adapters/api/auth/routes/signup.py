"""Signup endpoint.

Creates an unverified account and emails a 6-digit verification code. If
the email cannot be sent the account is rolled back and the client gets a
500 with code ``email_dispatch_failed``.
"""

from fastapi import APIRouter, Request, status

from sellerauth.adapters.api.auth.schemas import SignupRequest, SignupResponse, SignupUserOut
from sellerauth.core.ratelimiter import AUTH_LIMIT, limiter
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=SignupResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Invalid input or email already registered"},
        500: {"description": "Verification email could not be sent"},
    },
)
@limiter.limit(AUTH_LIMIT)
async def signup(request: Request, payload: SignupRequest, orchestrator: AuthOrchestratorDep) -> SignupResponse:
    result = await orchestrator.signup(payload.name, payload.email, payload.password)
    return SignupResponse(
        message="User registered successfully. Please verify your email.",
        data=SignupUserOut.from_entity(result.user, result.preview_url),
    )
