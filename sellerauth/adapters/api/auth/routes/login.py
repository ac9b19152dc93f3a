"""Login endpoint.

Thin adapter over ``AuthOrchestrator.login``: unknown emails and wrong
passwords both answer 401 ``invalid_credentials``; locked, deactivated and
unverified accounts answer 403 with a distinguishing ``code``.
"""

from fastapi import APIRouter, Request, status

from sellerauth.adapters.api.auth.schemas import LoginRequest, LoginResponse, LoginUserOut
from sellerauth.core.ratelimiter import AUTH_LIMIT, limiter
from sellerauth.infrastructure.dependency_injection.auth_dependencies import AuthOrchestratorDep

router = APIRouter()


@router.post(
    "",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate a user",
    responses={
        401: {"description": "Invalid email or password"},
        403: {"description": "Account locked, deactivated or email not verified"},
    },
)
@limiter.limit(AUTH_LIMIT)
async def login(request: Request, payload: LoginRequest, orchestrator: AuthOrchestratorDep) -> LoginResponse:
    result = await orchestrator.login(payload.email, payload.password)
    user = result.user
    return LoginResponse(
        message="Login successful",
        data=LoginUserOut(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            access_token=result.tokens.access_token,
            refresh_token=result.tokens.refresh_token,
        ),
    )
