from fastapi import APIRouter, status

from sellerauth.adapters.api.auth.schemas import MessageResponse
from sellerauth.core.dependencies.auth import CurrentUser

router = APIRouter()


@router.get(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Check that the bearer token is valid",
)
async def verify_auth(current_user: CurrentUser) -> MessageResponse:
    return MessageResponse(message="User is authenticated")
