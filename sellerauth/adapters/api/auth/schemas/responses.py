"""Response models for authentication endpoints.

All success bodies share the ``{success, message, data?}`` envelope and are
serialized with camelCase keys.
"""

from typing import Optional

from sellerauth.adapters.api.auth.schemas.base import CamelModel
from sellerauth.domain.entities.user import User


class MessageResponse(CamelModel):
    """Simple envelope used for acknowledgments."""

    success: bool = True
    message: str
    preview_url: Optional[str] = None


class SignupUserOut(CamelModel):
    id: str
    name: str
    email: str
    is_email_verified: bool
    email_preview_url: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User, preview_url: Optional[str] = None) -> "SignupUserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            is_email_verified=user.is_email_verified,
            email_preview_url=preview_url,
        )


class SignupResponse(CamelModel):
    success: bool = True
    message: str
    data: SignupUserOut


class LoginUserOut(CamelModel):
    """User details plus the freshly issued token pair."""

    id: str
    name: str
    email: str
    role: str
    access_token: str
    refresh_token: str


class LoginResponse(CamelModel):
    success: bool = True
    message: str
    data: LoginUserOut


class AccessTokenOut(CamelModel):
    access_token: str


class RefreshTokenResponse(CamelModel):
    success: bool = True
    message: str
    data: AccessTokenOut
