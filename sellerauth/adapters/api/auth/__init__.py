"""Authentication router package - bundles the account and session endpoints."""

from fastapi import APIRouter

from .routes import deactivate as deactivate_route
from .routes import forgot_password as forgot_password_route
from .routes import login as login_route
from .routes import logout as logout_route
from .routes import reactivate as reactivate_route
from .routes import refresh_token as refresh_token_route
from .routes import resend_verification as resend_verification_route
from .routes import reset_password as reset_password_route
from .routes import signup as signup_route
from .routes import verify_auth as verify_auth_route
from .routes import verify_email as verify_email_route

router = APIRouter(prefix="/auth", tags=["auth"])

# Delegate to sub-routers ----------------------------------------------------

router.include_router(signup_route.router, prefix="/signup")
router.include_router(verify_email_route.router, prefix="/verify-email")
router.include_router(resend_verification_route.router, prefix="/resend-verification")
router.include_router(login_route.router, prefix="/login")
router.include_router(refresh_token_route.router, prefix="/refresh-token")
router.include_router(logout_route.router, prefix="/logout")
router.include_router(verify_auth_route.router, prefix="/verify-auth")
router.include_router(deactivate_route.router, prefix="/deactivate")
router.include_router(reactivate_route.router, prefix="/reactivate")
router.include_router(forgot_password_route.router, prefix="/forgot-password")
router.include_router(reset_password_route.router, prefix="/reset-password")

__all__ = ["router"]
