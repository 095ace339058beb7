"""Authentication endpoints.

Students sign in through the campus identity provider, which issues the
bearer token the event endpoints read. Only moderator sessions are
handled here.
"""
from fastapi import APIRouter, HTTPException, Request, Response

from campusvibe.schemas import AdminLoginRequest, SuccessResponse
from campusvibe.core.security import verify_admin_password, create_access_token
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.core.logging_config import get_logger
from campusvibe.core import config

logger = get_logger(__name__)
router = APIRouter()


@router.post("/admin/login", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["admin_login"])
async def admin_login(request: Request, credentials: AdminLoginRequest, response: Response) -> SuccessResponse:
    """
    Start a moderator session.

    The JWT goes into the httpOnly ``admin_token`` cookie, which the admin
    endpoints and the browser's EventSource both send automatically.

    Raises:
        HTTPException: 401 if the password is wrong
    """
    if not verify_admin_password(credentials.password):
        logger.warning("admin_login_failed")
        raise HTTPException(status_code=401, detail="Invalid password")

    access_token = create_access_token(data={"is_admin": True})
    response.set_cookie(
        key="admin_token",
        value=access_token,
        httponly=True,
        secure=config.settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    logger.info("admin_login")
    return SuccessResponse(success=True, message="Logged in successfully")


@router.post("/admin/logout", response_model=SuccessResponse)
async def admin_logout(response: Response) -> SuccessResponse:
    """End the moderator session. Safe to call when not logged in."""
    response.delete_cookie(key="admin_token")
    return SuccessResponse(success=True, message="Logged out successfully")
