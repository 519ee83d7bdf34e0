"""Current-user resolution for routes."""

from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from loguru import logger

from .config import get_server_settings
from .database import User
from .dependencies import get_service
from .security import bearer_token, token_subject
from .services.user_service import UserService

# Declares the token endpoint in the OpenAPI docs; missing tokens are handled below
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def extract_token(request: Request, bearer: Optional[str] = None) -> Optional[str]:
    """The caller's token: bearer header first, then the session cookie."""
    return (
        bearer
        or getattr(request.state, "token", None)
        or bearer_token(request.headers.get("authorization"))
        or request.cookies.get(get_server_settings().auth_cookie_name)
        or None
    )


async def get_current_user(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
    user_service: UserService = Depends(get_service(UserService)),
) -> User:
    """The signed-in user, or 401."""
    token = extract_token(request, bearer)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    user_id = token_subject(token)
    user = await user_service.get_user(user_id)
    if user is None or not user.is_active:
        logger.warning(f"Token for unknown or inactive user: {user_id}")
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


async def get_optional_user(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
    user_service: UserService = Depends(get_service(UserService)),
) -> Optional[User]:
    """Like ``get_current_user`` but returns None for anonymous requests."""
    try:
        return await get_current_user(request, bearer, user_service)
    except HTTPException:
        return None
