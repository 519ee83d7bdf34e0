"""Authentication routes."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm

from ..core.auth import get_current_user, get_optional_user
from ..core.config import get_server_settings
from ..core.database import User
from ..core.dependencies import get_service
from ..core.security import create_jwt_token
from ..core.services import CanvasStore, UserService, get_canvas_store
from ..core.services.errors import ServiceError
from ..schemas.auth import AuthResult, Credentials, Token, UserResponse

router = APIRouter()


def _issue_token(user: User) -> Token:
    settings = get_server_settings()
    expires_delta = timedelta(minutes=settings.token_expiration_minutes)
    return Token(
        access_token=create_jwt_token(user.id, expires_delta, email=user.email),
        expires_in=expires_delta.total_seconds(),
    )


@router.post("/sign-up", response_model=AuthResult)
async def sign_up(
    credentials: Credentials,
    response: Response,
    user_service: UserService = Depends(get_service(UserService)),
):
    """Create an account. Errors come back in the body for inline display."""
    result = await user_service.sign_up(credentials.email, credentials.password)
    response.status_code = (
        status.HTTP_400_BAD_REQUEST if result.error else status.HTTP_201_CREATED
    )
    return result


@router.post("/sign-in", response_model=AuthResult)
async def sign_in(
    credentials: Credentials,
    user_service: UserService = Depends(get_service(UserService)),
):
    """Sign in and go to the dashboard with the session cookie set."""
    settings = get_server_settings()
    try:
        user = await user_service.authenticate(credentials.email, credentials.password)
    except ServiceError as e:
        return JSONResponse(
            status_code=e.status_code,
            content=AuthResult(error=e.message).model_dump(),
        )

    token = _issue_token(user)
    redirect = RedirectResponse(
        settings.dashboard_path, status_code=status.HTTP_303_SEE_OTHER
    )
    redirect.set_cookie(
        settings.auth_cookie_name,
        token.access_token,
        max_age=int(token.expires_in),
        httponly=True,
        samesite="lax",
        secure=settings.auth_cookie_secure,
    )
    return redirect


@router.post("/sign-out")
async def sign_out(
    current_user: Optional[User] = Depends(get_optional_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    """Drop the session cookie and the in-memory canvas, then go to login."""
    settings = get_server_settings()
    if current_user is not None:
        canvas_store.discard(current_user.id)

    redirect = RedirectResponse(settings.login_path, status_code=status.HTTP_303_SEE_OTHER)
    redirect.delete_cookie(settings.auth_cookie_name)
    return redirect


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    user_service: UserService = Depends(get_service(UserService)),
):
    """Issue a bearer token for API clients. ``username`` carries the email."""
    try:
        user = await user_service.authenticate(form_data.username, form_data.password)
    except ServiceError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(user)


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
