"""Page-level routes: the dashboard mount point and the login surface."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse

from ..core.auth import get_optional_user
from ..core.config import get_server_settings
from ..core.database import User
from ..core.services import CanvasStore, get_canvas_store
from ..schemas.canvas import CanvasView

router = APIRouter()
settings = get_server_settings()


@router.get(settings.dashboard_path, response_model=CanvasView)
async def dashboard(
    width: Optional[int] = Query(None, gt=0),
    height: Optional[int] = Query(None, gt=0),
    current_user: Optional[User] = Depends(get_optional_user),
    canvas_store: CanvasStore = Depends(get_canvas_store),
):
    """The canvas for the signed-in user; anonymous visitors go to the login page."""
    if current_user is None:
        return RedirectResponse(settings.login_path, status_code=status.HTTP_303_SEE_OTHER)
    return canvas_store.render(current_user.id, width, height)


@router.get(settings.login_path)
async def login_page():
    """Describe the login surface and where its forms post to."""
    return {
        "title": "Sign in to WidgetDesk",
        "fields": ["email", "password"],
        "actions": {
            "sign_in": "/api/auth/sign-in",
            "sign_up": "/api/auth/sign-up",
        },
        "redirect": settings.dashboard_path,
    }
