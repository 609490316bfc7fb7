"""Web routes: landing page. Jinja2 templates."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from kosync.core.config import BASE_DIR, Settings
from kosync.core.deps import get_app_settings

router = APIRouter()
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """How to point a KOReader device at this server."""
    return templates.TemplateResponse(request, "index.html", {"app_name": settings.app_name})
