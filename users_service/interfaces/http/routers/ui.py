from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

WEB_DIR = Path(__file__).resolve().parents[3] / "web"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))

router = APIRouter(tags=["ui"])

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request):
    """Single page with the user form and the user list."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"api_url": request.app.state.settings.API_URL.rstrip("/")},
    )
