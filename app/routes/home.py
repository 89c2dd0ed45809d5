from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from core.logging_utils import get_request_id

from ..dependencies import current_user
from ..templating import templates

router = APIRouter(tags=["home"])


@router.get("/", response_class=HTMLResponse, name="home.index")
@router.get("/Home", response_class=HTMLResponse, include_in_schema=False)
@router.get("/Home/Index", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request):
    return templates.TemplateResponse(request, "home.html", {"user": current_user(request)})


@router.get("/Home/Privacy", response_class=HTMLResponse, name="home.privacy")
def privacy(request: Request):
    return templates.TemplateResponse(request, "privacy.html", {"user": current_user(request)})


@router.get("/Home/Error", response_class=HTMLResponse, name="home.error")
def error(request: Request):
    context = {"user": None, "request_id": request.query_params.get("rid") or get_request_id()}
    return templates.TemplateResponse(request, "error.html", context)


@router.get("/healthz", name="healthz")
def healthz():
    return {"ok": True}
