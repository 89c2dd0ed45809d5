from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from core.redirect import DEFAULT_LOGIN_PATH

from ..templating import templates

router = APIRouter(prefix="/Identity", tags=["identity"])


@router.get("/Account/Login", response_class=HTMLResponse, name="identity.login")
def login_page(request: Request):
    context = {"user": None, "area": None, "login_path": DEFAULT_LOGIN_PATH}
    return templates.TemplateResponse(request, "login.html", context)
