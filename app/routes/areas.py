from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from core.redirect import AREA_LOGIN_PATHS

from ..dependencies import require_role
from ..templating import templates


def build_area_router(prefix: str, login_path: str) -> APIRouter:
    """Routes for one staff area: a role-protected dashboard and a public login page."""
    area = prefix.strip("/")
    router = APIRouter(prefix=prefix, tags=[area])
    guard = require_role(area)

    def dashboard(request: Request, user: dict[str, Any] = Depends(guard)):
        context = {"user": user, "area": area}
        return templates.TemplateResponse(request, "dashboard.html", context)

    for path in ("", "/Dashboard", "/Dashboard/Index"):
        router.add_api_route(
            path,
            dashboard,
            methods=["GET"],
            response_class=HTMLResponse,
            name=f"{area}.dashboard" if path == "" else None,
            include_in_schema=path == "",
        )

    def login_page(request: Request):
        context = {"user": None, "area": area, "login_path": login_path}
        return templates.TemplateResponse(request, "login.html", context)

    router.add_api_route(
        "/Account/Login",
        login_page,
        methods=["GET"],
        response_class=HTMLResponse,
        name=f"{area}.login",
    )
    return router


area_routers = [build_area_router(prefix, login_path) for prefix, login_path in AREA_LOGIN_PATHS]
