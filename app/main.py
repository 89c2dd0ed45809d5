from __future__ import annotations

import logging
import traceback
import uuid
from contextlib import asynccontextmanager
from typing import Optional
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from core.bootstrap import AppServices, build_services, initialize_database
from core.logging_utils import configure_logging, get_request_id, set_request_id
from core.redirect import login_redirect_for
from core.settings import PortalSettings, get_settings

from .dependencies import AccessDenied, LoginRequired
from .routes.areas import area_routers
from .routes.home import router as home_router
from .routes.identity import router as identity_router
from .templating import STATIC_DIR, templates

logger = logging.getLogger("it15.app")


def create_app(settings: Optional[PortalSettings] = None, services: Optional[AppServices] = None) -> FastAPI:
    """Assemble the application. Services are built here unless the caller supplies them."""
    if settings is None:
        settings = services.settings if services is not None else get_settings()
    configure_logging(settings.log_level, json_logs=settings.json_logs)

    owns_services = services is None
    if services is None:
        services = build_services(settings)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        initialize_database(application.state.services)
        yield
        if owns_services:
            application.state.services.close()

    application = FastAPI(title="IT15 Portal", lifespan=lifespan)
    application.state.services = services

    @application.middleware("http")
    async def server_errors(request: Request, call_next):
        # Must stay innermost; the header middlewares below wrap its responses
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
            if settings.is_development:
                detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
                return PlainTextResponse(detail, status_code=500)
            rid = get_request_id()
            target = f"/Home/Error?{urlencode({'rid': rid})}" if rid else "/Home/Error"
            return RedirectResponse(url=target, status_code=303)

    if settings.force_https:
        application.add_middleware(HTTPSRedirectMiddleware)

    @application.middleware("http")
    async def security_headers(request: Request, call_next):
        resp = await call_next(request)
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # HSTS outside development, and only when the request is over HTTPS (direct or via proxy header)
        xf_proto = request.headers.get("x-forwarded-proto", "").split(",")[0].strip().lower()
        scheme = (request.url.scheme or "").lower()
        if not settings.is_development and (scheme == "https" or xf_proto == "https"):
            resp.headers.setdefault("Strict-Transport-Security", "max-age=2592000")
        return resp

    @application.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        set_request_id(rid)
        resp = await call_next(request)
        resp.headers["X-Request-ID"] = rid
        return resp

    @application.exception_handler(LoginRequired)
    async def redirect_to_login(request: Request, exc: LoginRequired):
        return RedirectResponse(url=login_redirect_for(exc.path), status_code=302)

    @application.exception_handler(AccessDenied)
    async def access_denied(request: Request, exc: AccessDenied):
        await run_in_threadpool(
            request.app.state.services.audit.record,
            actor=f"user:{exc.user.get('uid')}",
            action="access_denied",
            resource=exc.path,
            ip=request.client.host if request.client else "",
            ua=request.headers.get("user-agent", ""),
            result="denied",
            meta={"required_role": exc.role},
        )
        context = {"user": exc.user, "area": exc.role}
        return templates.TemplateResponse(request, "access_denied.html", context, status_code=403)

    if STATIC_DIR.exists():
        application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    application.include_router(home_router)
    application.include_router(identity_router)
    for router in area_routers:
        application.include_router(router)

    return application
