from __future__ import annotations

from typing import Any, Callable

from fastapi import Request

from core.auth import SESSION_COOKIE_NAME, verify_session_token
from core.bootstrap import AppServices


class LoginRequired(Exception):
    """Raised when a page needs a signed-in user and the request has none."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(path)


class AccessDenied(Exception):
    """Raised when the signed-in user lacks the role an area requires."""

    def __init__(self, path: str, role: str, user: dict[str, Any]):
        self.path = path
        self.role = role
        self.user = user
        super().__init__(f"{role} required for {path}")


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def current_user(request: Request) -> dict[str, Any] | None:
    token = (request.cookies.get(SESSION_COOKIE_NAME) or "").strip()
    if not token:
        return None
    return verify_session_token(get_services(request).settings.secret_key, token)


def require_user(request: Request) -> dict[str, Any]:
    user = current_user(request)
    if user is None:
        raise LoginRequired(request.url.path)
    return user


def require_role(role: str) -> Callable[[Request], dict[str, Any]]:
    def dependency(request: Request) -> dict[str, Any]:
        user = require_user(request)
        if role not in (user.get("roles") or []):
            raise AccessDenied(request.url.path, role, user)
        return user

    dependency.__name__ = f"require_{role.lower()}"
    return dependency
