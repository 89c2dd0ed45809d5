from __future__ import annotations

# Evaluated in order; first matching area wins
AREA_LOGIN_PATHS: tuple[tuple[str, str], ...] = (
    ("/Admin", "/Admin/Account/Login"),
    ("/HumanResource", "/HumanResource/Account/Login"),
    ("/Accounting", "/Accounting/Account/Login"),
)

DEFAULT_LOGIN_PATH = "/Identity/Account/Login"


def path_in_area(path: str, prefix: str) -> bool:
    """Case-sensitive segment match: ``/Admin`` matches ``/Admin`` and ``/Admin/x``, not ``/Administrator``."""
    if not path.startswith(prefix):
        return False
    return len(path) == len(prefix) or path[len(prefix)] == "/"


def login_redirect_for(path: str) -> str:
    """Login page an unauthenticated request to ``path`` is sent to."""
    for prefix, destination in AREA_LOGIN_PATHS:
        if path_in_area(path or "", prefix):
            return destination
    return DEFAULT_LOGIN_PATH
