"""Route table: every endpoint with its method, path and guard, in registration order."""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends

from sessionauth.api import auth, home
from sessionauth.api.guards import admin_guard, local_guard, logged_in_guard

Guard = Callable[..., Any]
Handler = Callable[..., Any]

ROUTES: list[tuple[str, str, Guard | None, Handler]] = [
    ("GET", "/", None, home.public_route),
    ("GET", "/protected", logged_in_guard, home.guarded_route),
    ("GET", "/admin", admin_guard, home.admin_route),
    ("POST", "/auth/register", None, auth.register_user),
    ("POST", "/auth/login", local_guard, auth.login_user),
    ("POST", "/auth/logout", None, auth.logout_user),
    ("POST", "/auth/token", logged_in_guard, auth.issue_token),
]


def build_router(routes: list[tuple[str, str, Guard | None, Handler]] = ROUTES) -> APIRouter:
    """Register each (method, path, guard, handler); the guard runs before the handler."""
    router = APIRouter()
    for method, path, guard, handler in routes:
        router.add_api_route(
            path,
            handler,
            methods=[method],
            dependencies=[Depends(guard)] if guard is not None else None,
            tags=["auth"] if path.startswith("/auth") else ["app"],
        )
    return router
