"""
Route guard middleware.

Runs on every request (except public paths):
  1. Read the role the auth layer put on request.state.user_role
  2. Resolve the request path to a guarded route
  3. Reject with 403 when the role may not open that route

Tokens are not inspected here. A request with no role is judged like an
unknown role: guarded routes are refused, unguarded routes pass.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from storeguard.rbac.decorators import get_access_policy, get_request_role
from storeguard.rbac.routes import resolve_route
from storeguard.utils import Logger, enum_value

logger = Logger("storeguard.guard")


def _normalize(path: str) -> str:
    """/health/ → /health. Public paths are matched whole, never by suffix."""
    return "/" + path.strip("/")


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Applies the route guard table to incoming request paths."""

    def __init__(self, app, prefix: str = "", public_paths: list[str] | None = None):
        super().__init__(app)
        self.prefix = prefix.rstrip("/")
        self.public_paths = {_normalize(p) for p in public_paths or []}

    async def dispatch(self, request: Request, call_next):
        # ── Preflight ────────────────────────────────────────────
        if request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path

        # ── Skip public paths ────────────────────────────────────
        if _normalize(path) in self.public_paths:
            return await call_next(request)

        if self.prefix and not path.startswith(self.prefix):
            return await call_next(request)

        policy = get_access_policy(request)
        route = resolve_route(path, policy.routes, prefix=self.prefix)
        if route is None:
            return await call_next(request)

        role = get_request_role(request)
        if not policy.can_access_route(role, route):
            required = policy.required_permission(route)
            logger.warning(
                f"Blocked {request.method} {path}: role '{enum_value(role)}' "
                f"cannot open '{route}'"
            )
            return JSONResponse(
                status_code=403,
                content={
                    "detail": f"Permission denied. Requires: {enum_value(required)}",
                },
            )

        return await call_next(request)
