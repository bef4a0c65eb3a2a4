"""
Declarative permission decorators for route handlers.

Usage:
    @router.get("/")
    @require_permission(Permission.VIEW_USERS)
    async def list_users(request: Request):
        ...
"""

from functools import wraps
from fastapi import HTTPException, status
from starlette.requests import Request

from storeguard.utils import Logger, PermissionDeniedError, enum_value

from .policy import AccessPolicy, get_default_policy
from .roles import has_role

logger = Logger("storeguard.rbac")


def get_access_policy(request: Request) -> AccessPolicy:
    """
    FastAPI dependency returning the policy built at startup.

    Falls back to the bundled default policy when the app was created
    without one (e.g. a bare router mounted in tests).
    """
    policy = getattr(request.app.state, "access_policy", None)
    return policy if policy is not None else get_default_policy()


def get_request_role(request: Request):
    """Role set on request.state by the upstream auth layer, or None."""
    return getattr(request.state, "user_role", None)


def _find_request(args, kwargs) -> Request:
    """Find the Request object from the handler's args/kwargs."""
    request: Request | None = kwargs.get("request")
    if request is None:
        for arg in args:
            if isinstance(arg, Request):
                request = arg
                break

    if request is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Request object not found in handler",
        )
    return request


def require_permission(permission):
    """
    Decorator that checks the current role (set by the auth layer on
    request.state.user_role) holds the required permission.

    Must be applied AFTER the route decorator.
    """
    required = enum_value(permission)

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)

            role = get_request_role(request)
            if not get_access_policy(request).has_permission(role, required):
                logger.warning(
                    f"Denied {request.method} {request.url.path}: "
                    f"role '{enum_value(role)}' lacks '{required}'"
                )
                raise PermissionDeniedError(
                    detail=f"Permission denied. Requires: {required}",
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_role(*roles):
    """
    Decorator that admits only the listed roles.

        @require_role(Role.ADMIN, Role.MANAGER)

    Role identity only: a higher-ranked role is not admitted unless listed.
    """
    allowed = [enum_value(r) for r in roles]

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)

            role = get_request_role(request)
            if not has_role(role, allowed):
                logger.warning(
                    f"Denied {request.method} {request.url.path}: "
                    f"role '{enum_value(role)}' not in {allowed}"
                )
                raise PermissionDeniedError(
                    detail=f"Role not allowed. Requires: {', '.join(allowed)}",
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
