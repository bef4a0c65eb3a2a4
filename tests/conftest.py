# tests/conftest.py
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.base import BaseHTTPMiddleware

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storeguard.config import Settings  # noqa: E402
from storeguard.rbac import build_access_policy, get_default_policy  # noqa: E402


# ---------------------------------------------------------------------------
# Stand-in for the upstream auth layer
# ---------------------------------------------------------------------------
class HeaderRoleMiddleware(BaseHTTPMiddleware):
    """Copies the X-Test-Role header onto request.state.user_role."""

    async def dispatch(self, request, call_next):
        role = request.headers.get("x-test-role")
        if role is not None:
            request.state.user_role = role
        return await call_next(request)


@pytest.fixture
def header_role_middleware():
    return HeaderRoleMiddleware


@pytest.fixture
def policy():
    return build_access_policy()


@pytest.fixture
def default_policy():
    return get_default_policy()


@pytest.fixture
def test_settings():
    return Settings(
        app_name="Storeguard Test",
        debug=True,
        route_guard_enabled=True,
        route_guard_prefix="",
    )


@pytest.fixture
def app(policy, test_settings) -> FastAPI:
    from storeguard.app import create_app

    application = create_app(policy=policy, settings=test_settings)
    # Added last so it runs first, ahead of the route guard.
    application.add_middleware(HeaderRoleMiddleware)
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
