"""
Storeguard Access Service — Main application.

Assembles all packages: config, access policy, route guard, access API.
"""

import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from storeguard.config import Settings, settings as default_settings
from storeguard.middleware import RouteGuardMiddleware
from storeguard.rbac import AccessPolicy, build_access_policy
from storeguard.utils import Logger, error_response

# ── Route imports ────────────────────────────────────────────────
from storeguard.access import access_router

logger = Logger("request")


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request: method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "unknown"

        logger.info(f"--> {method} {path} (from {client})")

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            logger.error(f"    Exception: {exc}")
            logger.error(traceback.format_exc())
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


# ── Lifespan ─────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Serving access decisions with {app.state.access_policy!r}")
    yield
    logger.info("Access service stopped")


# ── App factory ──────────────────────────────────────────────────
def create_app(
    policy: AccessPolicy | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or default_settings

    # Fail fast: a broken policy must never serve a decision.
    if policy is None:
        policy = build_access_policy(validate=settings.validate_policy_on_startup)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role-based access decisions for the store back office",
        docs_url="/api/docs",
        lifespan=lifespan,
    )
    app.state.access_policy = policy
    app.state.settings = settings

    # ── CORS (must be first) ─────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
    )

    # ── Request logging (runs on every request) ──────────────
    app.add_middleware(RequestLoggingMiddleware)

    # ── Route guard ──────────────────────────────────────────
    if settings.route_guard_enabled:
        app.add_middleware(
            RouteGuardMiddleware,
            prefix=settings.route_guard_prefix,
            public_paths=settings.public_paths,
        )

    # ── Global exception handler ─────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        return error_response(
            str(exc) if settings.debug else "Internal server error",
            code=500,
            data={"timestamp": datetime.now(timezone.utc).isoformat()},
        )

    # ── Routes ───────────────────────────────────────────────
    v = settings.api_version  # "v1"

    app.include_router(
        access_router,
        prefix=f"/api/{v}/access",
        tags=["Access Control"],
    )

    # ── Health check ─────────────────────────────────────────
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "policy": repr(app.state.access_policy),
        }

    return app


# ── Create the app instance ──────────────────────────────────────
app = create_app()
