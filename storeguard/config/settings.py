from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "Storeguard Access Service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    api_version: str = "v1"
    log_level: str = "INFO"

    # ── Access policy ────────────────────────────────────────────
    validate_policy_on_startup: bool = True

    # ── Route guard ──────────────────────────────────────────────
    route_guard_enabled: bool = True
    route_guard_prefix: str = ""
    public_paths: list[str] = [
        "/health",
        "/openapi.json",
        "/api/docs",
        "/redoc",
    ]

    # ── CORS ─────────────────────────────────────────────────────
    cors_allowed_origins: list[str] = [
        "http://localhost:4200",
        "http://localhost:3000",
        "http://127.0.0.1:4200",
    ]
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_headers: list[str] = ["*"]

    class Config:
        env_file = ".env.local"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()
