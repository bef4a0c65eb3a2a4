from .routes import access_router

__all__ = ["access_router"]
