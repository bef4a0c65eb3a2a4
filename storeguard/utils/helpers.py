from enum import Enum
from typing import Any, Optional
from fastapi.responses import JSONResponse


def enum_value(value: Any) -> Any:
    """Unwrap Enum members to their raw value; anything else is returned as-is."""
    return value.value if isinstance(value, Enum) else value


def success_response(
    data: Optional[Any] = None,
    message: str = "Success",
    code: int = 200,
) -> JSONResponse:
    """Standard success JSON response."""
    content = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)


def error_response(
    message: str,
    code: int = 400,
    data: Optional[Any] = None,
) -> JSONResponse:
    """Standard error JSON response."""
    content = {"success": False, "error": {"code": code, "message": message}}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)
