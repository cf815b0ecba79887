"""
ClassHub Backend — Shared Error Response Emitter
==================================================

What:  Builds the JSON error body every failing request returns.
Who:   Exception handlers in main.py and the rate limiting middleware.

Body format:
    {
        "error": "unauthorized",
        "message": "User is unauthorized to access this data.",
        "status": 401,
        "details": {...},          # only for errors that expose details
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from classhub.middleware.request_id import request_id_var


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "status": status_code,
    }
    if details is not None:
        content["details"] = details
    content["request_id"] = request_id_var.get("")
    return JSONResponse(status_code=status_code, content=content, headers=headers)
