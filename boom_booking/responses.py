"""
Response envelope helpers.

Every endpoint answers with the same JSON shape::

    {"success": true,  "data": ..., "message": "..."}
    {"success": false, "error": "...", "details": {...}, "data": ...}
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: str | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    content: dict[str, Any] = {"success": True}
    if data is not None:
        content["data"] = data
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def error_response(
    status_code: int,
    error: str,
    details: dict[str, Any] | None = None,
    data: Any = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": error}
    if details:
        content["details"] = details
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
