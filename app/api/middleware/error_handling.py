# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation): 
# This file catches any errors that happen in PetVally and turns them into friendly, consistent error messages,
# so a pet owner sees "Pet not found" instead of a crash.
# 🧪 Purpose (Technical Summary): 
# Exception handlers rendering the API error envelope for application, HTTP and request validation
# errors, plus a middleware that turns any unhandled exception into a logged generic 500.
# 🔗 Dependencies: 
# FastAPI, starlette, app.shared.core.exceptions, logging
# 🔄 Connected Modules / Calls From: 
# app.main.py (handler and middleware registration), all API endpoints

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.config.settings import get_settings
from app.shared.core.exceptions import PetVallyException

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR_MESSAGE = "Internal Server Error"


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


def validation_error_message(errors: Any) -> str:
    """
    Message for a request body validation failure.

    A missing field wins; otherwise the first validation message is used.
    """
    errors = list(errors or [])
    for error in errors:
        if error.get("type") == "missing":
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "form")]
            if loc:
                return f"Missing required field: {loc[-1]}"

    if not errors:
        return "Bad Request"

    message = str(errors[0].get("msg", "Bad Request"))
    # pydantic prefixes custom validator messages
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware for the PetVally API.

    Anything that escaped the exception handlers is logged with its traceback
    and answered with a generic 500.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.method} {request.url.path}: {exc}",
                exc_info=True,
                extra={"request_id": _request_id(request)},
            )
            content: Dict[str, Any] = {"message": INTERNAL_SERVER_ERROR_MESSAGE}
            if self.settings.DEBUG:
                content["error"] = {"code": "INTERNAL_SERVER_ERROR", "details": {"error_type": type(exc).__name__}}
            return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the API error envelope handlers on the application."""

    @app.exception_handler(PetVallyException)
    async def petvally_exception_handler(request: Request, exc: PetVallyException) -> JSONResponse:
        """Handle custom PetVally application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.error_code} ({exc.status_code}) on {request.method} {request.url.path}: {exc.message}")

        content = exc.to_dict()
        content["error"]["request_id"] = _request_id(request)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle framework HTTP errors (unknown routes, wrong methods)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": str(exc.detail),
                "error": {
                    "code": "HTTP_ERROR",
                    "details": {"path": str(request.url.path)},
                    "request_id": _request_id(request),
                },
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Render body/query validation failures as 400."""
        message = validation_error_message(exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "message": message,
                "error": {
                    "code": "VALIDATION_ERROR",
                    "details": {"errors": len(exc.errors())},
                    "request_id": _request_id(request),
                },
            },
        )
