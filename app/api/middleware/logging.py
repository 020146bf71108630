# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation): 
# This file keeps a diary of every request made to PetVally, recording what was asked for,
# how long it took to respond and whether it worked.
# 🧪 Purpose (Technical Summary): 
# Request logging middleware: assigns/propagates X-Request-ID, binds it to the logging context
# and logs method, path, status and duration for every request except probes.
# 🔗 Dependencies: 
# FastAPI, starlette, app.shared.utils.logging, uuid
# 🔄 Connected Modules / Calls From: 
# app.main.py (middleware registration)

import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware for API monitoring.

    Every response carries the request id, reused from the client when it sent one.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.excluded_paths = {"/health", "/health/ready", "/favicon.ico"}

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"HTTP {request.method} {request.url.path} failed after {duration_ms:.2f}ms",
                    exc_info=True,
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            if request.url.path not in self.excluded_paths:
                logger.log_request(request.method, request.url.path, response.status_code, duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms / 1000:.3f}s"
        return response
