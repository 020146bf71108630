# 📄 File: app/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation): 
# This file acts like a doorman for the browser pages of PetVally: owner pages need an owner pass,
# caregiver pages need a caregiver pass and the back-office needs an admin pass. Without one,
# visitors are sent to the right login page.
# 🧪 Purpose (Technical Summary): 
# Page gate middleware for browser routes. Verifies the role cookie of gated path prefixes and
# redirects to the role's login page when it is missing or invalid; adds no-cache headers to every
# non-public response. API routes are left to the `require_role` dependency.
# 🔗 Dependencies: 
# FastAPI, starlette, app.shared.core.security
# 🔄 Connected Modules / Calls From: 
# app.main.py (middleware registration)

import logging
from typing import Optional, Tuple

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.core.exceptions import AuthenticationError
from app.shared.core.security import ROLE_COOKIES, Role, get_security_manager

logger = logging.getLogger(__name__)

PUBLIC_PAGES = {"/", "/userlogin", "/userregistration", "/caregiverlogin", "/caregiverregistration", "/admin"}
PUBLIC_PREFIXES = ("/api/", "/health", "/docs", "/redoc", "/openapi.json")

# (path prefix, role, login page)
GATED_PREFIXES: Tuple[Tuple[str, Role, str], ...] = (
    ("/user", Role.USER, "/userlogin"),
    ("/profile", Role.USER, "/userlogin"),
    ("/caregiver", Role.CAREGIVER, "/caregiverlogin"),
    ("/careprofile", Role.CAREGIVER, "/caregiverlogin"),
    ("/admin", Role.ADMIN, "/admin"),
)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, max-age=0, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def is_public_path(path: str) -> bool:
    """Public pages and API/infrastructure paths pass straight through."""
    if path in PUBLIC_PAGES:
        return True
    return path.startswith(PUBLIC_PREFIXES) or path == "/api"


def gate_for(path: str) -> Optional[Tuple[Role, str]]:
    """Role and login page guarding `path`, if any."""
    for prefix, role, login_page in GATED_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return role, login_page
    return None


class PageGateMiddleware(BaseHTTPMiddleware):
    """
    Role gate for browser routes.

    Gated pages need a valid token of the right role in the role's cookie.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.security = get_security_manager()

    def _has_valid_cookie(self, request: Request, role: Role) -> bool:
        token = request.cookies.get(ROLE_COOKIES[role])
        if not token:
            return False
        try:
            self.security.verify_token(token, expected_role=role)
        except AuthenticationError:
            return False
        return True

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if is_public_path(path):
            return await call_next(request)

        gate = gate_for(path)
        if gate is not None:
            role, login_page = gate
            if not self._has_valid_cookie(request, role):
                logger.info(f"Redirecting unauthenticated {role.value} page request {path} to {login_page}")
                response: Response = RedirectResponse(url=login_page, status_code=307)
                response.headers.update(NO_CACHE_HEADERS)
                return response

        response = await call_next(request)
        response.headers.update(NO_CACHE_HEADERS)
        return response
