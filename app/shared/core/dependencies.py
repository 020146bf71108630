"""
Common FastAPI dependencies for PetVally.
Provides the role policy used by every protected route.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .exceptions import AuthenticationError
from .security import ROLE_COOKIES, Role, get_security_manager
from ..utils.logging import user_id_var

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation; errors are raised by the role policy itself
security = HTTPBearer(auto_error=False)

MISSING_TOKEN_MESSAGE = "Unauthorized: Missing or invalid token"
INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid token"


class CurrentPrincipal:
    """Identity extracted from a verified token."""

    def __init__(self, id: str, role: Role, token_payload: Optional[Dict[str, Any]] = None):
        self.id = id
        self.role = role
        self.token_payload = token_payload or {}

    @property
    def name(self) -> Optional[str]:
        return self.token_payload.get("name")

    @property
    def email(self) -> Optional[str]:
        return self.token_payload.get("email")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "role": self.role.value, **self.token_payload}


def extract_token(
    request: Request,
    role: Role,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """
    Get the raw token from the Authorization header, falling back to the role's cookie.
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials

    header = request.headers.get("Authorization")
    if header:
        # Present but not a bearer header
        return None

    return request.cookies.get(ROLE_COOKIES[role])


def require_role(role: Role):
    """
    Dependency factory for role-based authentication.

    The returned dependency reads the bearer token (header, then cookie),
    verifies signature and expiry, checks the role tag and yields the principal.

    Args:
        role: Role the route expects

    Returns:
        function: Dependency function
    """
    async def role_dependency(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> CurrentPrincipal:
        token = extract_token(request, role, credentials)
        if not token:
            logger.info(f"Missing {role.value} token for {request.method} {request.url.path}")
            raise AuthenticationError(MISSING_TOKEN_MESSAGE)

        payload = get_security_manager().verify_token(token, expected_role=role)

        principal = CurrentPrincipal(id=str(payload["id"]), role=role, token_payload=payload)
        request.state.principal = principal
        user_id_var.set(principal.id)
        return principal

    role_dependency.__name__ = f"require_{role.value}"
    return role_dependency


get_current_user = require_role(Role.USER)
get_current_caregiver = require_role(Role.CAREGIVER)
get_current_admin = require_role(Role.ADMIN)
