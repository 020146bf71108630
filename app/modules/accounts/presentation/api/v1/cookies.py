"""
Auth cookie helpers for PetVally.
Each role keeps its token in an httpOnly cookie; owners and caregivers also get a
"-client" twin that browser scripts can read.
"""

from fastapi import Response

from app.shared.config.settings import get_settings
from app.shared.core.security import ROLE_COOKIES, Role

CLIENT_COOKIE_SUFFIX = "-client"


def _cookie_names(role: Role) -> list:
    name = ROLE_COOKIES[role]
    if role == Role.ADMIN:
        return [name]
    return [name, name + CLIENT_COOKIE_SUFFIX]


def set_auth_cookies(response: Response, role: Role, token: str) -> None:
    """Attach the role's token cookies and the Authorization header to a login response."""
    settings = get_settings()
    max_age = settings.admin_token_max_age if role == Role.ADMIN else settings.token_max_age

    for name in _cookie_names(role):
        response.set_cookie(
            key=name,
            value=token,
            max_age=max_age,
            path="/",
            httponly=not name.endswith(CLIENT_COOKIE_SUFFIX),
            samesite="lax",
            secure=settings.COOKIE_SECURE,
        )
    response.headers["Authorization"] = f"Bearer {token}"


def clear_auth_cookies(response: Response, role: Role) -> None:
    settings = get_settings()
    for name in _cookie_names(role):
        response.delete_cookie(
            key=name,
            path="/",
            httponly=not name.endswith(CLIENT_COOKIE_SUFFIX),
            samesite="lax",
            secure=settings.COOKIE_SECURE,
        )
