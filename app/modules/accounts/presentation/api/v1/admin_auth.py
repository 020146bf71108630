"""
Admin authentication endpoints for PetVally.
Mounted under /api/admin next to the back-office router.
"""

from fastapi import APIRouter, Depends, Request, Response

from app.modules.accounts.domain.services.auth_service import AuthService
from app.modules.accounts.presentation.api.schemas.auth_schemas import AdminLoginRequest, AdminResponse
from app.modules.accounts.presentation.api.v1.cookies import clear_auth_cookies, set_auth_cookies
from app.shared.core.rate_limiter import auth_rate_limit, limiter
from app.shared.core.schemas import dump
from app.shared.core.security import Role

admin_auth_router = APIRouter()


@admin_auth_router.post("/login", summary="Admin login")
@limiter.limit(auth_rate_limit)
async def login_admin(
    request: Request,
    response: Response,
    payload: AdminLoginRequest,
    service: AuthService = Depends(),
) -> dict:
    admin, token = await service.login_admin(payload.username, payload.password)
    set_auth_cookies(response, Role.ADMIN, token)
    return {"message": "Login successful", "admin": dump(AdminResponse, admin), "token": token}


@admin_auth_router.post("/logout", summary="Admin logout")
async def logout_admin(response: Response) -> dict:
    clear_auth_cookies(response, Role.ADMIN)
    return {"message": "Logged out successfully"}
