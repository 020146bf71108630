# 📄 File: app/modules/accounts/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints pet owners use to sign up, log in and out, and manage their profile.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users: registration and login (rate limited, cookie plus
# bearer token), logout, token verification and owner-only profile, preference and image updates.
#
# 🔗 Dependencies:
# - AuthService, ProfileService
# - slowapi limiter shared with the rest of the app
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.modules.accounts.domain.services.auth_service import AuthService
from app.modules.accounts.domain.services.profile_service import ProfileService
from app.modules.accounts.presentation.api.schemas.auth_schemas import (
    AccountSummary,
    LoginRequest,
    RegisterRequest,
)
from app.modules.accounts.presentation.api.schemas.profile_schemas import (
    UpdateImageRequest,
    UpdatePreferencesRequest,
    UpdateUserProfileRequest,
    UserResponse,
)
from app.modules.accounts.presentation.api.v1.cookies import clear_auth_cookies, set_auth_cookies
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.exceptions import AuthenticationError
from app.shared.core.rate_limiter import auth_rate_limit, limiter
from app.shared.core.schemas import dump
from app.shared.core.security import Role, get_security_manager

users_router = APIRouter()

bearer_only = HTTPBearer(auto_error=False)


@users_router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register a pet owner")
@limiter.limit(auth_rate_limit)
async def register_user(
    request: Request,
    payload: RegisterRequest,
    service: AuthService = Depends(),
) -> dict:
    user = await service.register_user(payload.name, payload.email, payload.password)
    return {"message": "User registered successfully", "user": dump(AccountSummary, user)}


@users_router.post("/login", summary="Pet owner login")
@limiter.limit(auth_rate_limit)
async def login_user(
    request: Request,
    response: Response,
    payload: LoginRequest,
    service: AuthService = Depends(),
) -> dict:
    """
    Check credentials and hand out a user token.

    The token is returned in the body, in the Authorization header and in the
    user-token cookies.
    """
    user, token = await service.login_user(payload.email, payload.password)
    set_auth_cookies(response, Role.USER, token)
    return {"message": "Login successful", "user": dump(AccountSummary, user), "token": token}


@users_router.post("/logout", summary="Pet owner logout")
async def logout_user() -> RedirectResponse:
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    clear_auth_cookies(response, Role.USER)
    return response


@users_router.get("/verify-token", summary="Verify a bearer token")
async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_only),
) -> dict:
    """Decode the Authorization bearer token and echo its claims."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Unauthorized - Missing or invalid token format")

    try:
        claims = get_security_manager().verify_token(credentials.credentials)
    except AuthenticationError:
        raise AuthenticationError("Unauthorized - Invalid token")

    return {"message": "Token is valid", "user": claims}


@users_router.get("/userdata", summary="Owner profile with orders and notifications")
async def get_user_data(
    id: Optional[str] = Query(default=None),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProfileService = Depends(),
) -> dict:
    user = await service.get_user_data(id)
    return {"message": "User data retrieved successfully", "user": user}


@users_router.put("/update-profile", summary="Update owner profile")
async def update_profile(
    payload: UpdateUserProfileRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProfileService = Depends(),
) -> dict:
    user = await service.update_user_profile(
        principal.id,
        payload.id,
        name=payload.name,
        age=payload.age,
        country=payload.country,
        city=payload.city,
        area=payload.area,
    )
    return {"message": "Profile updated successfully", "user": dump(UserResponse, user)}


@users_router.put("/update-preferences", summary="Update adoption preferences")
async def update_preferences(
    payload: UpdatePreferencesRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProfileService = Depends(),
) -> dict:
    user = await service.update_user_preferences(
        principal.id,
        payload.id,
        daily_availability=payload.daily_availability,
        has_outdoor_space=payload.has_outdoor_space,
        has_children=payload.has_children,
        has_allergies=payload.has_allergies,
        experience_level=payload.experience_level,
    )
    return {"message": "Preferences updated successfully", "user": dump(UserResponse, user)}


@users_router.put("/update-image", summary="Replace owner profile image")
async def update_image(
    payload: UpdateImageRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProfileService = Depends(),
) -> dict:
    user = await service.update_user_image(principal.id, payload.id, payload.image_base64)
    return {"message": "Profile image updated successfully", "user": dump(UserResponse, user)}
