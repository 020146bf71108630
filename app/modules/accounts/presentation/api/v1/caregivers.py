# 📄 File: app/modules/accounts/presentation/api/v1/caregivers.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints caregivers use to sign up, log in and out, and manage their profile.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/caregivers for caregiver auth and owner-only profile updates.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from app.modules.accounts.domain.services.auth_service import AuthService
from app.modules.accounts.domain.services.profile_service import ProfileService
from app.modules.accounts.presentation.api.schemas.auth_schemas import (
    AccountSummary,
    LoginRequest,
    RegisterRequest,
)
from app.modules.accounts.presentation.api.schemas.profile_schemas import (
    CaregiverResponse,
    UpdateCaregiverProfileRequest,
    UpdateImageRequest,
)
from app.modules.accounts.presentation.api.v1.cookies import clear_auth_cookies, set_auth_cookies
from app.shared.core.dependencies import CurrentPrincipal, get_current_caregiver
from app.shared.core.rate_limiter import auth_rate_limit, limiter
from app.shared.core.schemas import dump
from app.shared.core.security import Role

caregivers_router = APIRouter()


@caregivers_router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register a caregiver")
@limiter.limit(auth_rate_limit)
async def register_caregiver(
    request: Request,
    payload: RegisterRequest,
    service: AuthService = Depends(),
) -> dict:
    caregiver = await service.register_caregiver(payload.name, payload.email, payload.password)
    return {"message": "Caregiver registered successfully", "caregiver": dump(AccountSummary, caregiver)}


@caregivers_router.post("/login", summary="Caregiver login")
@limiter.limit(auth_rate_limit)
async def login_caregiver(
    request: Request,
    response: Response,
    payload: LoginRequest,
    service: AuthService = Depends(),
) -> dict:
    caregiver, token = await service.login_caregiver(payload.email, payload.password)
    set_auth_cookies(response, Role.CAREGIVER, token)
    return {"message": "Login successful", "caregiver": dump(AccountSummary, caregiver), "token": token}


@caregivers_router.post("/logout", summary="Caregiver logout")
async def logout_caregiver(response: Response) -> dict:
    clear_auth_cookies(response, Role.CAREGIVER)
    return {"message": "Logged out successfully"}


@caregivers_router.get("/caregiverdata", summary="Caregiver profile")
async def get_caregiver_data(
    id: Optional[str] = Query(default=None),
    principal: CurrentPrincipal = Depends(get_current_caregiver),
    service: ProfileService = Depends(),
) -> dict:
    caregiver = await service.get_caregiver_data(id)
    return {"message": "Caregiver data retrieved successfully", "caregiver": dump(CaregiverResponse, caregiver)}


@caregivers_router.put("/update-profile", summary="Update caregiver profile")
async def update_caregiver_profile(
    payload: UpdateCaregiverProfileRequest,
    principal: CurrentPrincipal = Depends(get_current_caregiver),
    service: ProfileService = Depends(),
) -> dict:
    caregiver = await service.update_caregiver_profile(
        principal.id,
        payload.id,
        name=payload.name,
        country=payload.country,
        city=payload.city,
        area=payload.area,
        bio=payload.bio,
        hourly_rate=payload.hourly_rate,
    )
    return {"message": "Caregiver profile updated successfully", "caregiver": dump(CaregiverResponse, caregiver)}


@caregivers_router.put("/update-image", summary="Replace caregiver profile image")
async def update_caregiver_image(
    payload: UpdateImageRequest,
    principal: CurrentPrincipal = Depends(get_current_caregiver),
    service: ProfileService = Depends(),
) -> dict:
    caregiver = await service.update_caregiver_image(principal.id, payload.id, payload.image_base64)
    return {"message": "Profile image updated successfully", "caregiver": dump(CaregiverResponse, caregiver)}
