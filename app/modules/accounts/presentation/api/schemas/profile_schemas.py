# 📄 File: app/modules/accounts/presentation/api/schemas/profile_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a pet owner's or caregiver's profile looks like and the forms used to edit it.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for profile reads and updates (profile, adoption preferences, image) of
# users and caregivers, plus the public caregiver summaries embedded in other responses.
#
# 🔄 Connected Modules / Calls From:
# - accounts profile endpoints, caregiving and admin responses

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.modules.notifications.presentation.api.schemas.notification_schemas import NotificationResponse
from app.modules.pet_shop.presentation.api.schemas.pet_schemas import PetOrderResponse
from app.shared.core.schemas import APIModel


# =============================================================================
# RESPONSES
# =============================================================================

class UserResponse(APIModel):
    """Pet owner profile (never includes the password hash)."""

    id: str
    name: str
    email: str
    image: Optional[str] = None
    age: Optional[int] = None
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    daily_availability: int
    has_outdoor_space: bool
    has_children: bool
    has_allergies: bool
    experience_level: int
    created_at: datetime
    updated_at: datetime


class UserDataResponse(UserResponse):
    """Owner profile with adoption orders and notifications."""

    pet_orders: List[PetOrderResponse] = Field(default_factory=list)
    notifications: List[NotificationResponse] = Field(default_factory=list)


class UserSummary(APIModel):
    """Public owner summary embedded in posts, comments and ratings."""

    id: str
    name: str
    image: Optional[str] = None


class UserAdminSummary(APIModel):
    id: str
    name: str
    email: str
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    created_at: datetime


class CaregiverResponse(APIModel):
    """Caregiver profile (never includes the password hash)."""

    id: str
    name: str
    email: str
    image: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    bio: str = ""
    verified: bool
    hourly_rate: float = 0
    total_earnings: float = 0
    created_at: datetime
    updated_at: datetime

    @field_validator("hourly_rate", "total_earnings", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, value):
        return value or 0


class CaregiverSummary(APIModel):
    """Caregiver summary embedded in job applications."""

    id: str
    name: str
    email: str
    image: Optional[str] = None
    bio: str = ""
    hourly_rate: float = 0
    verified: bool = False

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def _missing_rate_is_zero(cls, value):
        return value or 0


# =============================================================================
# REQUESTS
# =============================================================================

class UpdateUserProfileRequest(APIModel):
    id: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = None
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None


class UpdatePreferencesRequest(APIModel):
    id: Optional[str] = None
    daily_availability: Optional[int] = Field(default=None, ge=1, le=24)
    has_outdoor_space: Optional[bool] = None
    has_children: Optional[bool] = None
    has_allergies: Optional[bool] = None
    experience_level: Optional[int] = Field(default=None, ge=1, le=5)


class UpdateImageRequest(APIModel):
    id: Optional[str] = None
    image_base64: Optional[str] = None


class UpdateCaregiverProfileRequest(APIModel):
    id: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
