# 📄 File: app/modules/caregiving/presentation/api/schemas/job_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what pet-sitting jobs, applications and caregiver reviews look like in the app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for job posts, job applications, reviews and the public
# caregiver profile and schedule.
#
# 🔄 Connected Modules / Calls From:
# - caregiving routers and services

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.modules.accounts.presentation.api.schemas.profile_schemas import CaregiverSummary, UserSummary
from app.shared.core.schemas import APIModel


# =============================================================================
# JOB POSTS
# =============================================================================

class JobPostResponse(APIModel):
    id: str
    title: str
    description: str
    tags: List[str] = Field(default_factory=list)
    country: Optional[str] = None
    city: str
    area: str
    price_range_low: float
    price_range_high: float
    start_date: datetime
    end_date: datetime
    status: str
    user_id: str
    selected_caregiver_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class JobPostListItem(JobPostResponse):
    """Job post in a listing, with its poster and number of applications."""

    user: UserSummary
    application_count: int = 0


class RatedCaregiver(CaregiverSummary):
    average_rating: float = 0


class ReviewResponse(APIModel):
    id: str
    rating: int
    comment: Optional[str] = None
    user_id: str
    caregiver_id: str
    created_at: datetime
    updated_at: datetime


class ReviewWithUser(ReviewResponse):
    user: UserSummary


class SelectedCaregiver(RatedCaregiver):
    reviews: List[ReviewWithUser] = Field(default_factory=list)


class JobApplicationResponse(APIModel):
    id: str
    proposal: str
    requested_amount: float
    status: str
    caregiver_id: str
    job_post_id: str
    created_at: datetime
    updated_at: datetime


class ApplicationWithCaregiver(JobApplicationResponse):
    caregiver: RatedCaregiver


class ApplicationWithJob(JobApplicationResponse):
    job_post: JobPostListItem


class JobPostDetail(JobPostListItem):
    applications: List[ApplicationWithCaregiver] = Field(default_factory=list)
    selected_caregiver: Optional[SelectedCaregiver] = None


class CreateJobPostRequest(APIModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    price_range_low: Optional[float] = None
    price_range_high: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class JobActionRequest(APIModel):
    """Owner action on a job: select_caregiver, end_job or cancel_job."""

    action: Optional[str] = None
    application_id: Optional[str] = None
    caregiver_id: Optional[str] = None


class ApplyRequest(APIModel):
    job_post_id: Optional[str] = None
    proposal: Optional[str] = None
    requested_amount: Optional[float] = None


# =============================================================================
# REVIEWS AND PUBLIC PROFILE
# =============================================================================

class CreateReviewRequest(APIModel):
    caregiver_id: Optional[str] = None
    rating: Optional[float] = None
    comment: Optional[str] = None


class PublicCaregiverProfile(APIModel):
    """Caregiver profile as shown to owners (no email, no password)."""

    id: str
    name: str
    image: Optional[str] = None
    bio: str = ""
    hourly_rate: float = 0
    total_earnings: float = 0
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    verified: bool = False
    created_at: datetime

    @field_validator("hourly_rate", "total_earnings", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, value):
        return value or 0


class ScheduleEntry(APIModel):
    id: str
    title: str
    start_date: datetime
    end_date: datetime
    description: str
    location: str
    status: str
    amount: float
    client: str
    time: str
    color: str
