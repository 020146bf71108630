# 📄 File: app/modules/community/presentation/api/schemas/community_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what missing pet posts, donation posts, comments and adoption applications look like
# when they are sent to or received from the app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the community module. Listing items carry a `_count`
# object with comment, upvote and (donation posts) adoption form counts.
#
# 🔄 Connected Modules / Calls From:
# - community routers and services

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.modules.accounts.presentation.api.schemas.profile_schemas import UserSummary
from app.shared.core.schemas import APIModel


# =============================================================================
# SHARED
# =============================================================================

class CommentResponse(APIModel):
    id: str
    content: str
    user_id: str
    missing_post_id: Optional[str] = None
    donation_post_id: Optional[str] = None
    created_at: datetime
    user: UserSummary


class MissingPostCounts(APIModel):
    comments: int = 0
    upvotes: int = 0


class DonationPostCounts(MissingPostCounts):
    adoption_forms: int = 0


# =============================================================================
# MISSING POSTS
# =============================================================================

class MissingPostResponse(APIModel):
    id: str
    title: str
    description: str
    images: str
    country: str
    city: str
    area: str
    species: str
    breed: str
    age: int
    status: str
    upvotes_count: int = 0
    user_id: str
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None


class MissingPostListItem(MissingPostResponse):
    counts: MissingPostCounts = Field(default_factory=MissingPostCounts, alias="_count")


class MissingPostDetail(MissingPostListItem):
    comments: List[CommentResponse] = Field(default_factory=list)


# =============================================================================
# DONATION POSTS
# =============================================================================

class DonationPostResponse(APIModel):
    id: str
    title: str
    description: str
    images: str
    country: str
    city: str
    area: str
    species: str
    breed: str
    age: int
    gender: str
    vaccinated: bool
    neutered: bool
    is_available: bool
    upvotes_count: int = 0
    user_id: str
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None


class AdoptionFormResponse(APIModel):
    id: str
    description: str
    meeting_schedule: datetime
    status: str
    user_id: str
    donation_post_id: str
    created_at: datetime
    user: Optional[UserSummary] = None


class MeetingResponse(AdoptionFormResponse):
    """Accepted adoption form with the post it is for."""

    donation_post: DonationPostResponse


class DonationPostListItem(DonationPostResponse):
    counts: DonationPostCounts = Field(default_factory=DonationPostCounts, alias="_count")


class OwnDonationPost(DonationPostListItem):
    """The caller's own post, with the applications it received."""

    adoption_forms: List[AdoptionFormResponse] = Field(default_factory=list)


class DonationPostDetail(OwnDonationPost):
    comments: List[CommentResponse] = Field(default_factory=list)


# =============================================================================
# REQUESTS
# =============================================================================

class CreateMissingPostRequest(APIModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image_base64: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[int] = None


class UpdateMissingPostRequest(CreateMissingPostRequest):
    pass


class UpdateMissingPostStatusRequest(APIModel):
    status: Optional[str] = None


class CreateDonationPostRequest(CreateMissingPostRequest):
    gender: Optional[str] = None
    vaccinated: Optional[bool] = None
    neutered: Optional[bool] = None


class UpdateDonationPostRequest(CreateDonationPostRequest):
    is_available: Optional[bool] = None


class CommentRequest(APIModel):
    content: Optional[str] = None


class AdoptionRequest(APIModel):
    description: Optional[str] = None
    meeting_schedule: Optional[datetime] = None
