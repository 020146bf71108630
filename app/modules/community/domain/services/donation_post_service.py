# 📄 File: app/modules/community/domain/services/donation_post_service.py
# 🧭 Purpose (Layman Explanation):
# Lets owners offer a pet for adoption, lets neighbours apply to adopt it, and lets the owner
# pick the new family and plan a meeting.
#
# 🧪 Purpose (Technical Summary):
# Donation post service on top of CommunityPostService plus the adoption workflow: one
# application per user and post, the owner accepts one (the others are rejected and the post
# becomes unavailable) and both sides list their accepted meetings.
#
# 🔗 Dependencies:
# - DonationPostRepositoryImpl, AdoptionFormRepositoryImpl, NotificationService
#
# 🔄 Connected Modules / Calls From:
# - donation posts router

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.community.domain.services.community_post_service import (
    POST_FIELDS,
    REQUIRED_POST_FIELDS,
    CommunityPostService,
)
from app.modules.community.infrastructure.database.adoption_repository_impl import AdoptionFormRepositoryImpl
from app.modules.community.infrastructure.database.post_repository_impl import DonationPostRepositoryImpl
from app.modules.community.presentation.api.schemas.community_schemas import (
    AdoptionFormResponse,
    CommentResponse,
    DonationPostCounts,
    DonationPostDetail,
    DonationPostListItem,
    MeetingResponse,
    OwnDonationPost,
)
from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.infrastructure.database.models import NotificationType
from app.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.shared.infrastructure.storage.supabase_storage import (
    DONATION_POSTS_FOLDER,
    ImageChanges,
)
from app.shared.utils.helpers import as_utc
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

DONATION_FIELDS = POST_FIELDS + ("gender", "vaccinated", "neutered")
UNAVAILABLE_MESSAGE = "This pet is no longer available for adoption"


class DonationPostService(CommunityPostService):
    """Domain service for pet donation posts and adoption applications."""

    post_type = "donation_post"
    image_folder = DONATION_POSTS_FOLDER
    list_schema = DonationPostListItem
    counts_schema = DonationPostCounts
    update_fields = DONATION_FIELDS + ("isAvailable",)

    def __init__(
        self,
        repository: DonationPostRepositoryImpl = Depends(),
        adoption_repository: AdoptionFormRepositoryImpl = Depends(),
        notification_service: NotificationService = Depends(),
        images: ImageChanges = Depends(),
    ):
        super().__init__(repository, notification_service, images)
        self.adoption_repository = adoption_repository

    async def _list_own(self, user_id: str) -> List[Dict[str, Any]]:
        posts = await self.repository.list_for_user(user_id)
        counts = await self.repository.counts(post.id for post in posts)
        items = []
        for post in posts:
            forms = await self.adoption_repository.list_for_post(post.id)
            items.append(
                self._item(
                    post,
                    counts.get(post.id),
                    schema=OwnDonationPost,
                    adoption_forms=[AdoptionFormResponse.model_validate(form) for form in forms],
                ).to_json()
            )
        return items

    async def create_post(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        post = await self._create(
            user_id,
            data,
            required=REQUIRED_POST_FIELDS + ("gender",),
            fields=DONATION_FIELDS,
            vaccinated=bool(data.get("vaccinated")),
            neutered=bool(data.get("neutered")),
            is_available=True,
            upvotes_count=0,
        )
        await self.notification_service.notify_area(
            post.city,
            post.area,
            user_id,
            NotificationType.NEW_DONATION_POST,
            f"New pet donation in your area: {post.title}",
        )
        return self._item(post, None).to_json()

    def _post_fields(self, data: Dict[str, Any], fields=POST_FIELDS) -> Dict[str, Any]:
        values = super()._post_fields(data, fields)
        if "isAvailable" in values:
            values["is_available"] = values.pop("isAvailable")
        return values

    async def get_post(self, user_id: str, post_id: str) -> Dict[str, Any]:
        """Post with comments and adoption applications, newest first."""
        post = await self._get_post(post_id)
        counts = await self.repository.counts([post_id])
        comments = await self.repository.list_comments(post_id, newest_first=True)
        forms = await self.adoption_repository.list_for_post(post_id)
        detail = self._item(
            post,
            counts.get(post_id),
            schema=DonationPostDetail,
            comments=[CommentResponse.model_validate(comment) for comment in comments],
            adoption_forms=[AdoptionFormResponse.model_validate(form) for form in forms],
        )
        return {
            "post": detail.to_json(),
            "hasUpvoted": await self.repository.has_upvoted(user_id, post_id),
        }

    # ------------------------------------------------------------------
    # Adoption
    # ------------------------------------------------------------------

    async def apply(self, user_id: str, post_id: str, description: Optional[str], meeting_schedule) -> Dict[str, Any]:
        """
        Apply to adopt a donated pet.

        Raises:
            ValidationError: Missing fields, own post, unavailable pet or repeated application
            NotFoundError: Unknown post
        """
        if not description or not description.strip() or meeting_schedule is None:
            raise ValidationError("Description and meeting schedule are required")

        post = await self._get_post(post_id)
        if post.user_id == user_id:
            raise ValidationError("You cannot apply to adopt your own pet")
        if not post.is_available:
            raise ValidationError(UNAVAILABLE_MESSAGE)
        if await self.adoption_repository.find(user_id, post_id):
            raise ValidationError("You have already applied to adopt this pet")

        form = await self.adoption_repository.create(user_id, post_id, description.strip(), as_utc(meeting_schedule))
        await self.notification_service.notify(
            post.user_id,
            NotificationType.NEW_ADOPTION_APPLICATION,
            f'Someone applied to adopt your pet: "{post.title}"',
        )
        logger.log_user_action("apply_adoption", user_id, resource=post_id)
        return AdoptionFormResponse.model_validate(form).to_json()

    async def accept_application(self, user_id: str, form_id: str) -> Dict[str, Any]:
        """
        Accept one application; the others are rejected and the pet is no longer available.

        Raises:
            NotFoundError: Unknown application
            AuthorizationError: The caller does not own the post
            ValidationError: The pet was already adopted
        """
        form = await self.adoption_repository.get_by_id(form_id)
        if form is None:
            raise NotFoundError("Application not found", resource_type="adoption_form", resource_id=form_id)

        post = form.donation_post
        if post.user_id != user_id:
            raise AuthorizationError(
                "Only the post owner can accept adoption applications",
                resource_type="adoption_form",
                resource_id=form_id,
            )
        if not post.is_available:
            raise ValidationError(UNAVAILABLE_MESSAGE)

        form = await self.adoption_repository.accept_only(form)
        await self.notification_service.notify(
            form.user_id,
            NotificationType.ADOPTION_ACCEPTED,
            f'Your application to adopt "{post.title}" has been accepted!',
        )
        logger.log_business_event("adoption_accepted", f"Adoption of {post.id} accepted", entity_id=form_id)
        return AdoptionFormResponse.model_validate(form).to_json()

    async def meetings(self, user_id: str) -> Dict[str, Any]:
        """Accepted adoptions of the caller, as applicant and as post owner."""
        applicant = await self.adoption_repository.list_accepted_for_applicant(user_id)
        owner = await self.adoption_repository.list_accepted_for_owner(user_id)
        return {
            "applicantMeetings": [MeetingResponse.model_validate(form).to_json() for form in applicant],
            "ownerMeetings": [MeetingResponse.model_validate(form).to_json() for form in owner],
        }
