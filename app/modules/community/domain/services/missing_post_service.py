# 📄 File: app/modules/community/domain/services/missing_post_service.py
# 🧭 Purpose (Layman Explanation):
# Helps owners find lost pets: a post alerts the neighbours, and marking it found tells them
# the good news.
#
# 🧪 Purpose (Technical Summary):
# Missing post service on top of CommunityPostService: area notifications on creation and on
# the FOUND status change, and the post detail with comments.
#
# 🔄 Connected Modules / Calls From:
# - missing posts router

from typing import Any, Dict, Optional

from fastapi import Depends

from app.modules.community.domain.services.community_post_service import CommunityPostService
from app.modules.community.infrastructure.database.models import MissingPostStatus
from app.modules.community.infrastructure.database.post_repository_impl import MissingPostRepositoryImpl
from app.modules.community.presentation.api.schemas.community_schemas import (
    CommentResponse,
    MissingPostCounts,
    MissingPostDetail,
    MissingPostListItem,
)
from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.infrastructure.database.models import NotificationType
from app.shared.core.exceptions import ValidationError
from app.shared.infrastructure.storage.supabase_storage import (
    MISSING_POSTS_FOLDER,
    ImageChanges,
)
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


class MissingPostService(CommunityPostService):
    """Domain service for missing pet posts."""

    post_type = "missing_post"
    image_folder = MISSING_POSTS_FOLDER
    list_schema = MissingPostListItem
    counts_schema = MissingPostCounts
    comment_message = 'Someone commented on your missing pet post: "{title}"'

    def __init__(
        self,
        repository: MissingPostRepositoryImpl = Depends(),
        notification_service: NotificationService = Depends(),
        images: ImageChanges = Depends(),
    ):
        super().__init__(repository, notification_service, images)

    async def create_post(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        post = await self._create(user_id, data, status=MissingPostStatus.NOT_FOUND, upvotes_count=0)
        await self.notification_service.notify_area(
            post.city,
            post.area,
            user_id,
            NotificationType.NEW_MISSING_POST,
            f"Missing pet reported in your area: {post.title}",
        )
        return self._item(post, None).to_json()

    async def get_post(self, user_id: str, post_id: str) -> Dict[str, Any]:
        """Post with comments (newest first) and whether the caller upvoted it."""
        post = await self._get_post(post_id)
        counts = await self.repository.counts([post_id])
        comments = await self.repository.list_comments(post_id, newest_first=True)
        detail = self._item(
            post,
            counts.get(post_id),
            schema=MissingPostDetail,
            comments=[CommentResponse.model_validate(comment) for comment in comments],
        )
        return {
            "post": detail.to_json(),
            "hasUpvoted": await self.repository.has_upvoted(user_id, post_id),
        }

    async def update_status(self, user_id: str, post_id: str, status: Optional[str]) -> Dict[str, Any]:
        """
        Mark a post FOUND or NOT_FOUND; FOUND tells the neighbours.

        Raises:
            ValidationError: Unknown status
            NotFoundError: Unknown post
            AuthorizationError: The post belongs to someone else
        """
        if status not in MissingPostStatus.ALL:
            raise ValidationError("Invalid status", field="status")

        post = await self._get_owned_post(user_id, post_id, "update")
        post = await self.repository.update(post, {"status": status})

        if status == MissingPostStatus.FOUND:
            await self.notification_service.notify_area(
                post.city,
                post.area,
                user_id,
                NotificationType.PET_FOUND,
                f"Good news! A missing pet in your area has been found: {post.title}",
            )
            logger.log_business_event("pet_found", f"Missing pet {post_id} found", entity_id=post_id)

        counts = await self.repository.counts([post_id])
        return self._item(post, counts.get(post_id)).to_json()
