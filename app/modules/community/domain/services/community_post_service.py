# 📄 File: app/modules/community/domain/services/community_post_service.py
# 🧭 Purpose (Layman Explanation):
# The rules both kinds of neighbourhood posts share: who may change or delete a post, how
# upvotes and comments work and how a post's photo is replaced.
#
# 🧪 Purpose (Technical Summary):
# Base domain service for missing and donation posts. Subclasses bind a repository, a
# listing schema, an image folder and their notification texts.
#
# 🔗 Dependencies:
# - community post repositories, NotificationService, ImageChanges
#
# 🔄 Connected Modules / Calls From:
# - MissingPostService, DonationPostService

from typing import Any, Dict, List, Optional

from app.modules.community.infrastructure.database.models import CommentModel
from app.modules.community.infrastructure.database.post_repository_impl import CommunityPostRepository
from app.modules.community.presentation.api.schemas.community_schemas import CommentResponse
from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.infrastructure.database.models import NotificationType
from app.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.shared.infrastructure.storage.supabase_storage import ImageChanges
from app.shared.utils.helpers import normalize_location
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import require_fields

logger = get_logger(__name__)

REQUIRED_POST_FIELDS = ("title", "description", "imageBase64", "country", "city", "area", "species", "breed", "age")
POST_FIELDS = ("title", "description", "country", "species", "breed", "age")


class CommunityPostService:
    """Shared post rules; see MissingPostService and DonationPostService."""

    post_type = "post"
    image_folder = ""
    list_schema: Any = None
    counts_schema: Any = None
    comment_message = 'Someone commented on your post: "{title}"'
    update_fields = POST_FIELDS

    def __init__(
        self,
        repository: CommunityPostRepository,
        notification_service: NotificationService,
        images: ImageChanges,
    ):
        self.repository = repository
        self.notification_service = notification_service
        self.images = images

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_post(self, post_id: str):
        post = await self.repository.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found", resource_type=self.post_type, resource_id=post_id)
        return post

    async def _get_owned_post(self, user_id: str, post_id: str, action: str):
        post = await self._get_post(post_id)
        if post.user_id != user_id:
            raise AuthorizationError(
                f"You can only {action} your own posts", resource_type=self.post_type, resource_id=post_id
            )
        return post

    def _item(self, post, counts: Optional[Dict[str, int]], schema=None, **extra: Any):
        schema = schema or self.list_schema
        return schema.model_validate(post).model_copy(
            update={"counts": self.counts_schema.model_validate(counts or {}), **extra}
        )

    async def _list_items(self, posts: List[Any]) -> List[Dict[str, Any]]:
        counts = await self.repository.counts(post.id for post in posts)
        return [self._item(post, counts.get(post.id)).to_json() for post in posts]

    def _post_fields(self, data: Dict[str, Any], fields=POST_FIELDS) -> Dict[str, Any]:
        """Model fields from a camelCase payload; city and area are normalised."""
        values = {field: data.get(field) for field in fields}
        for field in ("city", "area"):
            if field in data:
                values[field] = normalize_location(data.get(field))
        return values

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    async def list_posts(
        self,
        user_id: str,
        city: Optional[str] = None,
        area: Optional[str] = None,
        mine: bool = False,
    ) -> List[Dict[str, Any]]:
        """The caller's posts, the open posts of an area, or every post."""
        if mine:
            return await self._list_own(user_id)
        if city and area:
            posts = await self.repository.list_in_area(city, area)
        else:
            posts = await self.repository.list_all()
        return await self._list_items(posts)

    async def _list_own(self, user_id: str) -> List[Dict[str, Any]]:
        return await self._list_items(await self.repository.list_for_user(user_id))

    async def _create(
        self, user_id: str, data: Dict[str, Any], required=REQUIRED_POST_FIELDS, fields=POST_FIELDS, **extra: Any
    ):
        require_fields(data, required)
        values = self._post_fields(data, fields)
        values.update(extra)

        image_url = await self.images.upload(data["imageBase64"], self.image_folder)
        post = await self.repository.create(user_id=user_id, images=image_url, **values)
        logger.log_user_action(f"create_{self.post_type}", user_id, resource=post.id)
        return post

    async def update_post(self, user_id: str, post_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update the caller's post; a new `imageBase64` replaces the photo.

        Raises:
            NotFoundError: Unknown post
            AuthorizationError: The post belongs to someone else
        """
        post = await self._get_owned_post(user_id, post_id, "update")

        values = {
            key: value for key, value in self._post_fields(data, self.update_fields).items() if value is not None
        }
        if data.get("imageBase64"):
            self.images.discard(post.images)
            values["images"] = await self.images.upload(data["imageBase64"], self.image_folder)

        post = await self.repository.update(post, values)
        logger.log_user_action(f"update_{self.post_type}", user_id, resource=post_id, fields=sorted(values))
        counts = await self.repository.counts([post.id])
        return self._item(post, counts.get(post.id)).to_json()

    async def delete_post(self, user_id: str, post_id: str) -> None:
        post = await self._get_owned_post(user_id, post_id, "delete")
        self.images.discard(post.images)
        await self.repository.delete(post)
        logger.log_user_action(f"delete_{self.post_type}", user_id, resource=post_id)

    # ------------------------------------------------------------------
    # Upvotes
    # ------------------------------------------------------------------

    async def has_upvoted(self, user_id: str, post_id: str) -> bool:
        await self._get_post(post_id)
        return await self.repository.has_upvoted(user_id, post_id)

    async def upvote(self, user_id: str, post_id: str) -> int:
        post = await self._get_post(post_id)
        if await self.repository.has_upvoted(user_id, post_id):
            raise ValidationError("You have already upvoted this post")
        return await self.repository.add_upvote(user_id, post)

    async def remove_upvote(self, user_id: str, post_id: str) -> int:
        post = await self._get_post(post_id)
        if not await self.repository.has_upvoted(user_id, post_id):
            raise ValidationError("You have not upvoted this post")
        return await self.repository.remove_upvote(user_id, post)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def list_comments(self, post_id: str) -> List[Dict[str, Any]]:
        await self._get_post(post_id)
        comments = await self.repository.list_comments(post_id)
        return [CommentResponse.model_validate(comment).to_json() for comment in comments]

    async def add_comment(self, user_id: str, post_id: str, content: Optional[str]) -> CommentModel:
        """Comment on a post; the owner is notified unless they wrote it."""
        if not content or not content.strip():
            raise ValidationError("Comment content is required", field="content")

        post = await self._get_post(post_id)
        comment = await self.repository.add_comment(user_id, post_id, content.strip())

        if post.user_id != user_id:
            await self.notification_service.notify(
                post.user_id,
                NotificationType.NEW_COMMENT,
                self.comment_message.format(title=post.title),
            )
        return comment

    async def delete_comment(self, user_id: str, post_id: str, comment_id: str) -> None:
        comment = await self.repository.get_comment(comment_id, post_id)
        if comment is None:
            raise NotFoundError("Comment not found", resource_type="comment", resource_id=comment_id)
        if comment.user_id != user_id:
            raise AuthorizationError(
                "You can only delete your own comments", resource_type="comment", resource_id=comment_id
            )
        await self.repository.delete_comment(comment)
