"""
Community post repositories for PetVally: missing and donation posts with their
upvotes and comments.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.community.infrastructure.database.models import (
    AdoptionFormModel,
    CommentModel,
    DonationPostModel,
    MissingPostModel,
    MissingPostStatus,
    UpvoteModel,
)
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class CommunityPostRepository:
    """
    Shared SQLAlchemy queries for one kind of community post.

    Subclasses set `model` and `post_key`, the column of `upvotes` and
    `comments` that points at their post table.
    """

    model: Any = None
    post_key: str = ""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    def _post_column(self, model):
        return getattr(model, self.post_key)

    def _area_filters(self) -> list:
        return []

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    async def create(self, **fields: Any):
        post = self.model(**fields)
        self._session.add(post)
        await self._session.flush()
        return await self.get_by_id(post.id)

    async def get_by_id(self, post_id: str):
        stmt = select(self.model).where(self.model.id == post_id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def list_all(self) -> list:
        stmt = select(self.model).order_by(self.model.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_for_user(self, user_id: str) -> list:
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_in_area(self, city: str, area: str) -> list:
        """Open posts of an area (case-insensitive), newest first."""
        stmt = (
            select(self.model)
            .where(
                func.lower(self.model.city) == city.strip().lower(),
                func.lower(self.model.area) == area.strip().lower(),
                *self._area_filters(),
            )
            .order_by(self.model.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def update(self, post, fields: Dict[str, Any]):
        for key, value in fields.items():
            setattr(post, key, value)
        await self._session.flush()
        return await self.get_by_id(post.id)

    async def delete(self, post) -> None:
        """Delete a post with its upvotes and comments."""
        await self._session.execute(delete(UpvoteModel).where(self._post_column(UpvoteModel) == post.id))
        await self._session.execute(delete(CommentModel).where(self._post_column(CommentModel) == post.id))
        await self._session.delete(post)
        await self._session.flush()

    async def _count_by(self, model, post_ids: List[str]) -> Dict[str, int]:
        column = self._post_column(model)
        stmt = select(column, func.count(model.id)).where(column.in_(post_ids)).group_by(column)
        result = await self._session.execute(stmt)
        return {post_id: count for post_id, count in result.all()}

    async def counts(self, post_ids: Iterable[str]) -> Dict[str, Dict[str, int]]:
        """Comment and upvote counts per post id."""
        post_ids = list(post_ids)
        if not post_ids:
            return {}
        comments = await self._count_by(CommentModel, post_ids)
        upvotes = await self._count_by(UpvoteModel, post_ids)
        return {
            post_id: {"comments": comments.get(post_id, 0), "upvotes": upvotes.get(post_id, 0)}
            for post_id in post_ids
        }

    # ------------------------------------------------------------------
    # Upvotes
    # ------------------------------------------------------------------

    async def has_upvoted(self, user_id: str, post_id: str) -> bool:
        stmt = select(func.count(UpvoteModel.id)).where(
            UpvoteModel.user_id == user_id,
            self._post_column(UpvoteModel) == post_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def add_upvote(self, user_id: str, post) -> int:
        """Record the upvote and return the post's new upvote count."""
        self._session.add(UpvoteModel(user_id=user_id, **{self.post_key: post.id}))
        post.upvotes_count = (post.upvotes_count or 0) + 1
        await self._session.flush()
        return post.upvotes_count

    async def remove_upvote(self, user_id: str, post) -> int:
        await self._session.execute(
            delete(UpvoteModel).where(
                UpvoteModel.user_id == user_id,
                self._post_column(UpvoteModel) == post.id,
            )
        )
        post.upvotes_count = max((post.upvotes_count or 0) - 1, 0)
        await self._session.flush()
        return post.upvotes_count

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def list_comments(self, post_id: str, newest_first: bool = False) -> List[CommentModel]:
        order = CommentModel.created_at.desc() if newest_first else CommentModel.created_at.asc()
        stmt = select(CommentModel).where(self._post_column(CommentModel) == post_id).order_by(order)
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def add_comment(self, user_id: str, post_id: str, content: str) -> CommentModel:
        comment = CommentModel(user_id=user_id, content=content, **{self.post_key: post_id})
        self._session.add(comment)
        await self._session.flush()

        stmt = select(CommentModel).where(CommentModel.id == comment.id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.unique().scalar_one()

    async def get_comment(self, comment_id: str, post_id: str) -> Optional[CommentModel]:
        stmt = select(CommentModel).where(
            CommentModel.id == comment_id,
            self._post_column(CommentModel) == post_id,
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def delete_comment(self, comment: CommentModel) -> None:
        await self._session.delete(comment)
        await self._session.flush()


class MissingPostRepositoryImpl(CommunityPostRepository):
    """SQLAlchemy repository for missing pet posts."""

    model = MissingPostModel
    post_key = "missing_post_id"

    def _area_filters(self) -> list:
        return [MissingPostModel.status == MissingPostStatus.NOT_FOUND]


class DonationPostRepositoryImpl(CommunityPostRepository):
    """SQLAlchemy repository for pet donation posts."""

    model = DonationPostModel
    post_key = "donation_post_id"

    def _area_filters(self) -> list:
        return [DonationPostModel.is_available.is_(True)]

    async def delete(self, post) -> None:
        await self._session.execute(delete(AdoptionFormModel).where(AdoptionFormModel.donation_post_id == post.id))
        await super().delete(post)

    async def counts(self, post_ids: Iterable[str]) -> Dict[str, Dict[str, int]]:
        post_ids = list(post_ids)
        counts = await super().counts(post_ids)
        if not post_ids:
            return counts

        stmt = (
            select(AdoptionFormModel.donation_post_id, func.count(AdoptionFormModel.id))
            .where(AdoptionFormModel.donation_post_id.in_(post_ids))
            .group_by(AdoptionFormModel.donation_post_id)
        )
        result = await self._session.execute(stmt)
        forms = {post_id: count for post_id, count in result.all()}
        for post_id, post_counts in counts.items():
            post_counts["adoptionForms"] = forms.get(post_id, 0)
        return counts
