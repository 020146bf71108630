"""
Caregiver review repository for PetVally.
"""

import logging
from typing import Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.caregiving.infrastructure.database.models import JobPostModel, JobStatus, ReviewModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class ReviewRepositoryImpl:
    """SQLAlchemy repository for caregiver reviews."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def list_for_caregiver(self, caregiver_id: str) -> List[ReviewModel]:
        """Reviews of a caregiver with their author, newest first."""
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.caregiver_id == caregiver_id)
            .order_by(ReviewModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def average_ratings(self, caregiver_ids: Iterable[str]) -> Dict[str, float]:
        """Average rating per caregiver; caregivers without reviews are absent."""
        caregiver_ids = list(caregiver_ids)
        if not caregiver_ids:
            return {}
        stmt = (
            select(ReviewModel.caregiver_id, func.avg(ReviewModel.rating))
            .where(ReviewModel.caregiver_id.in_(caregiver_ids))
            .group_by(ReviewModel.caregiver_id)
        )
        result = await self._session.execute(stmt)
        return {caregiver_id: float(avg) for caregiver_id, avg in result.all()}

    async def get_for_user(self, user_id: str, caregiver_id: str) -> Optional[ReviewModel]:
        stmt = select(ReviewModel).where(
            ReviewModel.user_id == user_id,
            ReviewModel.caregiver_id == caregiver_id,
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def has_closed_job(self, user_id: str, caregiver_id: str) -> bool:
        """Whether the user has a CLOSED job with this caregiver selected."""
        stmt = select(func.count(JobPostModel.id)).where(
            JobPostModel.user_id == user_id,
            JobPostModel.selected_caregiver_id == caregiver_id,
            JobPostModel.status == JobStatus.CLOSED,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def upsert(self, user_id: str, caregiver_id: str, rating: int, comment: Optional[str]) -> ReviewModel:
        """Create the user's review of a caregiver or overwrite the existing one."""
        review = await self.get_for_user(user_id, caregiver_id)
        if review is None:
            review = ReviewModel(user_id=user_id, caregiver_id=caregiver_id, rating=rating, comment=comment)
            self._session.add(review)
        else:
            review.rating = rating
            review.comment = comment
        await self._session.flush()

        stmt = select(ReviewModel).where(ReviewModel.id == review.id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.unique().scalar_one()
