"""
Adoption form repository for PetVally.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.community.infrastructure.database.models import (
    AdoptionFormModel,
    AdoptionStatus,
    DonationPostModel,
)
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class AdoptionFormRepositoryImpl:
    """SQLAlchemy repository for adoption applications."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def get_by_id(self, form_id: str) -> Optional[AdoptionFormModel]:
        stmt = (
            select(AdoptionFormModel)
            .where(AdoptionFormModel.id == form_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def find(self, user_id: str, post_id: str) -> Optional[AdoptionFormModel]:
        stmt = select(AdoptionFormModel).where(
            AdoptionFormModel.user_id == user_id,
            AdoptionFormModel.donation_post_id == post_id,
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def create(self, user_id: str, post_id: str, description: str, meeting_schedule: datetime) -> AdoptionFormModel:
        form = AdoptionFormModel(
            user_id=user_id,
            donation_post_id=post_id,
            description=description,
            meeting_schedule=meeting_schedule,
        )
        self._session.add(form)
        await self._session.flush()
        return await self.get_by_id(form.id)

    async def list_for_post(self, post_id: str) -> List[AdoptionFormModel]:
        """Applications for a donation post, newest first."""
        stmt = (
            select(AdoptionFormModel)
            .where(AdoptionFormModel.donation_post_id == post_id)
            .order_by(AdoptionFormModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def accept_only(self, form: AdoptionFormModel) -> AdoptionFormModel:
        """Accept `form`, reject the other applications and close the post."""
        await self._session.execute(
            update(AdoptionFormModel)
            .where(
                AdoptionFormModel.donation_post_id == form.donation_post_id,
                AdoptionFormModel.id != form.id,
            )
            .values(status=AdoptionStatus.REJECTED)
        )
        await self._session.execute(
            update(DonationPostModel)
            .where(DonationPostModel.id == form.donation_post_id)
            .values(is_available=False)
        )
        form.status = AdoptionStatus.ACCEPTED
        await self._session.flush()
        return await self.get_by_id(form.id)

    async def list_accepted_for_applicant(self, user_id: str) -> List[AdoptionFormModel]:
        stmt = (
            select(AdoptionFormModel)
            .where(
                AdoptionFormModel.user_id == user_id,
                AdoptionFormModel.status == AdoptionStatus.ACCEPTED,
            )
            .order_by(AdoptionFormModel.meeting_schedule.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_accepted_for_owner(self, user_id: str) -> List[AdoptionFormModel]:
        stmt = (
            select(AdoptionFormModel)
            .join(DonationPostModel, DonationPostModel.id == AdoptionFormModel.donation_post_id)
            .where(
                DonationPostModel.user_id == user_id,
                AdoptionFormModel.status == AdoptionStatus.ACCEPTED,
            )
            .order_by(AdoptionFormModel.meeting_schedule.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())
