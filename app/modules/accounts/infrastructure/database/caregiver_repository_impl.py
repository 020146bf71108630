# 📄 File: app/modules/accounts/infrastructure/database/caregiver_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores and finds caregiver accounts, keeps their profile up to date and adds up what they earned.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for `caregivers` on the request's AsyncSession.
#
# 🔄 Connected Modules / Calls From:
# - accounts AuthService / ProfileService
# - caregiving (applicant summaries, earnings on job completion), admin back-office

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.accounts.infrastructure.database.models import CaregiverModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class CaregiverRepositoryImpl:
    """SQLAlchemy repository for caregiver accounts."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, **fields: Any) -> CaregiverModel:
        caregiver = CaregiverModel(**fields)
        self._session.add(caregiver)
        await self._session.flush()
        logger.info(f"Created caregiver with ID: {caregiver.id}")
        return caregiver

    async def get_by_id(self, caregiver_id: str) -> Optional[CaregiverModel]:
        return await self._session.get(CaregiverModel, caregiver_id)

    async def get_by_email(self, email: str) -> Optional[CaregiverModel]:
        stmt = select(CaregiverModel).where(CaregiverModel.email == email.strip().lower())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, caregiver_ids: Iterable[str]) -> Dict[str, CaregiverModel]:
        """Caregivers keyed by id."""
        ids = list(set(caregiver_ids))
        if not ids:
            return {}
        result = await self._session.execute(select(CaregiverModel).where(CaregiverModel.id.in_(ids)))
        return {caregiver.id: caregiver for caregiver in result.scalars().all()}

    async def update(self, caregiver: CaregiverModel, fields: Dict[str, Any]) -> CaregiverModel:
        for key, value in fields.items():
            setattr(caregiver, key, value)
        await self._session.flush()
        logger.debug(f"Updated caregiver {caregiver.id}: {sorted(fields)}")
        return caregiver

    async def add_earnings(self, caregiver: CaregiverModel, amount: float) -> CaregiverModel:
        """Increase total earnings by `amount`."""
        caregiver.total_earnings = float(caregiver.total_earnings or 0) + float(amount or 0)
        await self._session.flush()
        return caregiver

    async def list_all(self) -> List[CaregiverModel]:
        stmt = select(CaregiverModel).order_by(CaregiverModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(CaregiverModel.id)))
        return result.scalar_one()
