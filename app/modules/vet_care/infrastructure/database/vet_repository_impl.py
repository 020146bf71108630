"""
Vet directory and appointment repositories for PetVally.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.vet_care.infrastructure.database.models import AppointmentModel, VetDoctorModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class VetRepositoryImpl:
    """SQLAlchemy repository for the vet directory."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, **fields: Any) -> VetDoctorModel:
        vet = VetDoctorModel(**fields)
        self._session.add(vet)
        await self._session.flush()
        return vet

    async def get_by_id(self, vet_id: str) -> Optional[VetDoctorModel]:
        return await self._session.get(VetDoctorModel, vet_id)

    async def list_all(self) -> List[VetDoctorModel]:
        result = await self._session.execute(select(VetDoctorModel).order_by(VetDoctorModel.name.asc()))
        return list(result.scalars().all())

    async def list_in_area(self, city: str, area: str) -> List[VetDoctorModel]:
        """Vets of a city and area, ignoring case and surrounding spaces."""
        stmt = (
            select(VetDoctorModel)
            .where(
                func.lower(func.trim(VetDoctorModel.city)) == city.strip().lower(),
                func.lower(func.trim(VetDoctorModel.area)) == area.strip().lower(),
            )
            .order_by(VetDoctorModel.name.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


class AppointmentRepositoryImpl:
    """SQLAlchemy repository for vet appointments."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, user_id: str, vet_id: str, date: datetime, time: str, reason: str) -> AppointmentModel:
        appointment = AppointmentModel(user_id=user_id, vet_id=vet_id, date=date, time=time, reason=reason)
        self._session.add(appointment)
        await self._session.flush()

        stmt = select(AppointmentModel).where(AppointmentModel.id == appointment.id)
        result = await self._session.execute(stmt.execution_options(populate_existing=True))
        return result.unique().scalar_one()

    async def list_for_user(self, user_id: str) -> List[AppointmentModel]:
        """The user's appointments, soonest first."""
        stmt = (
            select(AppointmentModel)
            .where(AppointmentModel.user_id == user_id)
            .order_by(AppointmentModel.date.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())
