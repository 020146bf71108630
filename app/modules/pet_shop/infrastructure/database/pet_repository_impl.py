# 📄 File: app/modules/pet_shop/infrastructure/database/pet_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Finds pets, records adoptions and keeps track of which pets are still available.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repositories for `pets` and `pet_orders` on the request's AsyncSession.
#
# 🔄 Connected Modules / Calls From:
# - PetShopService, admin back-office, accounts ProfileService

import logging
from typing import Any, List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.pet_shop.infrastructure.database.models import PetModel, PetOrderModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class PetRepositoryImpl:
    """SQLAlchemy repository for pets."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, **fields: Any) -> PetModel:
        pet = PetModel(**fields)
        self._session.add(pet)
        await self._session.flush()
        logger.info(f"Created pet {pet.id} ({pet.name})")
        return pet

    async def get_by_id(self, pet_id: str) -> Optional[PetModel]:
        return await self._session.get(PetModel, pet_id)

    async def list_available(self) -> List[PetModel]:
        """Available pets, newest first."""
        stmt = select(PetModel).where(PetModel.is_available.is_(True)).order_by(PetModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_all(self) -> List[PetModel]:
        stmt = select(PetModel).order_by(PetModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def mark_unavailable(self, pet: PetModel) -> PetModel:
        pet.is_available = False
        await self._session.flush()
        return pet

    async def delete(self, pet: PetModel) -> None:
        await self._session.delete(pet)
        await self._session.flush()

    async def count_available(self) -> int:
        stmt = select(func.count(PetModel.id)).where(PetModel.is_available.is_(True))
        result = await self._session.execute(stmt)
        return result.scalar_one()


class PetOrderRepositoryImpl:
    """SQLAlchemy repository for adoption orders."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, user_id: str, pet: PetModel) -> PetOrderModel:
        order = PetOrderModel(user_id=user_id, pet_id=pet.id, pet=pet)
        self._session.add(order)
        await self._session.flush()
        logger.info(f"Created pet order {order.id} for pet {pet.id}")
        return order

    async def list_for_user(self, user_id: str) -> List[PetOrderModel]:
        """A user's adoption orders with their pet, newest first."""
        stmt = (
            select(PetOrderModel)
            .where(PetOrderModel.user_id == user_id)
            .order_by(PetOrderModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def exists_for_pet(self, pet_id: str) -> bool:
        stmt = select(func.count(PetOrderModel.id)).where(PetOrderModel.pet_id == pet_id)
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(PetOrderModel.id)))
        return result.scalar_one()
