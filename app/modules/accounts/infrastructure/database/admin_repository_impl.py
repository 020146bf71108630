"""
Admin account repository.
Used by admin login and the startup bootstrap.
"""

import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.accounts.infrastructure.database.models import AdminModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class AdminRepositoryImpl:
    """SQLAlchemy repository for admins."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def get_by_username(self, username: str) -> Optional[AdminModel]:
        result = await self._session.execute(select(AdminModel).where(AdminModel.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str, password_hash: str) -> AdminModel:
        admin = AdminModel(username=username, password=password_hash)
        self._session.add(admin)
        await self._session.flush()
        logger.info(f"Created admin {username}")
        return admin
