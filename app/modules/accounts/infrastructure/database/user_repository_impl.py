# 📄 File: app/modules/accounts/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database work for pet owner accounts: creating them, finding them by
# email or id, and saving profile changes.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for `users` on the request's AsyncSession, including
# location lookups used by area notifications and nearby vets.
#
# 🔗 Dependencies:
# - SQLAlchemy async session and query operations
# - app.shared.infrastructure.database.session (request session dependency)
#
# 🔄 Connected Modules / Calls From:
# - accounts AuthService / ProfileService
# - notifications (all users, users in an area), admin dashboard

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.accounts.infrastructure.database.models import UserModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class UserRepositoryImpl:
    """
    SQLAlchemy repository for pet owner accounts.

    All methods run on the request session; the session commits once
    when the request finishes.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        """
        Initialize the user repository.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    async def create(self, **fields: Any) -> UserModel:
        """Create a new user and flush to obtain its id."""
        user = UserModel(**fields)
        self._session.add(user)
        await self._session.flush()
        logger.info(f"Created user with ID: {user.id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[UserModel]:
        return await self._session.get(UserModel, user_id)

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        """Retrieve a user by their (case-insensitive) email address."""
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, user: UserModel, fields: Dict[str, Any]) -> UserModel:
        """Apply the given column values and flush."""
        for key, value in fields.items():
            setattr(user, key, value)
        await self._session.flush()
        logger.debug(f"Updated user {user.id}: {sorted(fields)}")
        return user

    async def list_all(self) -> List[UserModel]:
        """All users, newest first."""
        stmt = select(UserModel).order_by(UserModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_ids(self) -> List[str]:
        result = await self._session.execute(select(UserModel.id))
        return list(result.scalars().all())

    async def list_ids_in_area(self, city: str, area: str, exclude_user_id: Optional[str] = None) -> List[str]:
        """Ids of users whose city and area match, ignoring case."""
        stmt = select(UserModel.id).where(
            func.lower(UserModel.city) == city.strip().lower(),
            func.lower(UserModel.area) == area.strip().lower(),
        )
        if exclude_user_id:
            stmt = stmt.where(UserModel.id != exclude_user_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(UserModel.id)))
        return result.scalar_one()
