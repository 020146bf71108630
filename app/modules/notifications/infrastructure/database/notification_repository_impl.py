# 📄 File: app/modules/notifications/infrastructure/database/notification_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves notifications, lists them for their owner and marks them as read.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for `notifications` including bulk inserts and bulk read updates.
#
# 🔄 Connected Modules / Calls From:
# - NotificationService, accounts ProfileService (user data page)

import logging
from typing import Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.notifications.infrastructure.database.models import NotificationModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class NotificationRepositoryImpl:
    """SQLAlchemy repository for notifications."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create_many(self, user_ids: Iterable[str], type: str, message: str) -> List[NotificationModel]:
        """Insert one notification per recipient."""
        notifications = [
            NotificationModel(user_id=user_id, type=type, message=message)
            for user_id in dict.fromkeys(user_ids)
        ]
        if not notifications:
            return []
        self._session.add_all(notifications)
        await self._session.flush()
        logger.debug(f"Created {len(notifications)} {type} notifications")
        return notifications

    async def list_for_user(self, user_id: str) -> List[NotificationModel]:
        """A user's notifications, newest first."""
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, notification_id: str, user_id: str) -> Optional[NotificationModel]:
        stmt = select(NotificationModel).where(
            NotificationModel.id == notification_id,
            NotificationModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_read(self, notification: NotificationModel) -> NotificationModel:
        notification.read = True
        await self._session.flush()
        return notification

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read; returns the number changed."""
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.read.is_(False))
            .values(read=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def count_unread(self, user_id: str) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.user_id == user_id,
            NotificationModel.read.is_(False),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()
