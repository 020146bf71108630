# 📄 File: app/modules/notifications/domain/services/notification_service.py
# 🧭 Purpose (Layman Explanation):
# The app's messenger: tells pet owners when something they care about happens, such as a new pet
# arriving, a missing pet reported nearby or a reply to their post.
#
# 🧪 Purpose (Technical Summary):
# Domain service for creating notifications (single, many, everyone, everyone in an area) and for
# the owner's inbox operations (list, count unread, mark read).
#
# 🔗 Dependencies:
# - NotificationRepositoryImpl, accounts UserRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - notifications API, community, caregiving, admin services

import logging
from typing import Iterable, List, Optional

from fastapi import Depends

from app.modules.accounts.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.modules.notifications.infrastructure.database.models import NotificationModel
from app.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationRepositoryImpl,
)
from app.shared.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates notifications and serves a user's inbox."""

    def __init__(
        self,
        notification_repository: NotificationRepositoryImpl = Depends(),
        user_repository: UserRepositoryImpl = Depends(),
    ):
        self.notification_repository = notification_repository
        self.user_repository = user_repository

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def notify(self, user_id: str, type: str, message: str) -> NotificationModel:
        created = await self.notification_repository.create_many([user_id], type, message)
        return created[0]

    async def notify_many(self, user_ids: Iterable[str], type: str, message: str) -> List[NotificationModel]:
        return await self.notification_repository.create_many(user_ids, type, message)

    async def notify_all_users(self, type: str, message: str) -> List[NotificationModel]:
        user_ids = await self.user_repository.list_ids()
        logger.info(f"Notifying {len(user_ids)} users: {type}")
        return await self.notification_repository.create_many(user_ids, type, message)

    async def notify_area(
        self,
        city: Optional[str],
        area: Optional[str],
        exclude_user_id: Optional[str],
        type: str,
        message: str,
    ) -> List[NotificationModel]:
        """Notify users living in `city`/`area` (case-insensitive), except the author."""
        if not city or not area:
            return []
        user_ids = await self.user_repository.list_ids_in_area(city, area, exclude_user_id)
        logger.info(f"Notifying {len(user_ids)} users in {area}, {city}: {type}")
        return await self.notification_repository.create_many(user_ids, type, message)

    # ------------------------------------------------------------------
    # Inbox
    # ------------------------------------------------------------------

    async def list_for_user(self, user_id: str) -> List[NotificationModel]:
        return await self.notification_repository.list_for_user(user_id)

    async def count_unread(self, user_id: str) -> int:
        return await self.notification_repository.count_unread(user_id)

    async def mark_as_read(self, user_id: str, notification_id: str) -> NotificationModel:
        """
        Mark one of the user's notifications as read.

        Raises:
            NotFoundError: Unknown id or a notification of another user
        """
        notification = await self.notification_repository.get_for_user(notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found", resource_type="notification", resource_id=notification_id)
        return await self.notification_repository.mark_read(notification)

    async def mark_all_as_read(self, user_id: str) -> int:
        return await self.notification_repository.mark_all_read(user_id)
