# 📄 File: app/modules/notifications/presentation/api/v1/notifications.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints behind the bell icon: list notifications, count unread ones and mark them read.
#
# 🧪 Purpose (Technical Summary):
# FastAPI routers for a notification inbox. The same endpoints are built once per role:
# pet owners under /api/users/notifications, caregivers under /api/caregivers/notifications.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Callable

from fastapi import APIRouter, Depends

from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.presentation.api.schemas.notification_schemas import NotificationResponse
from app.shared.core.dependencies import CurrentPrincipal, get_current_caregiver, get_current_user
from app.shared.core.schemas import dump_many


def build_notifications_router(principal_dependency: Callable) -> APIRouter:
    """Inbox endpoints for whoever `principal_dependency` authenticates."""
    router = APIRouter()

    @router.get("", summary="List notifications")
    async def list_notifications(
        principal: CurrentPrincipal = Depends(principal_dependency),
        service: NotificationService = Depends(),
    ) -> dict:
        """The caller's notifications, newest first."""
        notifications = await service.list_for_user(principal.id)
        return {"notifications": dump_many(NotificationResponse, notifications)}

    @router.put("", summary="Mark all notifications as read")
    async def mark_all_notifications_read(
        principal: CurrentPrincipal = Depends(principal_dependency),
        service: NotificationService = Depends(),
    ) -> dict:
        await service.mark_all_as_read(principal.id)
        return {"message": "All notifications marked as read"}

    @router.get("/count", summary="Count unread notifications")
    async def count_unread_notifications(
        principal: CurrentPrincipal = Depends(principal_dependency),
        service: NotificationService = Depends(),
    ) -> dict:
        return {"count": await service.count_unread(principal.id)}

    @router.put("/{notification_id}", summary="Mark one notification as read")
    async def mark_notification_read(
        notification_id: str,
        principal: CurrentPrincipal = Depends(principal_dependency),
        service: NotificationService = Depends(),
    ) -> dict:
        await service.mark_as_read(principal.id, notification_id)
        return {"message": "Notification marked as read"}

    return router


notifications_router = build_notifications_router(get_current_user)
caregiver_notifications_router = build_notifications_router(get_current_caregiver)
