"""
Notification API schemas.
"""

from datetime import datetime

from app.shared.core.schemas import APIModel


class NotificationResponse(APIModel):
    """Notification as returned to its owner."""

    id: str
    user_id: str
    type: str
    message: str
    read: bool
    created_at: datetime
