# 📄 File: app/modules/notifications/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how in-app messages for pet owners are stored ("someone commented on your post",
# "your order was approved" and so on).
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy model for `notifications` with a read flag and typed event name.
#
# 🔄 Connected Modules / Calls From:
# - notification_repository_impl.py, NotificationService
# - Alembic migrations

from sqlalchemy import Boolean, Column, DateTime, String, Text

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


class NotificationType:
    """Notification type tags."""
    NEW_PET = "NEW_PET"
    NEW_MISSING_POST = "NEW_MISSING_POST"
    PET_FOUND = "PET_FOUND"
    NEW_DONATION_POST = "NEW_DONATION_POST"
    NEW_COMMENT = "NEW_COMMENT"
    NEW_ADOPTION_APPLICATION = "NEW_ADOPTION_APPLICATION"
    ADOPTION_ACCEPTED = "ADOPTION_ACCEPTED"
    JOB_APPLICATION = "JOB_APPLICATION"
    JOB_ACCEPTED = "JOB_ACCEPTED"
    ORDER_COMPLETED = "ORDER_COMPLETED"
    ORDER_CANCELLED = "ORDER_CANCELLED"


class NotificationModel(DatabaseBase):
    """In-app notification addressed to one user (or caregiver id for job acceptances)."""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True, comment="Recipient id")
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<NotificationModel(id={self.id}, user_id={self.user_id}, type={self.type})>"
