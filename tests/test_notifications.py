"""Notification inbox endpoints."""

from datetime import datetime, timedelta, timezone

import pytest

from app.modules.notifications.infrastructure.database.models import NotificationModel, NotificationType


@pytest.fixture
def add_notification(run_db):
    def _add(user_id, message="Hello", read=False, minutes_ago=0):
        note = NotificationModel(
            user_id=user_id,
            type=NotificationType.NEW_PET,
            message=message,
            read=read,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )

        async def work(session):
            session.add(note)
            await session.flush()
            return note

        return run_db(work)

    return _add


class TestNotifications:
    def test_list_is_newest_first_and_private(self, client, make_user, add_notification):
        owner, other = make_user(), make_user()
        add_notification(owner.id, "older", minutes_ago=10)
        add_notification(owner.id, "newer")
        add_notification(other.id, "not yours")

        response = client.get("/api/users/notifications", headers=owner.headers)

        assert response.status_code == 200
        assert [n["message"] for n in response.json()["notifications"]] == ["newer", "older"]

    def test_count_only_unread(self, client, make_user, add_notification):
        owner = make_user()
        add_notification(owner.id)
        add_notification(owner.id)
        add_notification(owner.id, read=True)

        response = client.get("/api/users/notifications/count", headers=owner.headers)

        assert response.json() == {"count": 2}

    def test_mark_all_read(self, client, make_user, add_notification):
        owner = make_user()
        add_notification(owner.id)
        add_notification(owner.id)

        response = client.put("/api/users/notifications", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["message"] == "All notifications marked as read"
        assert client.get("/api/users/notifications/count", headers=owner.headers).json() == {"count": 0}

    def test_mark_one_read(self, client, make_user, add_notification):
        owner = make_user()
        first = add_notification(owner.id)
        add_notification(owner.id)

        response = client.put(f"/api/users/notifications/{first.id}", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Notification marked as read"
        assert client.get("/api/users/notifications/count", headers=owner.headers).json() == {"count": 1}

    def test_someone_elses_notification_is_not_found(self, client, make_user, add_notification):
        owner, other = make_user(), make_user()
        foreign = add_notification(other.id)

        response = client.put(f"/api/users/notifications/{foreign.id}", headers=owner.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Notification not found"
