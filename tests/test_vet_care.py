"""Vet directory, appointments and the AI vet chat."""

import json

import pytest

from app.modules.vet_care.domain.services.vetchat_service import (
    EMPTY_REPLY,
    FAILURE_REPLY,
    IMAGE_ONLY_PROMPT,
    OPENING_LINE,
    QUOTA_REPLY,
    SAFETY_REPLY,
    ChatSessionStore,
    chat_sessions,
)
from app.shared.core.exceptions import ExternalServiceError
from app.shared.infrastructure.external_apis.api_client import APIQuotaExceededError
from app.shared.infrastructure.external_apis.gemini_client import ContentBlockedError

IMAGE_DATA = json.dumps({"base64": "data:image/png;base64,AAAA", "mimeType": "image/png"})


class TestVetInfo:
    def test_nearby_and_all_vets(self, client, make_user, make_vet):
        owner = make_user(city=" Dhaka ", area="GULSHAN")
        near = make_vet(name="Dr. Near")
        make_vet(name="Dr. Far", area="banani")

        response = client.get("/api/users/vetinfo", headers=owner.headers)

        assert response.status_code == 200
        body = response.json()
        assert [vet["id"] for vet in body["nearbyVets"]] == [near.id]
        assert [vet["name"] for vet in body["allVets"]] == ["Dr. Far", "Dr. Near"]
        assert body["allVets"][1]["specialty"] == ["dogs"]

    def test_owner_without_location(self, client, make_user, make_vet):
        owner = make_user()
        make_vet()

        body = client.get("/api/users/vetinfo", headers=owner.headers).json()

        assert body["nearbyVets"] == []
        assert len(body["allVets"]) == 1


class TestAppointments:
    def test_book_and_list(self, client, make_user, make_vet):
        owner = make_user()
        vet = make_vet()
        for date in ("2030-03-02T00:00:00Z", "2030-03-01T00:00:00Z"):
            response = client.post(
                "/api/users/appointments",
                json={"vetId": vet.id, "date": date, "time": "10:30", "reason": "Vaccination"},
                headers=owner.headers,
            )
            assert response.status_code == 201
            assert response.json()["message"] == "Appointment created successfully"

        appointments = client.get("/api/users/appointments", headers=owner.headers).json()["appointments"]

        assert [a["date"][:10] for a in appointments] == ["2030-03-01", "2030-03-02"]
        assert appointments[0]["vet"]["name"] == "Dr. Paws"

    def test_missing_fields(self, client, make_user, make_vet):
        owner = make_user()
        vet = make_vet()

        response = client.post(
            "/api/users/appointments", json={"vetId": vet.id, "time": "10:30"}, headers=owner.headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Bad Request: Missing required fields"

    def test_unknown_vet(self, client, make_user):
        owner = make_user()
        response = client.post(
            "/api/users/appointments",
            json={"vetId": "nope", "date": "2030-03-01", "time": "10:30", "reason": "Checkup"},
            headers=owner.headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Vet not found"


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestChatSessionStore:
    def test_seeded_with_opening_and_persona(self):
        store = ChatSessionStore()
        history = store.history(store.resolve("u1", None))

        assert [turn["role"] for turn in history] == ["user", "model"]
        assert history[0]["parts"][0]["text"] == OPENING_LINE
        assert history[1]["parts"][0]["text"].startswith("You are Dr. Whisker")

    def test_long_history_keeps_seed_and_latest_turns(self):
        store = ChatSessionStore()
        session_id = store.resolve("u1", None)
        for index in range(15):
            store.append_exchange(session_id, [{"text": f"question {index}"}], f"answer {index}")

        history = store.history(session_id)

        assert len(history) == 20
        assert history[0]["parts"][0]["text"] == OPENING_LINE
        assert history[-1]["parts"][0]["text"] == "answer 14"

    def test_unknown_ids_are_never_stored(self):
        store = ChatSessionStore(max_sessions=5)

        issued = [store.resolve("u1", f"made-up-{index}") for index in range(50)]

        assert len(store) == 5
        assert not any(f"made-up-{index}" in store for index in range(50))
        assert issued[-1] in store

    def test_sessions_belong_to_their_user(self):
        store = ChatSessionStore()
        session_id = store.resolve("u1", None)

        assert store.resolve("u1", session_id) == session_id
        assert store.resolve("u2", session_id) != session_id

    def test_idle_sessions_expire(self):
        clock = FakeClock()
        store = ChatSessionStore(ttl_seconds=60, clock=clock)
        stale = store.resolve("u1", None)
        clock.now += 61

        fresh = store.resolve("u1", stale)

        assert fresh != stale
        assert stale not in store
        assert len(store) == 1


class TestVetChat:
    def test_text_message(self, client, make_user, gemini):
        owner = make_user()

        response = client.post("/api/users/vetchat", data={"text": "My dog sneezes"}, headers=owner.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["response"] == "Your pet looks healthy! 🐾"
        assert response.cookies.get("vetchat_session_id") == body["sessionId"]

        sent = gemini.requests[0]
        assert [turn["role"] for turn in sent] == ["user", "model", "user"]
        assert sent[-1]["parts"] == [{"text": "My dog sneezes"}]

    def test_session_cookie_keeps_history(self, client, make_user, gemini):
        owner = make_user()
        first = client.post("/api/users/vetchat", data={"text": "Hi"}, headers=owner.headers)

        second = client.post("/api/users/vetchat", data={"text": "Still sneezing"}, headers=owner.headers)

        assert second.json()["sessionId"] == first.json()["sessionId"]
        assert "vetchat_session_id" not in second.headers.get("set-cookie", "")
        assert len(gemini.requests[1]) == 5
        assert chat_sessions.history(first.json()["sessionId"])[-1]["parts"][0]["text"] == "Your pet looks healthy! 🐾"

    def test_made_up_session_cookie_is_replaced(self, client, make_user):
        owner = make_user()
        client.cookies.set("vetchat_session_id", "made-up")

        response = client.post("/api/users/vetchat", data={"text": "Hi"}, headers=owner.headers)

        session_id = response.json()["sessionId"]
        assert session_id != "made-up"
        assert response.cookies.get("vetchat_session_id") == session_id
        assert "made-up" not in chat_sessions
        assert len(chat_sessions) == 1

    def test_other_users_session_is_not_shared(self, client, make_user):
        owner, stranger = make_user(), make_user()
        first = client.post("/api/users/vetchat", data={"text": "Hi"}, headers=owner.headers).json()

        second = client.post("/api/users/vetchat", data={"text": "Hi"}, headers=stranger.headers).json()

        assert second["sessionId"] != first["sessionId"]
        assert len(chat_sessions.history(first["sessionId"])) == 4

    def test_image_only(self, client, make_user, gemini):
        owner = make_user()

        response = client.post("/api/users/vetchat", data={"imageData": IMAGE_DATA}, headers=owner.headers)

        assert response.status_code == 200
        parts = gemini.requests[0][-1]["parts"]
        assert parts[0] == {"text": IMAGE_ONLY_PROMPT}
        assert parts[1] == {"inlineData": {"data": "AAAA", "mimeType": "image/png"}}

    def test_nothing_to_answer(self, client, make_user):
        owner = make_user()

        response = client.post("/api/users/vetchat", data={"text": "  "}, headers=owner.headers)

        assert response.status_code == 400
        assert response.json() == {"error": "No text or image provided"}

    def test_invalid_image_data(self, client, make_user):
        owner = make_user()

        response = client.post("/api/users/vetchat", data={"imageData": "{not json"}, headers=owner.headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid image data"}

    @pytest.mark.parametrize(
        "failure, expected",
        [
            (APIQuotaExceededError("Quota exceeded", service_name="gemini"), QUOTA_REPLY),
            (ContentBlockedError(), SAFETY_REPLY),
            (ExternalServiceError("Gemini API quota reached"), QUOTA_REPLY),
            (ExternalServiceError("Connection reset"), FAILURE_REPLY),
            ("", EMPTY_REPLY),
        ],
    )
    def test_failures_become_friendly_replies(self, client, make_user, gemini, failure, expected):
        owner = make_user()
        gemini.replies.append(failure)

        response = client.post("/api/users/vetchat", data={"text": "Help"}, headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["response"] == expected
        assert len(chat_sessions.history(response.json()["sessionId"])) == 2

    def test_requires_user_role(self, client, make_caregiver):
        carer = make_caregiver()

        response = client.post("/api/users/vetchat", data={"text": "Hi"}, headers=carer.headers)

        assert response.status_code == 401
