"""
Shared pytest fixtures for the PetVally API.

Every test gets its own application lifespan and therefore a fresh in-memory
SQLite database. Image storage and Gemini are swapped for in-memory fakes
through `app.dependency_overrides`.
"""

import os

os.environ.update({
    "ENVIRONMENT": "test",
    "DEBUG": "false",
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "DB_CREATE_TABLES": "true",
    "RATE_LIMIT_ENABLED": "true",
    "AUTH_RATE_LIMIT": "1000/minute",
    "BCRYPT_ROUNDS": "4",
    "JWT_SECRET_KEY": "test-secret-key",
    "ADMIN_USERNAME": "admin",
    "ADMIN_PASSWORD": "admin-password",
    "GOOGLE_GEMINI_API_KEY": "",
    "LOG_FORMAT": "text",
    "LOG_LEVEL": "WARNING",
})

from collections import namedtuple  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import select  # noqa: E402

from app.main import app  # noqa: E402
from app.modules.accounts.infrastructure.database.models import AdminModel, CaregiverModel, UserModel  # noqa: E402
from app.modules.caregiving.infrastructure.database.models import JobPostModel  # noqa: E402
from app.modules.notifications.infrastructure.database.models import NotificationModel  # noqa: E402
from app.modules.pet_shop.infrastructure.database.models import PetModel  # noqa: E402
from app.modules.store.infrastructure.database.models import ProductModel  # noqa: E402
from app.modules.vet_care.domain.services.vetchat_service import chat_sessions  # noqa: E402
from app.modules.vet_care.infrastructure.database.models import VetDoctorModel  # noqa: E402
from app.shared.core.exceptions import FileStorageError  # noqa: E402
from app.shared.core.security import Role, get_security_manager  # noqa: E402
from app.shared.infrastructure.database.session import database_session  # noqa: E402
from app.shared.infrastructure.external_apis.gemini_client import get_gemini_client  # noqa: E402
from app.shared.infrastructure.storage.supabase_storage import get_image_storage  # noqa: E402

# 1x1 transparent PNG
PNG_BASE64 = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

Account = namedtuple("Account", ["id", "name", "email", "token", "headers"])


# ----------------------------------------------------------------------
# Fakes
# ----------------------------------------------------------------------

class FakeImageStorage:
    """Records uploads and deletions instead of talking to Supabase."""

    def __init__(self):
        self.uploads: List[str] = []
        self.deleted: List[str] = []
        self.fail_deletes = False

    async def upload_image(self, image_base64: str, folder: str) -> str:
        url = f"https://storage.test/{folder}/image-{len(self.uploads) + 1}.jpg"
        self.uploads.append(url)
        return url

    async def delete_image(self, url: Optional[str]) -> None:
        if not url:
            return
        if self.fail_deletes:
            raise FileStorageError("Failed to delete image", operation="delete")
        self.deleted.append(url)

    async def delete_image_quietly(self, url: Optional[str]) -> None:
        try:
            await self.delete_image(url)
        except FileStorageError:
            pass


class FakeGemini:
    """Replays canned replies (or raises canned errors) and records every request."""

    def __init__(self):
        self.replies: List[Any] = []
        self.requests: List[List[Dict[str, Any]]] = []

    async def generate(self, contents: List[Dict[str, Any]]) -> str:
        self.requests.append(contents)
        reply = self.replies.pop(0) if self.replies else "Your pet looks healthy! 🐾"
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        return None


# ----------------------------------------------------------------------
# Application
# ----------------------------------------------------------------------

@pytest.fixture
def storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def client(storage, gemini):
    app.dependency_overrides[get_image_storage] = lambda: storage
    app.dependency_overrides[get_gemini_client] = lambda: gemini
    chat_sessions.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    chat_sessions.clear()


@pytest.fixture
def run_db(client):
    """Run `await work(session)` in its own committed unit of work on the app's loop."""

    def _run(work):
        async def _unit():
            async with database_session() as session:
                return await work(session)

        return client.portal.call(_unit)

    return _run


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _token(role: Role, model) -> str:
    claims = {"id": model.id}
    if role == Role.ADMIN:
        claims["username"] = model.username
    else:
        claims.update({"name": model.name, "email": model.email})
    return get_security_manager().create_access_token(claims, role)


# ----------------------------------------------------------------------
# Seed helpers
# ----------------------------------------------------------------------

def _add(run_db, model):
    async def work(session):
        session.add(model)
        await session.flush()
        return model

    return run_db(work)


@pytest.fixture
def make_user(run_db):
    counter = {"n": 0}

    def _make(**fields) -> Account:
        counter["n"] += 1
        values = {
            "name": f"Owner {counter['n']}",
            "email": f"owner{counter['n']}@example.com",
            "password": get_security_manager().get_password_hash("secret123"),
        }
        values.update(fields)
        user = _add(run_db, UserModel(**values))
        token = _token(Role.USER, user)
        return Account(user.id, user.name, user.email, token, bearer(token))

    return _make


@pytest.fixture
def make_caregiver(run_db):
    counter = {"n": 0}

    def _make(**fields) -> Account:
        counter["n"] += 1
        values = {
            "name": f"Carer {counter['n']}",
            "email": f"carer{counter['n']}@example.com",
            "password": get_security_manager().get_password_hash("secret123"),
            "bio": "",
        }
        values.update(fields)
        caregiver = _add(run_db, CaregiverModel(**values))
        token = _token(Role.CAREGIVER, caregiver)
        return Account(caregiver.id, caregiver.name, caregiver.email, token, bearer(token))

    return _make


@pytest.fixture
def admin(run_db) -> Account:
    """The admin account created by the startup bootstrap."""

    async def work(session):
        result = await session.execute(select(AdminModel).where(AdminModel.username == "admin"))
        return result.scalar_one()

    model = run_db(work)
    token = _token(Role.ADMIN, model)
    return Account(model.id, model.username, None, token, bearer(token))


@pytest.fixture
def make_pet(run_db):
    def _make(**fields) -> PetModel:
        values = {
            "name": "Biscuit",
            "breed": "Beagle",
            "age": 2,
            "price": 150.0,
            "images": "https://storage.test/pets/biscuit.jpg",
            "bio": "Friendly",
            "description": "A friendly beagle",
            "energy_level": 3,
            "space_required": 2,
            "maintenance": 2,
            "tags": ["friendly"],
        }
        values.update(fields)
        return _add(run_db, PetModel(**values))

    return _make


@pytest.fixture
def make_product(run_db):
    def _make(**fields) -> ProductModel:
        values = {
            "name": "Chew Toy",
            "description": "Squeaky rubber bone",
            "price": 10.0,
            "stock": 5,
            "image": "https://storage.test/products/toy.jpg",
            "category": "toy",
        }
        values.update(fields)
        return _add(run_db, ProductModel(**values))

    return _make


@pytest.fixture
def make_vet(run_db):
    def _make(**fields) -> VetDoctorModel:
        values = {"name": "Dr. Paws", "specialty": ["dogs"], "city": "dhaka", "area": "gulshan"}
        values.update(fields)
        return _add(run_db, VetDoctorModel(**values))

    return _make


@pytest.fixture
def make_job(run_db):
    def _make(user_id: str, **fields) -> JobPostModel:
        start = datetime.now(timezone.utc) + timedelta(days=1)
        values = {
            "title": "Walk my dog",
            "description": "Two walks a day",
            "tags": ["dog"],
            "city": "Dhaka",
            "area": "Gulshan",
            "price_range_low": 10.0,
            "price_range_high": 20.0,
            "start_date": start,
            "end_date": start + timedelta(days=2),
            "user_id": user_id,
        }
        values.update(fields)
        return _add(run_db, JobPostModel(**values))

    return _make


@pytest.fixture
def notifications_of(run_db):
    """All notifications addressed to an id, oldest first."""

    def _list(recipient_id: str) -> List[NotificationModel]:
        async def work(session):
            result = await session.execute(
                select(NotificationModel)
                .where(NotificationModel.user_id == recipient_id)
                .order_by(NotificationModel.created_at)
            )
            return list(result.scalars().all())

        return run_db(work)

    return _list
