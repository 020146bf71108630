"""Image storage: validation and uploads tied to the database transaction."""

import io

import pytest
from PIL import Image

from app.shared.core.exceptions import ValidationError
from app.shared.infrastructure.database.session import database_session
from app.shared.infrastructure.storage.supabase_storage import ImageChanges, SupabaseStorageClient
from tests.conftest import PNG_BASE64

OLD_IMAGE = "https://storage.test/pets/old.jpg"


def png_bytes(size=(64, 64)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, "orange").save(buffer, format="PNG")
    return buffer.getvalue()


class TestImageValidation:
    def test_reencodes_images(self):
        content, extension, content_type = SupabaseStorageClient()._optimize_image(png_bytes())

        assert extension == ".jpg"
        assert content_type == "image/jpeg"
        assert content

    def test_not_an_image(self):
        with pytest.raises(ValidationError, match="Invalid image data"):
            SupabaseStorageClient()._optimize_image(b"definitely not a png")

    def test_oversized_pixel_count_is_rejected(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(ValidationError, match="Invalid image data"):
            SupabaseStorageClient()._optimize_image(png_bytes())


class TestImageChanges:
    def test_upload_is_removed_when_the_transaction_rolls_back(self, client, storage):
        async def work():
            async with database_session() as session:
                await ImageChanges(session, storage).upload(PNG_BASE64, "pets")
                raise ValidationError("Missing required field: name")

        with pytest.raises(ValidationError):
            client.portal.call(work)

        assert len(storage.uploads) == 1
        assert storage.deleted == storage.uploads

    def test_committed_upload_is_kept(self, client, storage):
        async def work():
            async with database_session() as session:
                await ImageChanges(session, storage).upload(PNG_BASE64, "pets")

        client.portal.call(work)

        assert storage.deleted == []

    def test_replaced_image_is_removed_after_commit(self, client, storage):
        seen = {}

        async def work():
            async with database_session() as session:
                ImageChanges(session, storage).discard(OLD_IMAGE)
                seen["before_commit"] = list(storage.deleted)

        client.portal.call(work)

        assert seen["before_commit"] == []
        assert storage.deleted == [OLD_IMAGE]

    def test_replaced_image_survives_a_rollback(self, client, storage):
        async def work():
            async with database_session() as session:
                images = ImageChanges(session, storage)
                images.discard(OLD_IMAGE)
                await images.upload(PNG_BASE64, "pets")
                raise ValidationError("Invalid category. Must be food, toy, or medicine")

        with pytest.raises(ValidationError):
            client.portal.call(work)

        assert storage.deleted == storage.uploads
        assert OLD_IMAGE not in storage.deleted

    def test_failed_cleanup_does_not_fail_the_request(self, client, storage):
        storage.fail_deletes = True

        async def work():
            async with database_session() as session:
                ImageChanges(session, storage).discard(OLD_IMAGE)

        client.portal.call(work)

        assert storage.deleted == []
