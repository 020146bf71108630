# 📄 File: app/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# Sends pet photos, product pictures and profile images to cloud storage and gives back
# a public link to show them, and removes old pictures when they get replaced.

# 🧪 Purpose (Technical Summary):
# Supabase Storage wrapper for base64 image uploads: decodes the payload, validates and
# re-encodes it with Pillow (EXIF orientation, max dimensions, quality), stores it under a
# folder with a random name and returns the public URL. Deletion derives the object path
# from the last two URL segments ("<folder>/<file>"). ImageChanges ties uploads and removals
# to the request's database transaction.

# 🔗 Dependencies:
# - supabase: Storage client
# - PIL (Pillow): Image validation and optimization
# - asyncio: running the blocking storage client off the event loop

# 🔄 Connected Modules / Calls From:
# Called by: accounts (profile images), community (missing/donation posts),
# admin (pets, products)

import asyncio
import base64
import binascii
import io
from functools import lru_cache
from typing import Optional, Tuple
from urllib.parse import urlparse
from uuid import uuid4

from fastapi import Depends
from PIL import Image, ImageOps, UnidentifiedImageError
from sqlalchemy.ext.asyncio import AsyncSession
from supabase import Client, create_client

from app.shared.config.settings import get_settings
from app.shared.core.exceptions import FileStorageError, ValidationError
from app.shared.infrastructure.database.session import after_commit, after_rollback, get_db_session
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

# Folders used across the app
USER_PROFILES_FOLDER = "user_profiles"
CAREGIVER_PROFILES_FOLDER = "caregiver_profiles"
MISSING_POSTS_FOLDER = "missing_posts"
DONATION_POSTS_FOLDER = "donation_posts"
PETS_FOLDER = "pets"
PRODUCTS_FOLDER = "products"


class SupabaseStorageClient:
    """
    Image hosting client backed by a public Supabase Storage bucket.

    The supabase client is synchronous, so every network call runs in a worker thread.
    """

    def __init__(self):
        settings = get_settings()
        self.supabase_url = settings.SUPABASE_URL
        self.supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY
        self.bucket_name = settings.SUPABASE_STORAGE_BUCKET

        self.image_quality = settings.IMAGE_QUALITY
        self.max_file_size = settings.MAX_IMAGE_SIZE
        self.max_image_size = (2048, 2048)  # Max width, height

        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        """Get or create the Supabase client with lazy initialization."""
        if self._client is None:
            if not self.supabase_url or not self.supabase_key:
                raise FileStorageError("Image storage is not configured", operation="initialize")
            self._client = create_client(self.supabase_url, self.supabase_key)
            logger.info("Supabase Storage client initialized successfully")
        return self._client

    def _decode(self, image_base64: str) -> bytes:
        """Decode a raw or data-URL base64 image."""
        payload = image_base64.strip()
        if payload.startswith("data:") and "," in payload:
            payload = payload.split(",", 1)[1]

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("Invalid image data", field="imageBase64")

        if not data:
            raise ValidationError("Invalid image data", field="imageBase64")
        if len(data) > self.max_file_size:
            raise ValidationError(
                f"Image exceeds maximum size of {self.max_file_size} bytes",
                field="imageBase64"
            )
        return data

    def _optimize_image(self, data: bytes) -> Tuple[bytes, str, str]:
        """
        Validate and re-encode the image.

        Returns:
            (bytes, file extension, content type)
        """
        try:
            with Image.open(io.BytesIO(data)) as image:
                image = ImageOps.exif_transpose(image)
                image.thumbnail(self.max_image_size, Image.Resampling.LANCZOS)

                output = io.BytesIO()
                if image.mode in ("RGBA", "LA", "P"):
                    image.save(output, format="PNG", optimize=True)
                    return output.getvalue(), ".png", "image/png"

                if image.mode != "RGB":
                    image = image.convert("RGB")
                image.save(output, format="JPEG", quality=self.image_quality, optimize=True)
                return output.getvalue(), ".jpg", "image/jpeg"
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
            raise ValidationError("Invalid image data", field="imageBase64")

    def _upload_sync(self, path: str, content: bytes, content_type: str) -> str:
        bucket = self.client.storage.from_(self.bucket_name)
        bucket.upload(path, content, {"content-type": content_type, "upsert": "false"})
        return bucket.get_public_url(path)

    def _remove_sync(self, path: str) -> None:
        self.client.storage.from_(self.bucket_name).remove([path])

    async def upload_image(self, image_base64: str, folder: str) -> str:
        """
        Upload a base64 image into `folder`.

        Returns:
            Public URL of the stored image

        Raises:
            ValidationError: If the payload is not a decodable image
            FileStorageError: If the storage service rejects the upload
        """
        data = self._decode(image_base64)
        content, extension, content_type = self._optimize_image(data)
        path = f"{folder}/{uuid4().hex}{extension}"

        try:
            url = await asyncio.to_thread(self._upload_sync, path, content, content_type)
        except FileStorageError:
            raise
        except Exception as e:
            logger.error(f"Image upload failed for {path}: {e}")
            raise FileStorageError("Failed to upload image", operation="upload")

        logger.info(f"Uploaded image to {path}", folder=folder, size=len(content))
        return url

    @staticmethod
    def path_from_url(url: str) -> Optional[str]:
        """Object path from a public URL: the last two segments, extension kept."""
        if not url:
            return None
        segments = [segment for segment in urlparse(url).path.split("/") if segment]
        if len(segments) < 2:
            return None
        return "/".join(segments[-2:])

    async def delete_image(self, url: Optional[str]) -> None:
        """
        Delete a previously uploaded image by its public URL.

        Raises:
            FileStorageError: If the storage service rejects the deletion
        """
        path = self.path_from_url(url or "")
        if not path:
            return

        try:
            await asyncio.to_thread(self._remove_sync, path)
        except FileStorageError:
            raise
        except Exception as e:
            logger.error(f"Image deletion failed for {path}: {e}")
            raise FileStorageError("Failed to delete image", operation="delete")

        logger.info(f"Deleted image {path}")

    async def delete_image_quietly(self, url: Optional[str]) -> None:
        """Delete an old image, logging instead of raising on failure."""
        try:
            await self.delete_image(url)
        except FileStorageError as e:
            logger.warning(f"Old image could not be deleted: {e.message}", url=url)


@lru_cache()
def get_image_storage() -> SupabaseStorageClient:
    """FastAPI dependency returning the shared image storage client."""
    return SupabaseStorageClient()


class ImageChanges:
    """
    Image uploads and removals tied to the request's database transaction.

    A new upload is removed again if the transaction rolls back; an image being
    replaced or deleted is only removed from storage after the commit.
    """

    def __init__(
        self,
        session: AsyncSession = Depends(get_db_session),
        storage: SupabaseStorageClient = Depends(get_image_storage),
    ):
        self.session = session
        self.storage = storage

    async def upload(self, image_base64: str, folder: str) -> str:
        url = await self.storage.upload_image(image_base64, folder)
        after_rollback(self.session, lambda: self.storage.delete_image_quietly(url))
        return url

    def discard(self, url: Optional[str]) -> None:
        """Remove `url` from storage once the current changes are committed."""
        if url:
            after_commit(self.session, lambda: self.storage.delete_image_quietly(url))
