"""
Image storage package for PetVally.
Uploads base64 images to Supabase Storage and returns public URLs.
"""

from .supabase_storage import (
    CAREGIVER_PROFILES_FOLDER,
    DONATION_POSTS_FOLDER,
    MISSING_POSTS_FOLDER,
    PETS_FOLDER,
    PRODUCTS_FOLDER,
    USER_PROFILES_FOLDER,
    ImageChanges,
    SupabaseStorageClient,
    get_image_storage,
)

__all__ = [
    "ImageChanges",
    "SupabaseStorageClient",
    "get_image_storage",
    "USER_PROFILES_FOLDER",
    "CAREGIVER_PROFILES_FOLDER",
    "MISSING_POSTS_FOLDER",
    "DONATION_POSTS_FOLDER",
    "PETS_FOLDER",
    "PRODUCTS_FOLDER",
]
