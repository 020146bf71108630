# 📄 File: app/modules/accounts/domain/services/profile_service.py
# 🧭 Purpose (Layman Explanation): 
# Lets pet owners and caregivers see and edit their own profile, adoption preferences and photo.
# 🧪 Purpose (Technical Summary): 
# Domain service for profile reads and owner-only updates of users and caregivers. Image updates
# upload the new picture first, then best-effort delete the old one.
# 🔗 Dependencies: 
# Account repositories, pet shop and notification repositories (user data page), image storage
# 🔄 Connected Modules / Calls From: 
# accounts profile endpoints

import logging
from typing import Any, Dict, Optional

from fastapi import Depends

from app.modules.accounts.infrastructure.database.caregiver_repository_impl import CaregiverRepositoryImpl
from app.modules.accounts.infrastructure.database.models import CaregiverModel, UserModel
from app.modules.accounts.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.modules.accounts.presentation.api.schemas.profile_schemas import UserDataResponse, UserResponse
from app.modules.notifications.presentation.api.schemas.notification_schemas import NotificationResponse
from app.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationRepositoryImpl,
)
from app.modules.pet_shop.infrastructure.database.pet_repository_impl import PetOrderRepositoryImpl
from app.modules.pet_shop.presentation.api.schemas.pet_schemas import PetOrderResponse
from app.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.shared.infrastructure.storage import (
    CAREGIVER_PROFILES_FOLDER,
    USER_PROFILES_FOLDER,
    ImageChanges,
)

logger = logging.getLogger(__name__)


def _changes(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Only the values the caller actually sent."""
    return {key: value for key, value in fields.items() if value is not None}


class ProfileService:
    """Domain service for owner and caregiver profiles."""

    def __init__(
        self,
        user_repository: UserRepositoryImpl = Depends(),
        caregiver_repository: CaregiverRepositoryImpl = Depends(),
        pet_order_repository: PetOrderRepositoryImpl = Depends(),
        notification_repository: NotificationRepositoryImpl = Depends(),
        images: ImageChanges = Depends(),
    ):
        self.user_repository = user_repository
        self.caregiver_repository = caregiver_repository
        self.pet_order_repository = pet_order_repository
        self.notification_repository = notification_repository
        self.images = images

    # ------------------------------------------------------------------
    # Pet owners
    # ------------------------------------------------------------------

    async def _get_user(self, user_id: Optional[str]) -> UserModel:
        if not user_id:
            raise ValidationError("Bad Request: Missing user ID", field="id")
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("Not Found: User not found", resource_type="user", resource_id=user_id)
        return user

    async def get_user_data(self, user_id: Optional[str]) -> Dict[str, Any]:
        """Owner profile with adoption orders and notifications, newest first."""
        user = await self._get_user(user_id)
        pet_orders = await self.pet_order_repository.list_for_user(user.id)
        notifications = await self.notification_repository.list_for_user(user.id)

        profile = UserResponse.model_validate(user).model_dump()
        return UserDataResponse(
            **profile,
            pet_orders=[PetOrderResponse.model_validate(order) for order in pet_orders],
            notifications=[NotificationResponse.model_validate(item) for item in notifications],
        ).to_json()

    @staticmethod
    def _check_owner(principal_id: str, target_id: Optional[str], message: str) -> None:
        if not target_id:
            raise ValidationError("Bad Request: Missing user ID", field="id")
        if principal_id != target_id:
            raise AuthorizationError(message, resource_type="user", resource_id=target_id)

    async def update_user_profile(self, principal_id: str, target_id: Optional[str], **fields: Any) -> UserModel:
        self._check_owner(principal_id, target_id, "Forbidden: You can only update your own profile")
        user = await self._get_user(target_id)
        return await self.user_repository.update(user, _changes(fields))

    async def update_user_preferences(self, principal_id: str, target_id: Optional[str], **fields: Any) -> UserModel:
        self._check_owner(principal_id, target_id, "Forbidden: You can only update your own preferences")
        user = await self._get_user(target_id)
        return await self.user_repository.update(user, _changes(fields))

    async def update_user_image(self, principal_id: str, target_id: Optional[str], image_base64: Optional[str]) -> UserModel:
        """
        Replace the owner's profile image.

        The old image is deleted from hosting after the change is committed, best effort.
        """
        if not target_id or not image_base64:
            raise ValidationError("Bad Request: Missing user ID or image data")
        self._check_owner(principal_id, target_id, "Forbidden: You can only update your own profile image")
        user = await self._get_user(target_id)

        self.images.discard(user.image)
        url = await self.images.upload(image_base64, USER_PROFILES_FOLDER)

        return await self.user_repository.update(user, {"image": url})

    # ------------------------------------------------------------------
    # Caregivers
    # ------------------------------------------------------------------

    async def _get_caregiver(self, caregiver_id: Optional[str]) -> CaregiverModel:
        if not caregiver_id:
            raise ValidationError("Bad Request: Missing caregiver ID", field="id")
        caregiver = await self.caregiver_repository.get_by_id(caregiver_id)
        if caregiver is None:
            raise NotFoundError("Not Found: Caregiver not found", resource_type="caregiver", resource_id=caregiver_id)
        return caregiver

    async def get_caregiver_data(self, caregiver_id: Optional[str]) -> CaregiverModel:
        return await self._get_caregiver(caregiver_id)

    @staticmethod
    def _check_caregiver_owner(principal_id: str, target_id: Optional[str], message: str) -> None:
        if not target_id:
            raise ValidationError("Bad Request: Missing caregiver ID", field="id")
        if principal_id != target_id:
            raise AuthorizationError(message, resource_type="caregiver", resource_id=target_id)

    async def update_caregiver_profile(
        self, principal_id: str, target_id: Optional[str], **fields: Any
    ) -> CaregiverModel:
        self._check_caregiver_owner(principal_id, target_id, "Forbidden: You can only update your own profile")
        caregiver = await self._get_caregiver(target_id)
        return await self.caregiver_repository.update(caregiver, _changes(fields))

    async def update_caregiver_image(
        self, principal_id: str, target_id: Optional[str], image_base64: Optional[str]
    ) -> CaregiverModel:
        if not target_id or not image_base64:
            raise ValidationError("Bad Request: Missing caregiver ID or image data")
        self._check_caregiver_owner(
            principal_id, target_id, "Forbidden: You can only update your own profile image"
        )
        caregiver = await self._get_caregiver(target_id)

        self.images.discard(caregiver.image)
        url = await self.images.upload(image_base64, CAREGIVER_PROFILES_FOLDER)

        return await self.caregiver_repository.update(caregiver, {"image": url})
