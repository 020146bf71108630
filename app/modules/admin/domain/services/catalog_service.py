# 📄 File: app/modules/admin/domain/services/catalog_service.py
# 🧭 Purpose (Layman Explanation):
# Lets staff put pets up for adoption and manage what the supplies store sells, including the
# product photos.
#
# 🧪 Purpose (Technical Summary):
# Admin domain service for pet and product CRUD. Images go to the `pets` and `products`
# folders; records referenced by orders cannot be deleted. A new pet notifies every owner.
#
# 🔗 Dependencies:
# - pet_shop and store repositories, NotificationService, ImageChanges
#
# 🔄 Connected Modules / Calls From:
# - admin catalog router

from typing import Any, Dict, List

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.infrastructure.database.models import NotificationType
from app.modules.pet_shop.infrastructure.database.pet_repository_impl import PetOrderRepositoryImpl, PetRepositoryImpl
from app.modules.pet_shop.presentation.api.schemas.pet_schemas import PetResponse
from app.modules.store.domain.services.product_service import validate_category
from app.modules.store.infrastructure.database.product_repository_impl import ProductRepositoryImpl
from app.modules.store.presentation.api.schemas.store_schemas import ProductResponse
from app.shared.core.exceptions import BusinessRuleViolationError, NotFoundError
from app.shared.infrastructure.storage.supabase_storage import (
    PETS_FOLDER,
    PRODUCTS_FOLDER,
    ImageChanges,
)
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import require_fields

logger = get_logger(__name__)

REQUIRED_PET_FIELDS = (
    "name", "breed", "age", "price", "bio", "description",
    "energyLevel", "spaceRequired", "maintenance", "imageBase64",
)
REQUIRED_PRODUCT_FIELDS = ("name", "description", "price", "stock", "category", "imageBase64")
PRODUCT_FIELDS = ("name", "description", "price", "stock", "category")


class CatalogService:
    """Admin pet and product management."""

    def __init__(
        self,
        pet_repository: PetRepositoryImpl = Depends(),
        pet_order_repository: PetOrderRepositoryImpl = Depends(),
        product_repository: ProductRepositoryImpl = Depends(),
        notification_service: NotificationService = Depends(),
        images: ImageChanges = Depends(),
    ):
        self.pet_repository = pet_repository
        self.pet_order_repository = pet_order_repository
        self.product_repository = product_repository
        self.notification_service = notification_service
        self.images = images

    # ------------------------------------------------------------------
    # Pets
    # ------------------------------------------------------------------

    async def list_pets(self) -> List[Dict[str, Any]]:
        pets = await self.pet_repository.list_all()
        return [PetResponse.model_validate(pet).to_json() for pet in pets]

    async def create_pet(self, admin_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a pet listing and announce it to every owner.

        Raises:
            ValidationError: A required field is missing
        """
        require_fields(data, REQUIRED_PET_FIELDS)

        image_url = await self.images.upload(data["imageBase64"], PETS_FOLDER)
        pet = await self.pet_repository.create(
            name=data["name"],
            breed=data["breed"],
            age=data["age"],
            price=data["price"],
            images=image_url,
            bio=data["bio"],
            description=data["description"],
            energy_level=data["energyLevel"],
            space_required=data["spaceRequired"],
            maintenance=data["maintenance"],
            child_friendly=bool(data.get("childFriendly")),
            allergy_safe=bool(data.get("allergySafe")),
            neutered=bool(data.get("neutered")),
            vaccinated=bool(data.get("vaccinated")),
            tags=data.get("tags") or [],
            is_available=True,
        )
        logger.log_user_action("create_pet", admin_id, resource=pet.id)

        try:
            await self.notification_service.notify_all_users(
                NotificationType.NEW_PET,
                f"A new pet named {pet.name} ({pet.breed}) is now available for adoption!",
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to announce new pet {pet.id}: {e}")

        return PetResponse.model_validate(pet).to_json()

    async def delete_pet(self, admin_id: str, pet_id: str) -> None:
        pet = await self.pet_repository.get_by_id(pet_id)
        if pet is None:
            raise NotFoundError("Pet not found", resource_type="pet", resource_id=pet_id)
        if await self.pet_order_repository.exists_for_pet(pet_id):
            raise BusinessRuleViolationError("Cannot delete pet with existing orders", rule="pet_has_orders")

        self.images.discard(pet.images)
        await self.pet_repository.delete(pet)
        logger.log_user_action("delete_pet", admin_id, resource=pet_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def _get_product(self, product_id: str):
        product = await self.product_repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)
        return product

    async def list_products(self) -> List[Dict[str, Any]]:
        products = await self.product_repository.list_all()
        return [ProductResponse.model_validate(product).to_json() for product in products]

    async def create_product(self, admin_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        require_fields(data, REQUIRED_PRODUCT_FIELDS)
        validate_category(data["category"])

        image_url = await self.images.upload(data["imageBase64"], PRODUCTS_FOLDER)
        product = await self.product_repository.create(
            **{field: data[field] for field in PRODUCT_FIELDS},
            image=image_url,
        )
        logger.log_user_action("create_product", admin_id, resource=product.id)
        return ProductResponse.model_validate(product).to_json()

    async def update_product(self, admin_id: str, product_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Partial update; a new `imageBase64` replaces the product photo."""
        product = await self._get_product(product_id)

        values = {field: data[field] for field in PRODUCT_FIELDS if data.get(field) is not None}
        if "category" in values:
            validate_category(values["category"])
        if data.get("imageBase64"):
            self.images.discard(product.image)
            values["image"] = await self.images.upload(data["imageBase64"], PRODUCTS_FOLDER)

        product = await self.product_repository.update(product, values)
        logger.log_user_action("update_product", admin_id, resource=product_id, fields=sorted(values))
        return ProductResponse.model_validate(product).to_json()

    async def delete_product(self, admin_id: str, product_id: str) -> None:
        product = await self._get_product(product_id)
        if await self.product_repository.has_orders(product_id):
            raise BusinessRuleViolationError(
                "Cannot delete product with existing orders", rule="product_has_orders"
            )

        self.images.discard(product.image)
        await self.product_repository.delete(product)
        logger.log_user_action("delete_product", admin_id, resource=product_id)
