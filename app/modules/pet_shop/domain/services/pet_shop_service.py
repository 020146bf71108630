# 📄 File: app/modules/pet_shop/domain/services/pet_shop_service.py
# 🧭 Purpose (Layman Explanation):
# Runs the adoption shop: shows available pets, lets an owner adopt one and suggests the pets
# that best fit the owner's lifestyle.
#
# 🧪 Purpose (Technical Summary):
# Domain service for pet listing, adoption orders (order + availability flip in one unit of work)
# and compatibility-ranked recommendations.
#
# 🔗 Dependencies:
# - PetRepositoryImpl, PetOrderRepositoryImpl, accounts UserRepositoryImpl
# - compatibility.calculate_compatibility_score
#
# 🔄 Connected Modules / Calls From:
# - pet shop router

import logging
from typing import Any, Dict, List

from fastapi import Depends

from app.modules.accounts.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.modules.pet_shop.domain.services.compatibility import calculate_compatibility_score
from app.modules.pet_shop.infrastructure.database.models import PetModel, PetOrderModel
from app.modules.pet_shop.infrastructure.database.pet_repository_impl import (
    PetOrderRepositoryImpl,
    PetRepositoryImpl,
)
from app.modules.pet_shop.presentation.api.schemas.pet_schemas import PetResponse, ScoredPetResponse
from app.shared.core.exceptions import BusinessRuleViolationError, NotFoundError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

RECOMMENDATION_COUNT = 3


class PetShopService:
    """Domain service for the adoption shop."""

    def __init__(
        self,
        pet_repository: PetRepositoryImpl = Depends(),
        pet_order_repository: PetOrderRepositoryImpl = Depends(),
        user_repository: UserRepositoryImpl = Depends(),
    ):
        self.pet_repository = pet_repository
        self.pet_order_repository = pet_order_repository
        self.user_repository = user_repository

    async def list_available_pets(self) -> List[PetModel]:
        return await self.pet_repository.list_available()

    async def get_pet(self, pet_id: str) -> PetModel:
        pet = await self.pet_repository.get_by_id(pet_id)
        if pet is None:
            raise NotFoundError("Pet not found", resource_type="pet", resource_id=pet_id)
        return pet

    async def order_pet(self, user_id: str, pet_id: str) -> PetOrderModel:
        """
        Adopt a pet: create the order and take the pet off the shop.

        Raises:
            NotFoundError: Unknown pet
            BusinessRuleViolationError: Pet already adopted
        """
        pet = await self.get_pet(pet_id)
        if not pet.is_available:
            raise BusinessRuleViolationError("Pet is not available for adoption", rule="pet_available")

        order = await self.pet_order_repository.create(user_id, pet)
        await self.pet_repository.mark_unavailable(pet)

        logger.log_business_event("pet_adopted", f"Pet {pet.id} adopted", entity_id=order.id, user=user_id)
        return order

    async def get_recommendations(self, user_id: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        Available pets ranked by compatibility with the user's preferences.

        Returns:
            {"recommendedPets": top 3, "allPets": every available pet}, highest score first
        """
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)

        pets = await self.pet_repository.list_available()
        scored = []
        for pet in pets:
            data = PetResponse.model_validate(pet).model_dump()
            data["compatibility_score"] = calculate_compatibility_score(user, pet)
            scored.append(ScoredPetResponse(**data).to_json())

        scored.sort(key=lambda item: item["compatibilityScore"], reverse=True)
        return {"recommendedPets": scored[:RECOMMENDATION_COUNT], "allPets": scored}
