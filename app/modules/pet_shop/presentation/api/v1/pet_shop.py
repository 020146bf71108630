# 📄 File: app/modules/pet_shop/presentation/api/v1/pet_shop.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints of the adoption shop used by pet owners.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/petShop: list, detail, order and recommendations.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from fastapi import APIRouter, Depends, status

from app.modules.pet_shop.domain.services.pet_shop_service import PetShopService
from app.modules.pet_shop.presentation.api.schemas.pet_schemas import (
    PetOrderRequest,
    PetOrderResponse,
    PetResponse,
)
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump, dump_many

pet_shop_router = APIRouter()


@pet_shop_router.get("", summary="List available pets")
async def list_pets(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: PetShopService = Depends(),
) -> dict:
    pets = await service.list_available_pets()
    return {"pets": dump_many(PetResponse, pets)}


@pet_shop_router.get("/recommendations", summary="Pets ranked by compatibility")
async def recommended_pets(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: PetShopService = Depends(),
) -> dict:
    """Top three matches plus every available pet with its compatibility score."""
    return await service.get_recommendations(principal.id)


@pet_shop_router.post("/order", status_code=status.HTTP_201_CREATED, summary="Adopt a pet")
async def order_pet(
    payload: PetOrderRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: PetShopService = Depends(),
) -> dict:
    order = await service.order_pet(principal.id, payload.pet_id)
    return {"message": "Pet order created successfully", "order": dump(PetOrderResponse, order)}


@pet_shop_router.get("/{pet_id}", summary="Pet details")
async def get_pet(
    pet_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: PetShopService = Depends(),
) -> dict:
    pet = await service.get_pet(pet_id)
    return {"pet": dump(PetResponse, pet)}
