"""
Product rating endpoints, mounted under /api/users/products/rating.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.store.domain.services.product_service import ProductService
from app.modules.store.presentation.api.schemas.store_schemas import (
    CreateRatingRequest,
    ProductRatingResponse,
    UpdateRatingRequest,
)
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump

ratings_router = APIRouter()


@ratings_router.get("", summary="The caller's rating of a product")
async def get_rating(
    product_id: Optional[str] = Query(default=None, alias="productId"),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProductService = Depends(),
) -> dict:
    rating = await service.get_user_rating(principal.id, product_id)
    if rating is None:
        return {"message": "No rating found", "rating": None}
    return {"message": "Rating retrieved successfully", "rating": dump(ProductRatingResponse, rating)}


@ratings_router.post("", status_code=status.HTTP_201_CREATED, summary="Rate a purchased product")
async def create_rating(
    payload: CreateRatingRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProductService = Depends(),
) -> dict:
    rating = await service.rate_product(principal.id, payload.product_id, payload.rating, payload.comment)
    return {"message": "Rating submitted successfully", "rating": dump(ProductRatingResponse, rating)}


@ratings_router.put("", summary="Update the caller's rating")
async def update_rating(
    payload: UpdateRatingRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProductService = Depends(),
) -> dict:
    rating = await service.update_rating(principal.id, payload.rating_id, payload.rating, payload.comment)
    return {"message": "Rating updated successfully", "rating": dump(ProductRatingResponse, rating)}
