# 📄 File: app/modules/store/presentation/api/v1/store.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints of the pet supplies store: browse products and look at one product.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/store (role user).
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.modules.store.domain.services.product_service import ProductService
from app.shared.core.dependencies import CurrentPrincipal, get_current_user

store_router = APIRouter()


@store_router.get("", summary="List products")
async def list_products(
    category: Optional[str] = Query(default=None, description="food, toy or medicine"),
    featured: Optional[str] = Query(default=None, description="'true' for the ten best rated"),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProductService = Depends(),
) -> dict:
    products = await service.list_products(category=category, featured=featured == "true")
    return {"message": "Products retrieved successfully", "products": products}


@store_router.get("/{product_id}", summary="Product details with ratings")
async def get_product(
    product_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ProductService = Depends(),
) -> dict:
    product = await service.get_product(product_id)
    return {"message": "Product retrieved successfully", "product": product}
