# 📄 File: app/modules/store/presentation/api/v1/cart.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints of the shopping cart.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/cart (role user): view, add, change quantity, remove.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.modules.store.domain.services.cart_service import CartService
from app.modules.store.presentation.api.schemas.store_schemas import (
    AddToCartRequest,
    CartItemResponse,
    UpdateCartItemRequest,
)
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump

cart_router = APIRouter()


@cart_router.get("", summary="Get the caller's cart")
async def get_cart(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: CartService = Depends(),
) -> dict:
    return {"message": "Cart retrieved successfully", "cart": await service.get_cart(principal.id)}


@cart_router.post("", summary="Add a product to the cart")
async def add_to_cart(
    payload: AddToCartRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: CartService = Depends(),
) -> dict:
    item = await service.add_to_cart(principal.id, payload.product_id, payload.quantity)
    return {"message": "Product added to cart successfully", "cartItem": dump(CartItemResponse, item)}


@cart_router.put("/item", summary="Change a cart item's quantity")
async def update_cart_item(
    payload: UpdateCartItemRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: CartService = Depends(),
) -> dict:
    """Zero or a negative quantity removes the item."""
    removed = await service.update_quantity(principal.id, payload.cart_item_id, payload.quantity)
    message = "Item removed from cart" if removed else "Cart item quantity updated successfully"
    return {"message": message, "success": True, "removed": removed}


@cart_router.delete("/item", summary="Remove a cart item")
async def remove_cart_item(
    id: Optional[str] = Query(default=None),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: CartService = Depends(),
) -> dict:
    await service.remove_item(principal.id, id)
    return {"message": "Item removed from cart", "success": True}
