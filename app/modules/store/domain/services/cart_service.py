# 📄 File: app/modules/store/domain/services/cart_service.py
# 🧭 Purpose (Layman Explanation):
# Manages an owner's shopping cart: adding products, changing amounts and removing them, while
# never letting the cart ask for more than is in stock.
#
# 🧪 Purpose (Technical Summary):
# Domain service for cart operations. The cart is created on first add; existing lines are
# incremented; ownership of a cart item is checked against the caller's id.
#
# 🔗 Dependencies:
# - CartRepositoryImpl, ProductRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - cart router

from typing import Any, Dict, Optional

from fastapi import Depends

from app.modules.store.infrastructure.database.cart_repository_impl import CartRepositoryImpl
from app.modules.store.infrastructure.database.models import CartItemModel
from app.modules.store.infrastructure.database.product_repository_impl import ProductRepositoryImpl
from app.modules.store.presentation.api.schemas.store_schemas import CartLineResponse, CartResponse
from app.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError

NOT_ENOUGH_STOCK_MESSAGE = "Not enough stock available"
INVALID_PARAMETERS_MESSAGE = "Bad Request: Missing or invalid parameters"


class CartService:
    """Domain service for shopping carts."""

    def __init__(
        self,
        cart_repository: CartRepositoryImpl = Depends(),
        product_repository: ProductRepositoryImpl = Depends(),
    ):
        self.cart_repository = cart_repository
        self.product_repository = product_repository

    async def add_to_cart(self, user_id: str, product_id: Optional[str], quantity: int) -> CartItemModel:
        """
        Add `quantity` of a product to the caller's cart.

        Raises:
            ValidationError: Missing product or non-positive quantity, or not enough stock
            NotFoundError: Unknown product
        """
        if not product_id or quantity is None or quantity <= 0:
            raise ValidationError(INVALID_PARAMETERS_MESSAGE)

        product = await self.product_repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

        cart = await self.cart_repository.get_or_create(user_id)
        existing = await self.cart_repository.find_item(cart.id, product.id)
        wanted = quantity + (existing.quantity if existing else 0)
        if product.stock < wanted:
            raise ValidationError(NOT_ENOUGH_STOCK_MESSAGE, field="quantity")

        if existing:
            return await self.cart_repository.set_quantity(existing, wanted)
        return await self.cart_repository.add_item(cart, product, quantity)

    async def get_cart(self, user_id: str) -> Dict[str, Any]:
        """The caller's cart with line totals; an empty placeholder when none exists."""
        cart = await self.cart_repository.get_for_user(user_id)
        if cart is None:
            return CartResponse(id="", user_id=user_id).to_json()

        items = await self.cart_repository.list_items(cart.id)
        lines = [
            CartLineResponse.model_validate(item).model_copy(
                update={"total_price": round(item.product.price * item.quantity, 2)}
            )
            for item in items
        ]
        return CartResponse(
            id=cart.id,
            user_id=cart.user_id,
            items=lines,
            total_price=round(sum(line.total_price for line in lines), 2),
        ).to_json()

    async def _owned_item(self, user_id: str, cart_item_id: str) -> CartItemModel:
        item = await self.cart_repository.get_item(cart_item_id)
        if item is None:
            raise NotFoundError("Cart item not found", resource_type="cart_item", resource_id=cart_item_id)
        if item.cart.user_id != user_id:
            raise AuthorizationError("Unauthorized: Cart item does not belong to user", resource_type="cart_item")
        return item

    async def update_quantity(self, user_id: str, cart_item_id: Optional[str], quantity: Optional[int]) -> bool:
        """
        Set a cart line's quantity; zero or less removes the line.

        Returns:
            bool: True when the line was removed
        """
        if not cart_item_id or quantity is None:
            raise ValidationError(INVALID_PARAMETERS_MESSAGE)

        item = await self._owned_item(user_id, cart_item_id)
        if item.product.stock < quantity:
            raise ValidationError(NOT_ENOUGH_STOCK_MESSAGE, field="quantity")

        if quantity <= 0:
            await self.cart_repository.remove_item(item)
            return True

        await self.cart_repository.set_quantity(item, quantity)
        return False

    async def remove_item(self, user_id: str, cart_item_id: Optional[str]) -> None:
        if not cart_item_id:
            raise ValidationError("Bad Request: Missing cart item ID", field="id")
        item = await self._owned_item(user_id, cart_item_id)
        await self.cart_repository.remove_item(item)
