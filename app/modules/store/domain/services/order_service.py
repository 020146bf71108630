# 📄 File: app/modules/store/domain/services/order_service.py
# 🧭 Purpose (Layman Explanation):
# Turns an owner's cart into an order at checkout and lists the owner's past orders.
#
# 🧪 Purpose (Technical Summary):
# Checkout in one unit of work: validate shipping info and stock, create a PENDING order with
# items priced at the current product price, decrement stock and clear the cart.
#
# 🔗 Dependencies:
# - OrderRepositoryImpl, CartRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - orders router

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.store.infrastructure.database.cart_repository_impl import CartRepositoryImpl
from app.modules.store.infrastructure.database.models import OrderItemModel, OrderModel
from app.modules.store.infrastructure.database.order_repository_impl import OrderRepositoryImpl
from app.shared.core.exceptions import ValidationError
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import first_missing_field

logger = get_logger(__name__)

SHIPPING_FIELDS = ("name", "address", "city", "state", "zip", "country")


class OrderService:
    """Domain service for checkout and order history."""

    def __init__(
        self,
        order_repository: OrderRepositoryImpl = Depends(),
        cart_repository: CartRepositoryImpl = Depends(),
    ):
        self.order_repository = order_repository
        self.cart_repository = cart_repository

    async def create_order(self, user_id: str, shipping_info: Optional[Dict[str, Any]]) -> OrderModel:
        """
        Check out the caller's cart.

        Raises:
            ValidationError: Missing shipping field, empty cart or a product short on stock
        """
        shipping_info = shipping_info or {}
        if first_missing_field(shipping_info, SHIPPING_FIELDS):
            raise ValidationError("Missing required shipping information", field="shippingInfo")

        cart = await self.cart_repository.get_for_user(user_id)
        cart_items = await self.cart_repository.list_items(cart.id) if cart else []
        if not cart_items:
            raise ValidationError("Cart is empty")

        for item in cart_items:
            if item.product.stock < item.quantity:
                raise ValidationError(f"Not enough stock for {item.product.name}", field="quantity")

        order_items = [
            OrderItemModel(
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.product.price,
                product=item.product,
            )
            for item in cart_items
        ]
        total_price = round(sum(item.product.price * item.quantity for item in cart_items), 2)

        order = await self.order_repository.create(user_id, total_price, shipping_info, order_items)

        for item in cart_items:
            item.product.stock -= item.quantity
        await self.cart_repository.clear(cart.id)

        logger.log_business_event("order_created", f"Order {order.id} placed", entity_id=order.id, total=total_price)
        return order

    async def list_orders(self, user_id: str) -> List[OrderModel]:
        return await self.order_repository.list_for_user(user_id)
