# 📄 File: app/modules/store/infrastructure/database/cart_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Keeps each owner's shopping cart and the products sitting in it.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for `carts` and `cart_items`. Items are always loaded with their product.
#
# 🔄 Connected Modules / Calls From:
# - CartService, OrderService (checkout clears the cart)

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.store.infrastructure.database.models import CartItemModel, CartModel, ProductModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class CartRepositoryImpl:
    """SQLAlchemy repository for carts and cart items."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def get_for_user(self, user_id: str) -> Optional[CartModel]:
        result = await self._session.execute(select(CartModel).where(CartModel.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_or_create(self, user_id: str) -> CartModel:
        cart = await self.get_for_user(user_id)
        if cart is None:
            cart = CartModel(user_id=user_id)
            self._session.add(cart)
            await self._session.flush()
            logger.debug(f"Created cart {cart.id} for user {user_id}")
        return cart

    async def list_items(self, cart_id: str) -> List[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.created_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def get_item(self, cart_item_id: str) -> Optional[CartItemModel]:
        return await self._session.get(CartItemModel, cart_item_id)

    async def find_item(self, cart_id: str, product_id: str) -> Optional[CartItemModel]:
        stmt = select(CartItemModel).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.product_id == product_id,
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def add_item(self, cart: CartModel, product: ProductModel, quantity: int) -> CartItemModel:
        item = CartItemModel(cart_id=cart.id, product_id=product.id, quantity=quantity, cart=cart, product=product)
        self._session.add(item)
        await self._session.flush()
        return item

    async def set_quantity(self, item: CartItemModel, quantity: int) -> CartItemModel:
        item.quantity = quantity
        await self._session.flush()
        return item

    async def remove_item(self, item: CartItemModel) -> None:
        await self._session.delete(item)
        await self._session.flush()

    async def clear(self, cart_id: str) -> None:
        await self._session.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        await self._session.flush()
