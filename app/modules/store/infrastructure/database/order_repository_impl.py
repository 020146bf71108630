# 📄 File: app/modules/store/infrastructure/database/order_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves store orders and finds them again for the owner who placed them and for the admin.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for `orders` and their `order_items` (items eagerly loaded with products).
#
# 🔄 Connected Modules / Calls From:
# - OrderService, admin back-office

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.store.infrastructure.database.models import OrderItemModel, OrderModel, OrderStatus
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class OrderRepositoryImpl:
    """SQLAlchemy repository for store orders."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, user_id: str, total_price: float, shipping: Dict[str, Any], items: List[OrderItemModel]) -> OrderModel:
        order = OrderModel(
            user_id=user_id,
            total_price=total_price,
            status=OrderStatus.PENDING,
            shipping_name=shipping["name"],
            shipping_address=shipping["address"],
            shipping_city=shipping["city"],
            shipping_state=shipping["state"],
            shipping_zip=shipping["zip"],
            shipping_country=shipping["country"],
            items=items,
        )
        self._session.add(order)
        await self._session.flush()
        logger.info(f"Created order {order.id} for user {user_id} ({len(items)} items)")
        return order

    async def get_by_id(self, order_id: str) -> Optional[OrderModel]:
        return await self._session.get(OrderModel, order_id)

    async def list_for_user(self, user_id: str) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_all(self) -> List[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def set_status(self, order: OrderModel, status: str) -> OrderModel:
        order.status = status
        await self._session.flush()
        return order

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(OrderModel.id)))
        return result.scalar_one()

    async def completed_revenue(self) -> float:
        """Sum of COMPLETED order totals."""
        stmt = select(func.coalesce(func.sum(OrderModel.total_price), 0)).where(
            OrderModel.status == OrderStatus.COMPLETED
        )
        result = await self._session.execute(stmt)
        return float(result.scalar_one() or 0)
