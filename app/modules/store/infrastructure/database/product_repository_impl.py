# 📄 File: app/modules/store/infrastructure/database/product_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Finds store products together with how well they are rated, and saves owners' ratings.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repositories for `products` (with average rating and rating count aggregated in SQL)
# and `product_ratings`.
#
# 🔄 Connected Modules / Calls From:
# - ProductService, admin back-office

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.store.infrastructure.database.models import (
    CartItemModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
    ProductRatingModel,
)
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

# (product, average rating or None, rating count)
ProductWithStats = Tuple[ProductModel, Optional[float], int]


class ProductRepositoryImpl:
    """SQLAlchemy repository for store products."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    def _with_stats(self):
        return (
            select(
                ProductModel,
                func.avg(ProductRatingModel.rating),
                func.count(ProductRatingModel.id),
            )
            .outerjoin(ProductRatingModel, ProductRatingModel.product_id == ProductModel.id)
            .group_by(ProductModel.id)
        )

    async def list_with_stats(self, category: Optional[str] = None) -> List[ProductWithStats]:
        """Products with rating aggregates, newest first."""
        stmt = self._with_stats().order_by(ProductModel.created_at.desc())
        if category:
            stmt = stmt.where(ProductModel.category == category)
        result = await self._session.execute(stmt)
        return [(product, avg, count) for product, avg, count in result.all()]

    async def get_with_stats(self, product_id: str) -> Optional[ProductWithStats]:
        stmt = self._with_stats().where(ProductModel.id == product_id)
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1], row[2]

    async def get_by_id(self, product_id: str) -> Optional[ProductModel]:
        return await self._session.get(ProductModel, product_id)

    async def list_all(self) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, **fields: Any) -> ProductModel:
        product = ProductModel(**fields)
        self._session.add(product)
        await self._session.flush()
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    async def update(self, product: ProductModel, fields: Dict[str, Any]) -> ProductModel:
        for key, value in fields.items():
            setattr(product, key, value)
        await self._session.flush()
        return product

    async def has_orders(self, product_id: str) -> bool:
        stmt = select(func.count(OrderItemModel.id)).where(OrderItemModel.product_id == product_id)
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def delete(self, product: ProductModel) -> None:
        """Delete a product together with the cart items and ratings pointing at it."""
        await self._session.execute(delete(CartItemModel).where(CartItemModel.product_id == product.id))
        await self._session.execute(delete(ProductRatingModel).where(ProductRatingModel.product_id == product.id))
        await self._session.delete(product)
        await self._session.flush()
        logger.info(f"Deleted product {product.id}")

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(ProductModel.id)))
        return result.scalar_one()


class ProductRatingRepositoryImpl:
    """SQLAlchemy repository for product ratings."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def get_by_id(self, rating_id: str) -> Optional[ProductRatingModel]:
        return await self._session.get(ProductRatingModel, rating_id)

    async def get_for_user(self, user_id: str, product_id: str) -> Optional[ProductRatingModel]:
        stmt = select(ProductRatingModel).where(
            ProductRatingModel.user_id == user_id,
            ProductRatingModel.product_id == product_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_product(self, product_id: str) -> List[ProductRatingModel]:
        """Ratings of a product with their author, newest first."""
        stmt = (
            select(ProductRatingModel)
            .where(ProductRatingModel.product_id == product_id)
            .order_by(ProductRatingModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def has_purchased(self, user_id: str, product_id: str, statuses: Tuple[str, ...]) -> bool:
        """Whether the user has an order in one of `statuses` containing the product."""
        stmt = (
            select(func.count(OrderItemModel.id))
            .join(OrderModel, OrderModel.id == OrderItemModel.order_id)
            .where(
                OrderModel.user_id == user_id,
                OrderModel.status.in_(statuses),
                OrderItemModel.product_id == product_id,
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def create(self, user_id: str, product_id: str, rating: int, comment: Optional[str]) -> ProductRatingModel:
        product_rating = ProductRatingModel(user_id=user_id, product_id=product_id, rating=rating, comment=comment)
        self._session.add(product_rating)
        await self._session.flush()
        return product_rating

    async def update(self, product_rating: ProductRatingModel, rating: int, comment: Optional[str]) -> ProductRatingModel:
        product_rating.rating = rating
        product_rating.comment = comment
        await self._session.flush()
        return product_rating
