# 📄 File: app/modules/store/domain/services/product_service.py
# 🧭 Purpose (Layman Explanation):
# Runs the store shelf: lists products (by category or the best rated ones), shows a product
# with its reviews and lets owners rate products they have bought.
#
# 🧪 Purpose (Technical Summary):
# Domain service for the product catalog and product ratings. Ratings are only accepted from
# owners with a PENDING or COMPLETED order containing the product, once per product.
#
# 🔗 Dependencies:
# - ProductRepositoryImpl, ProductRatingRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - store and product rating routers

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.store.infrastructure.database.models import OrderStatus, ProductCategory, ProductRatingModel
from app.modules.store.infrastructure.database.product_repository_impl import (
    ProductRatingRepositoryImpl,
    ProductRepositoryImpl,
    ProductWithStats,
)
from app.modules.store.presentation.api.schemas.store_schemas import (
    ProductDetailResponse,
    ProductRatingWithUser,
    RatedProductResponse,
)
from app.shared.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    NotFoundError,
    ValidationError,
)
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import validate_rating

logger = get_logger(__name__)

FEATURED_LIMIT = 10
INVALID_CATEGORY_MESSAGE = "Invalid category. Must be food, toy, or medicine"
PURCHASE_STATUSES = (OrderStatus.PENDING, OrderStatus.COMPLETED)


def validate_category(category: Optional[str]) -> str:
    if category not in ProductCategory.ALL:
        raise ValidationError(INVALID_CATEGORY_MESSAGE, field="category")
    return category


def _rated(row: ProductWithStats, schema=RatedProductResponse, **extra: Any):
    product, avg, count = row
    return schema.model_validate(product).model_copy(
        update={"avg_rating": round(float(avg or 0), 1), "rating_count": count, **extra}
    )


class ProductService:
    """Domain service for the product catalog and ratings."""

    def __init__(
        self,
        product_repository: ProductRepositoryImpl = Depends(),
        rating_repository: ProductRatingRepositoryImpl = Depends(),
    ):
        self.product_repository = product_repository
        self.rating_repository = rating_repository

    async def list_products(self, category: Optional[str] = None, featured: bool = False) -> List[Dict[str, Any]]:
        """
        Products with `avgRating` and `ratingCount`.

        Featured returns the top ten by average rating, then by number of ratings.
        """
        if featured:
            rows = await self.product_repository.list_with_stats()
            rows.sort(key=lambda row: (float(row[1] or 0), row[2]), reverse=True)
            rows = rows[:FEATURED_LIMIT]
        else:
            if category:
                validate_category(category)
            rows = await self.product_repository.list_with_stats(category)

        return [_rated(row).to_json() for row in rows]

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        row = await self.product_repository.get_with_stats(product_id)
        if row is None:
            raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

        ratings = await self.rating_repository.list_for_product(product_id)
        detail = _rated(
            row,
            schema=ProductDetailResponse,
            ratings=[ProductRatingWithUser.model_validate(rating) for rating in ratings],
        )
        return detail.to_json()

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------

    async def get_user_rating(self, user_id: str, product_id: Optional[str]) -> Optional[ProductRatingModel]:
        if not product_id:
            raise ValidationError("Bad Request: Missing product ID", field="productId")
        return await self.rating_repository.get_for_user(user_id, product_id)

    async def rate_product(
        self, user_id: str, product_id: Optional[str], rating: Optional[int], comment: Optional[str]
    ) -> ProductRatingModel:
        """
        Rate a purchased product.

        Raises:
            ValidationError: Missing product or rating outside 1..5
            AuthorizationError: No pending or completed order contains the product
            DuplicateResourceError: The user already rated the product
        """
        if not product_id:
            raise ValidationError("Bad Request: Missing product ID", field="productId")
        rating = validate_rating(rating)

        if not await self.rating_repository.has_purchased(user_id, product_id, PURCHASE_STATUSES):
            raise AuthorizationError("You can only rate products you have purchased", resource_type="product")

        if await self.rating_repository.get_for_user(user_id, product_id):
            raise DuplicateResourceError(
                "You have already rated this product. Please update your existing rating.",
                resource_type="product_rating",
            )

        product_rating = await self.rating_repository.create(user_id, product_id, rating, comment)
        logger.log_user_action("rate_product", user_id, resource=product_id, rating=rating)
        return product_rating

    async def update_rating(
        self, user_id: str, rating_id: Optional[str], rating: Optional[int], comment: Optional[str]
    ) -> ProductRatingModel:
        if not rating_id:
            raise ValidationError("Bad Request: Missing rating ID", field="ratingId")
        rating = validate_rating(rating)

        product_rating = await self.rating_repository.get_by_id(rating_id)
        if product_rating is None:
            raise NotFoundError("Rating not found", resource_type="product_rating", resource_id=rating_id)
        if product_rating.user_id != user_id:
            raise AuthorizationError("You can only update your own ratings", resource_type="product_rating")

        return await self.rating_repository.update(product_rating, rating, comment)
