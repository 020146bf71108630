# 📄 File: app/modules/store/presentation/api/schemas/store_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what products, carts, orders and ratings look like when sent to and from the app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the store, cart, checkout and product rating endpoints
# and the admin product/order endpoints.
#
# 🔄 Connected Modules / Calls From:
# - store routers, admin router

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.modules.accounts.presentation.api.schemas.profile_schemas import UserAdminSummary, UserSummary
from app.shared.core.schemas import APIModel


# =============================================================================
# PRODUCTS AND RATINGS
# =============================================================================

class ProductResponse(APIModel):
    id: str
    name: str
    description: str
    price: float
    stock: int
    image: str
    category: str
    created_at: datetime
    updated_at: datetime


class RatedProductResponse(ProductResponse):
    """Product listing with its rating aggregate."""

    avg_rating: float = 0
    rating_count: int = 0


class ProductRatingResponse(APIModel):
    id: str
    user_id: str
    product_id: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductRatingWithUser(ProductRatingResponse):
    user: UserSummary


class ProductDetailResponse(RatedProductResponse):
    ratings: List[ProductRatingWithUser] = Field(default_factory=list)


class CreateRatingRequest(APIModel):
    product_id: Optional[str] = None
    rating: Optional[float] = None
    comment: Optional[str] = None


class UpdateRatingRequest(APIModel):
    rating_id: Optional[str] = None
    rating: Optional[float] = None
    comment: Optional[str] = None


# =============================================================================
# CART
# =============================================================================

class AddToCartRequest(APIModel):
    product_id: Optional[str] = None
    quantity: Optional[int] = 1


class UpdateCartItemRequest(APIModel):
    cart_item_id: Optional[str] = None
    quantity: Optional[int] = None


class CartItemResponse(APIModel):
    id: str
    cart_id: str
    product_id: str
    quantity: int
    created_at: datetime
    updated_at: datetime


class CartLineResponse(CartItemResponse):
    product: ProductResponse
    total_price: float


class CartResponse(APIModel):
    id: str
    user_id: str
    items: List[CartLineResponse] = Field(default_factory=list)
    total_price: float = 0


# =============================================================================
# ORDERS
# =============================================================================

class ShippingInfo(APIModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class CreateOrderRequest(APIModel):
    shipping_info: Optional[ShippingInfo] = None


class OrderItemResponse(APIModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: float
    product: ProductResponse


class OrderResponse(APIModel):
    id: str
    user_id: str
    total_price: float
    status: str
    shipping_name: str
    shipping_address: str
    shipping_city: str
    shipping_state: str
    shipping_zip: str
    shipping_country: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = Field(default_factory=list)


class AdminOrderResponse(OrderResponse):
    user: UserAdminSummary


class UpdateOrderStatusRequest(APIModel):
    status: Optional[str] = None


# =============================================================================
# ADMIN PRODUCT PAYLOADS
# =============================================================================

class ProductCreateRequest(APIModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    image_base64: Optional[str] = None


class ProductUpdateRequest(ProductCreateRequest):
    """Partial product update; absent fields keep their value."""
