# 📄 File: app/modules/store/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how the pet supplies store keeps its products, each owner's shopping cart, the orders
# placed from that cart and the star ratings owners leave on products they bought.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy models for `products`, `carts`, `cart_items`, `orders`, `order_items` and
# `product_ratings`. Order item prices are copied from the product at checkout time.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - store repositories, admin back-office
# - Alembic migrations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


class ProductCategory:
    FOOD = "food"
    TOY = "toy"
    MEDICINE = "medicine"

    ALL = (FOOD, TOY, MEDICINE)


class OrderStatus:
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# =============================================================================
# CATALOG
# =============================================================================

class ProductModel(DatabaseBase):
    """Product sold in the store."""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image = Column(String(500), nullable=False, comment="Image URL")
    category = Column(String(20), nullable=False, index=True, comment="food | toy | medicine")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<ProductModel(id={self.id}, name={self.name}, stock={self.stock})>"


class ProductRatingModel(DatabaseBase):
    """One owner's 1-5 star rating of a purchased product."""
    __tablename__ = "product_ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_product_ratings_user_product"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")


# =============================================================================
# CART
# =============================================================================

class CartModel(DatabaseBase):
    """Shopping cart; each owner has at most one."""
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)


class CartItemModel(DatabaseBase):
    __tablename__ = "cart_items"

    id = Column(String(36), primary_key=True, default=new_id)
    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    cart = relationship("CartModel", lazy="joined")
    product = relationship("ProductModel", lazy="joined")


# =============================================================================
# ORDERS
# =============================================================================

class OrderModel(DatabaseBase):
    """
    Store order created from a cart.

    Status moves from PENDING to COMPLETED or CANCELLED, once.
    """
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    total_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING, index=True)

    shipping_name = Column(String(255), nullable=False)
    shipping_address = Column(String(500), nullable=False)
    shipping_city = Column(String(100), nullable=False)
    shipping_state = Column(String(100), nullable=False)
    shipping_zip = Column(String(20), nullable=False)
    shipping_country = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    items = relationship("OrderItemModel", lazy="selectin", cascade="all, delete-orphan")
    user = relationship("UserModel", lazy="joined")


class OrderItemModel(DatabaseBase):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, comment="Unit price at checkout")

    product = relationship("ProductModel", lazy="joined")
