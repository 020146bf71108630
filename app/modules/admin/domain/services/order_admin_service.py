# 📄 File: app/modules/admin/domain/services/order_admin_service.py
# 🧭 Purpose (Layman Explanation):
# Lets staff approve or cancel store orders; cancelling puts the items back on the shelf and the
# customer is told either way.
#
# 🧪 Purpose (Technical Summary):
# Admin domain service for store orders. Only PENDING orders move, once, to COMPLETED or
# CANCELLED; cancellation restores product stock. The buyer gets ORDER_COMPLETED or
# ORDER_CANCELLED.
#
# 🔄 Connected Modules / Calls From:
# - admin orders router

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.infrastructure.database.models import NotificationType
from app.modules.store.infrastructure.database.models import OrderStatus
from app.modules.store.infrastructure.database.order_repository_impl import OrderRepositoryImpl
from app.modules.store.infrastructure.database.product_repository_impl import ProductRepositoryImpl
from app.modules.store.presentation.api.schemas.store_schemas import AdminOrderResponse
from app.shared.core.exceptions import NotFoundError, ValidationError
from app.shared.utils.formatters import short_id
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

FINAL_STATUSES = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class OrderAdminService:
    """Admin order review."""

    def __init__(
        self,
        order_repository: OrderRepositoryImpl = Depends(),
        product_repository: ProductRepositoryImpl = Depends(),
        notification_service: NotificationService = Depends(),
    ):
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.notification_service = notification_service

    async def list_orders(self) -> List[Dict[str, Any]]:
        orders = await self.order_repository.list_all()
        return [AdminOrderResponse.model_validate(order).to_json() for order in orders]

    async def update_status(self, admin_id: str, order_id: str, status: Optional[str]) -> Dict[str, Any]:
        """
        Approve or cancel a pending order.

        Raises:
            ValidationError: Status other than COMPLETED/CANCELLED, or order not pending
            NotFoundError: Unknown order
        """
        if status not in FINAL_STATUSES:
            raise ValidationError("Invalid status. Must be COMPLETED or CANCELLED", field="status")

        order = await self.order_repository.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found", resource_type="order", resource_id=order_id)
        if order.status != OrderStatus.PENDING:
            raise ValidationError("Only pending orders can be updated", field="status")

        if status == OrderStatus.CANCELLED:
            for item in order.items:
                product = item.product
                await self.product_repository.update(product, {"stock": product.stock + item.quantity})

        order = await self.order_repository.set_status(order, status)

        if status == OrderStatus.COMPLETED:
            notification_type = NotificationType.ORDER_COMPLETED
            message = f"Your order #{short_id(order.id)} has been approved."
        else:
            notification_type = NotificationType.ORDER_CANCELLED
            message = f"Your order #{short_id(order.id)} has been cancelled."
        await self.notification_service.notify(order.user_id, notification_type, message)

        logger.log_business_event(
            "order_status_changed", f"Order {order_id} {status.lower()}", entity_id=order_id, actor_id=admin_id
        )
        return AdminOrderResponse.model_validate(order).to_json()
