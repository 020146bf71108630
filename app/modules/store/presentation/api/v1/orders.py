"""
Store order endpoints, mounted under /api/users/orders.
"""

from fastapi import APIRouter, Depends, status

from app.modules.store.domain.services.order_service import OrderService
from app.modules.store.presentation.api.schemas.store_schemas import CreateOrderRequest, OrderResponse
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump, dump_many

orders_router = APIRouter()


@orders_router.post("", status_code=status.HTTP_201_CREATED, summary="Check out the cart")
async def create_order(
    payload: CreateOrderRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: OrderService = Depends(),
) -> dict:
    shipping = payload.shipping_info.model_dump() if payload.shipping_info else None
    order = await service.create_order(principal.id, shipping)
    return {"message": "Order created successfully", "order": dump(OrderResponse, order)}


@orders_router.get("", summary="Order history")
async def list_orders(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: OrderService = Depends(),
) -> dict:
    orders = await service.list_orders(principal.id)
    return {"message": "Orders retrieved successfully", "orders": dump_many(OrderResponse, orders)}
