# 📄 File: app/modules/admin/presentation/api/v1/admin.py
# 🧭 Purpose (Layman Explanation):
# The staff back-office endpoints: statistics, owners, caregivers, pets, products and orders.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/admin. Every route requires the admin role.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from fastapi import APIRouter, Depends, status

from app.modules.admin.domain.services.admin_service import AdminService
from app.modules.admin.domain.services.catalog_service import CatalogService
from app.modules.admin.domain.services.order_admin_service import OrderAdminService
from app.modules.admin.presentation.api.schemas.admin_schemas import VerifyCaregiverRequest
from app.modules.pet_shop.presentation.api.schemas.pet_schemas import PetCreateRequest
from app.modules.store.infrastructure.database.models import OrderStatus
from app.modules.store.presentation.api.schemas.store_schemas import (
    ProductCreateRequest,
    ProductUpdateRequest,
    UpdateOrderStatusRequest,
)
from app.shared.core.dependencies import CurrentPrincipal, get_current_admin

admin_router = APIRouter()


# ----------------------------------------------------------------------
# Dashboard, users, caregivers
# ----------------------------------------------------------------------

@admin_router.get("/dashboard", summary="Platform statistics")
async def dashboard(
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: AdminService = Depends(),
) -> dict:
    return {"message": "Dashboard stats retrieved successfully", "stats": await service.dashboard_stats()}


@admin_router.get("/users", summary="All owners, newest first")
async def list_users(
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: AdminService = Depends(),
) -> dict:
    return {"message": "Users retrieved successfully", "users": await service.list_users()}


@admin_router.get("/caregivers", summary="All caregivers")
async def list_caregivers(
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: AdminService = Depends(),
) -> dict:
    return {"caregivers": await service.list_caregivers()}


@admin_router.put("/caregivers/{caregiver_id}/verify", summary="Verify or unverify a caregiver")
async def verify_caregiver(
    caregiver_id: str,
    payload: VerifyCaregiverRequest,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: AdminService = Depends(),
) -> dict:
    caregiver = await service.verify_caregiver(principal.id, caregiver_id, payload.verified)
    return {"caregiver": caregiver}


# ----------------------------------------------------------------------
# Pets
# ----------------------------------------------------------------------

@admin_router.get("/pets", summary="All pets, newest first")
async def list_pets(
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    return {"message": "Pets retrieved successfully", "pets": await service.list_pets()}


@admin_router.post("/pets", status_code=status.HTTP_201_CREATED, summary="List a pet for adoption")
async def create_pet(
    payload: PetCreateRequest,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    pet = await service.create_pet(principal.id, payload.model_dump(by_alias=True))
    return {"message": "Pet created successfully", "pet": pet}


@admin_router.delete("/pets/{pet_id}", summary="Delete a pet without orders")
async def delete_pet(
    pet_id: str,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    await service.delete_pet(principal.id, pet_id)
    return {"message": "Pet deleted successfully"}


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------

@admin_router.get("/products", summary="All products")
async def list_products(
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    return {"message": "Products retrieved successfully", "products": await service.list_products()}


@admin_router.post("/products", status_code=status.HTTP_201_CREATED, summary="Add a product")
async def create_product(
    payload: ProductCreateRequest,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    product = await service.create_product(principal.id, payload.model_dump(by_alias=True))
    return {"message": "Product created successfully", "product": product}


@admin_router.put("/products/{product_id}", summary="Update a product")
async def update_product(
    product_id: str,
    payload: ProductUpdateRequest,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    product = await service.update_product(principal.id, product_id, payload.model_dump(by_alias=True))
    return {"message": "Product updated successfully", "product": product}


@admin_router.delete("/products/{product_id}", summary="Delete a product without orders")
async def delete_product(
    product_id: str,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: CatalogService = Depends(),
) -> dict:
    await service.delete_product(principal.id, product_id)
    return {"message": "Product deleted successfully"}


# ----------------------------------------------------------------------
# Orders
# ----------------------------------------------------------------------

@admin_router.get("/orders", summary="All store orders with buyer and items")
async def list_orders(
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: OrderAdminService = Depends(),
) -> dict:
    return {"message": "Orders retrieved successfully", "orders": await service.list_orders()}


@admin_router.put("/orders/{order_id}", summary="Approve or cancel a pending order")
async def update_order(
    order_id: str,
    payload: UpdateOrderStatusRequest,
    principal: CurrentPrincipal = Depends(get_current_admin),
    service: OrderAdminService = Depends(),
) -> dict:
    order = await service.update_status(principal.id, order_id, payload.status)
    approved = payload.status == OrderStatus.COMPLETED
    message = "Order approved successfully" if approved else "Order cancelled successfully"
    return {"message": message, "order": order}
