# 📄 File: app/modules/admin/domain/services/admin_service.py
# 🧭 Purpose (Layman Explanation):
# Gives PetVally staff an overview of the platform: headline numbers, the list of owners and the
# caregivers waiting to be verified.
#
# 🧪 Purpose (Technical Summary):
# Admin domain service for the dashboard statistics, the user directory and caregiver
# verification. Reads across the accounts, pet_shop and store repositories.
#
# 🔗 Dependencies:
# - accounts UserRepositoryImpl / CaregiverRepositoryImpl
# - pet_shop PetRepositoryImpl / PetOrderRepositoryImpl
# - store ProductRepositoryImpl / OrderRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - admin dashboard router

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.accounts.infrastructure.database.caregiver_repository_impl import CaregiverRepositoryImpl
from app.modules.accounts.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.modules.accounts.presentation.api.schemas.profile_schemas import CaregiverResponse, UserAdminSummary
from app.modules.admin.presentation.api.schemas.admin_schemas import CaregiverVerification, DashboardStats
from app.modules.pet_shop.infrastructure.database.pet_repository_impl import PetOrderRepositoryImpl, PetRepositoryImpl
from app.modules.store.infrastructure.database.order_repository_impl import OrderRepositoryImpl
from app.modules.store.infrastructure.database.product_repository_impl import ProductRepositoryImpl
from app.shared.core.exceptions import NotFoundError, ValidationError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


class AdminService:
    """Dashboard, users and caregivers for the back-office."""

    def __init__(
        self,
        user_repository: UserRepositoryImpl = Depends(),
        caregiver_repository: CaregiverRepositoryImpl = Depends(),
        pet_repository: PetRepositoryImpl = Depends(),
        pet_order_repository: PetOrderRepositoryImpl = Depends(),
        product_repository: ProductRepositoryImpl = Depends(),
        order_repository: OrderRepositoryImpl = Depends(),
    ):
        self.user_repository = user_repository
        self.caregiver_repository = caregiver_repository
        self.pet_repository = pet_repository
        self.pet_order_repository = pet_order_repository
        self.product_repository = product_repository
        self.order_repository = order_repository

    async def dashboard_stats(self) -> Dict[str, Any]:
        """Headline counts; earnings are the sum of COMPLETED store orders."""
        stats = DashboardStats(
            user_count=await self.user_repository.count(),
            available_pets_count=await self.pet_repository.count_available(),
            caregiver_count=await self.caregiver_repository.count(),
            pet_orders_count=await self.pet_order_repository.count(),
            total_products=await self.product_repository.count(),
            total_orders=await self.order_repository.count(),
            total_earnings=round(await self.order_repository.completed_revenue(), 2),
        )
        return stats.to_json()

    async def list_users(self) -> List[Dict[str, Any]]:
        users = await self.user_repository.list_all()
        return [UserAdminSummary.model_validate(user).to_json() for user in users]

    async def list_caregivers(self) -> List[Dict[str, Any]]:
        caregivers = await self.caregiver_repository.list_all()
        return [CaregiverResponse.model_validate(caregiver).to_json() for caregiver in caregivers]

    async def verify_caregiver(self, admin_id: str, caregiver_id: str, verified: Optional[bool]) -> Dict[str, Any]:
        if verified is None:
            raise ValidationError("Missing required field: verified", field="verified")

        caregiver = await self.caregiver_repository.get_by_id(caregiver_id)
        if caregiver is None:
            raise NotFoundError("Caregiver not found", resource_type="caregiver", resource_id=caregiver_id)

        caregiver = await self.caregiver_repository.update(caregiver, {"verified": verified})
        logger.log_user_action("verify_caregiver", admin_id, resource=caregiver_id, verified=verified)
        return CaregiverVerification.model_validate(caregiver).to_json()
