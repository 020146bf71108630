# 📄 File: app/modules/vet_care/domain/services/vet_service.py
# 🧭 Purpose (Layman Explanation):
# Shows owners the vets near them and lets them book and review their vet appointments.
#
# 🧪 Purpose (Technical Summary):
# Domain service for the vet directory (nearby vets share the owner's city and area, ignoring
# case) and appointment booking.
#
# 🔗 Dependencies:
# - VetRepositoryImpl, AppointmentRepositoryImpl, accounts UserRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - vet info and appointments routers

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.accounts.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.modules.vet_care.infrastructure.database.vet_repository_impl import (
    AppointmentRepositoryImpl,
    VetRepositoryImpl,
)
from app.modules.vet_care.presentation.api.schemas.vet_schemas import AppointmentResponse, VetDoctorResponse
from app.shared.core.exceptions import NotFoundError, ValidationError
from app.shared.utils.helpers import as_utc, normalize_location
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


class VetService:
    """Domain service for vets and appointments."""

    def __init__(
        self,
        vet_repository: VetRepositoryImpl = Depends(),
        appointment_repository: AppointmentRepositoryImpl = Depends(),
        user_repository: UserRepositoryImpl = Depends(),
    ):
        self.vet_repository = vet_repository
        self.appointment_repository = appointment_repository
        self.user_repository = user_repository

    async def vet_info(self, user_id: str) -> Dict[str, List[Dict[str, Any]]]:
        """All vets, plus the ones in the caller's city and area."""
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)

        all_vets = await self.vet_repository.list_all()
        city, area = normalize_location(user.city), normalize_location(user.area)
        nearby = await self.vet_repository.list_in_area(city, area) if city and area else []

        return {
            "nearbyVets": [VetDoctorResponse.model_validate(vet).to_json() for vet in nearby],
            "allVets": [VetDoctorResponse.model_validate(vet).to_json() for vet in all_vets],
        }

    async def create_appointment(
        self,
        user_id: str,
        vet_id: Optional[str],
        date: Optional[datetime],
        time: Optional[str],
        reason: Optional[str],
    ) -> Dict[str, Any]:
        if not vet_id or date is None or not time or not reason:
            raise ValidationError("Bad Request: Missing required fields")

        vet = await self.vet_repository.get_by_id(vet_id)
        if vet is None:
            raise NotFoundError("Vet not found", resource_type="vet", resource_id=vet_id)

        appointment = await self.appointment_repository.create(user_id, vet_id, as_utc(date), time, reason)
        logger.log_user_action("book_appointment", user_id, resource=vet_id)
        return AppointmentResponse.model_validate(appointment).to_json()

    async def list_appointments(self, user_id: str) -> List[Dict[str, Any]]:
        appointments = await self.appointment_repository.list_for_user(user_id)
        return [AppointmentResponse.model_validate(appointment).to_json() for appointment in appointments]
