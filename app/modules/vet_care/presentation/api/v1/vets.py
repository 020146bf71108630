# 📄 File: app/modules/vet_care/presentation/api/v1/vets.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for finding vets and booking appointments.
#
# 🧪 Purpose (Technical Summary):
# FastAPI routers mounted under /api/users/vetinfo and /api/users/appointments (role user).
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from fastapi import APIRouter, Depends, status

from app.modules.vet_care.domain.services.vet_service import VetService
from app.modules.vet_care.presentation.api.schemas.vet_schemas import CreateAppointmentRequest
from app.shared.core.dependencies import CurrentPrincipal, get_current_user

vet_info_router = APIRouter()
appointments_router = APIRouter()


@vet_info_router.get("", summary="Vets near the caller and all vets")
async def vet_info(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: VetService = Depends(),
) -> dict:
    vets = await service.vet_info(principal.id)
    return {"message": "Vet information retrieved successfully", **vets}


@appointments_router.post("", status_code=status.HTTP_201_CREATED, summary="Book a vet appointment")
async def create_appointment(
    payload: CreateAppointmentRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: VetService = Depends(),
) -> dict:
    appointment = await service.create_appointment(
        principal.id, payload.vet_id, payload.date, payload.time, payload.reason
    )
    return {"message": "Appointment created successfully", "appointment": appointment}


@appointments_router.get("", summary="The caller's appointments")
async def list_appointments(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: VetService = Depends(),
) -> dict:
    appointments = await service.list_appointments(principal.id)
    return {"message": "Appointments retrieved successfully", "appointments": appointments}
