"""
Public caregiver pages, mounted under /api/caregivers/caregivers.
No authentication: owners browse these before hiring.
"""

from fastapi import APIRouter, Depends

from app.modules.caregiving.domain.services.review_service import ReviewService

caregiver_directory_router = APIRouter()


@caregiver_directory_router.get("/{caregiver_id}", summary="Public caregiver profile")
async def get_caregiver_profile(caregiver_id: str, service: ReviewService = Depends()) -> dict:
    return await service.public_profile(caregiver_id)


@caregiver_directory_router.get("/{caregiver_id}/schedule", summary="Caregiver work calendar")
async def get_caregiver_schedule(caregiver_id: str, service: ReviewService = Depends()) -> dict:
    return {"jobs": await service.schedule(caregiver_id)}
