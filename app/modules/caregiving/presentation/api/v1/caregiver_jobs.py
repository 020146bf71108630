# 📄 File: app/modules/caregiving/presentation/api/v1/caregiver_jobs.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints caregivers use to find jobs near them and apply.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/caregivers/jobs (role caregiver).
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.caregiving.domain.services.job_service import JobService
from app.modules.caregiving.presentation.api.schemas.job_schemas import ApplicationWithJob, ApplyRequest
from app.shared.core.dependencies import CurrentPrincipal, get_current_caregiver
from app.shared.core.schemas import dump

caregiver_jobs_router = APIRouter()


@caregiver_jobs_router.get("", summary="Open jobs or the caller's applications")
async def list_jobs(
    applied_only: Optional[str] = Query(default=None, alias="appliedOnly"),
    principal: CurrentPrincipal = Depends(get_current_caregiver),
    service: JobService = Depends(),
) -> dict:
    return await service.caregiver_jobs(principal.id, applied_only=applied_only == "true")


@caregiver_jobs_router.post("/apply", status_code=status.HTTP_201_CREATED, summary="Apply to a job")
async def apply_to_job(
    payload: ApplyRequest,
    principal: CurrentPrincipal = Depends(get_current_caregiver),
    service: JobService = Depends(),
) -> dict:
    application = await service.apply(principal.id, payload.model_dump(by_alias=True))
    return {"application": dump(ApplicationWithJob, application)}


@caregiver_jobs_router.get("/{job_id}", summary="Job post details")
async def get_job(
    job_id: str,
    principal: CurrentPrincipal = Depends(get_current_caregiver),
    service: JobService = Depends(),
) -> dict:
    return {"jobPost": await service.get_job_for_caregiver(job_id)}
