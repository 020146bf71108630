# 📄 File: app/modules/caregiving/presentation/api/v1/user_jobs.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints owners use to post pet-sitting jobs, review applicants and close jobs.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/jobs (role user).
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.caregiving.domain.services.job_service import JobService
from app.modules.caregiving.presentation.api.schemas.job_schemas import CreateJobPostRequest, JobActionRequest
from app.shared.core.dependencies import CurrentPrincipal, get_current_user

user_jobs_router = APIRouter()


@user_jobs_router.get("", summary="List job posts")
async def list_jobs(
    user_only: Optional[str] = Query(default=None, alias="userOnly"),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: JobService = Depends(),
) -> dict:
    """All job posts, or only the caller's with `userOnly=true`."""
    jobs = await service.list_jobs(principal.id, user_only=user_only == "true")
    return {"jobPosts": jobs}


@user_jobs_router.post("", status_code=status.HTTP_201_CREATED, summary="Post a job")
async def create_job(
    payload: CreateJobPostRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: JobService = Depends(),
) -> dict:
    job = await service.create_job(principal.id, payload.model_dump(by_alias=True))
    return {"jobPost": job}


@user_jobs_router.get("/{job_id}", summary="Job post with applications")
async def get_job(
    job_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: JobService = Depends(),
) -> dict:
    return {"jobPost": await service.get_job_detail(job_id)}


@user_jobs_router.put("/{job_id}", summary="Select a caregiver, end or cancel a job")
async def update_job(
    job_id: str,
    payload: JobActionRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: JobService = Depends(),
) -> dict:
    result = await service.perform_action(
        principal.id,
        job_id,
        payload.action,
        application_id=payload.application_id,
        caregiver_id=payload.caregiver_id,
    )
    return {"success": True, "result": result}


@user_jobs_router.delete("/{job_id}", summary="Delete an open job")
async def delete_job(
    job_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: JobService = Depends(),
) -> dict:
    await service.delete_job(principal.id, job_id)
    return {"success": True}
