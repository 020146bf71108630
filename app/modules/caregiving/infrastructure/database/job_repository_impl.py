# 📄 File: app/modules/caregiving/infrastructure/database/job_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves pet-sitting jobs and the applications caregivers send for them, and answers questions
# like "which open jobs has this caregiver not applied to yet?".
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repositories for `job_posts` and `job_applications`. Posts load their poster and
# selected caregiver eagerly; applications load their caregiver and job post.
#
# 🔄 Connected Modules / Calls From:
# - JobService, CaregiverDirectoryService, ReviewService

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.caregiving.infrastructure.database.models import (
    ApplicationStatus,
    JobApplicationModel,
    JobPostModel,
    JobStatus,
)
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class JobPostRepositoryImpl:
    """SQLAlchemy repository for job posts."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, **fields: Any) -> JobPostModel:
        job = JobPostModel(**fields)
        self._session.add(job)
        await self._session.flush()
        logger.info(f"Created job post {job.id} for user {job.user_id}")
        return await self.get_by_id(job.id)

    async def get_by_id(self, job_id: str) -> Optional[JobPostModel]:
        stmt = select(JobPostModel).where(JobPostModel.id == job_id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def list_all(self, user_id: Optional[str] = None) -> List[JobPostModel]:
        """Job posts, newest first; only `user_id`'s when given."""
        stmt = select(JobPostModel).order_by(JobPostModel.created_at.desc())
        if user_id:
            stmt = stmt.where(JobPostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_open(self, exclude_ids: Iterable[str] = ()) -> List[JobPostModel]:
        stmt = (
            select(JobPostModel)
            .where(JobPostModel.status == JobStatus.OPEN)
            .order_by(JobPostModel.created_at.desc())
        )
        exclude_ids = list(exclude_ids)
        if exclude_ids:
            stmt = stmt.where(JobPostModel.id.not_in(exclude_ids))
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def application_counts(self, job_ids: Iterable[str]) -> Dict[str, int]:
        job_ids = list(job_ids)
        if not job_ids:
            return {}
        stmt = (
            select(JobApplicationModel.job_post_id, func.count(JobApplicationModel.id))
            .where(JobApplicationModel.job_post_id.in_(job_ids))
            .group_by(JobApplicationModel.job_post_id)
        )
        result = await self._session.execute(stmt)
        return {job_id: count for job_id, count in result.all()}

    async def update(self, job: JobPostModel, fields: Dict[str, Any]) -> JobPostModel:
        for key, value in fields.items():
            setattr(job, key, value)
        await self._session.flush()
        return await self.get_by_id(job.id)

    async def delete(self, job: JobPostModel) -> None:
        """Delete a job post and its applications."""
        await self._session.execute(delete(JobApplicationModel).where(JobApplicationModel.job_post_id == job.id))
        await self._session.delete(job)
        await self._session.flush()
        logger.info(f"Deleted job post {job.id}")


class JobApplicationRepositoryImpl:
    """SQLAlchemy repository for job applications."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, caregiver_id: str, job_post_id: str, proposal: str, requested_amount: float) -> JobApplicationModel:
        application = JobApplicationModel(
            caregiver_id=caregiver_id,
            job_post_id=job_post_id,
            proposal=proposal,
            requested_amount=requested_amount,
        )
        self._session.add(application)
        await self._session.flush()
        return await self.get_by_id(application.id)

    async def get_by_id(self, application_id: str) -> Optional[JobApplicationModel]:
        stmt = (
            select(JobApplicationModel)
            .where(JobApplicationModel.id == application_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def find(self, caregiver_id: str, job_post_id: str) -> Optional[JobApplicationModel]:
        stmt = select(JobApplicationModel).where(
            JobApplicationModel.caregiver_id == caregiver_id,
            JobApplicationModel.job_post_id == job_post_id,
        )
        result = await self._session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def list_for_job(self, job_post_id: str) -> List[JobApplicationModel]:
        """Applications of a job, first applied first."""
        stmt = (
            select(JobApplicationModel)
            .where(JobApplicationModel.job_post_id == job_post_id)
            .order_by(JobApplicationModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_for_caregiver(self, caregiver_id: str, statuses: Optional[Iterable[str]] = None) -> List[JobApplicationModel]:
        """A caregiver's applications with their job post, newest first."""
        stmt = (
            select(JobApplicationModel)
            .where(JobApplicationModel.caregiver_id == caregiver_id)
            .order_by(JobApplicationModel.created_at.desc())
        )
        if statuses is not None:
            stmt = stmt.where(JobApplicationModel.status.in_(list(statuses)))
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def applied_job_ids(self, caregiver_id: str) -> List[str]:
        stmt = select(JobApplicationModel.job_post_id).where(JobApplicationModel.caregiver_id == caregiver_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def accepted_for_job(self, job_post_id: str) -> Optional[JobApplicationModel]:
        stmt = select(JobApplicationModel).where(
            JobApplicationModel.job_post_id == job_post_id,
            JobApplicationModel.status == ApplicationStatus.ACCEPTED,
        )
        result = await self._session.execute(stmt)
        return result.unique().scalars().first()

    async def accept_only(self, application: JobApplicationModel) -> None:
        """Accept `application` and reject every other application of its job."""
        await self._session.execute(
            update(JobApplicationModel)
            .where(
                JobApplicationModel.job_post_id == application.job_post_id,
                JobApplicationModel.id != application.id,
            )
            .values(status=ApplicationStatus.REJECTED)
            .execution_options(synchronize_session="fetch")
        )
        application.status = ApplicationStatus.ACCEPTED
        await self._session.flush()

    async def set_status(self, application: JobApplicationModel, status: str) -> JobApplicationModel:
        application.status = status
        await self._session.flush()
        return application

    async def list_completed_for_caregiver(self, caregiver_id: str) -> List[JobApplicationModel]:
        """Accepted or completed applications whose job is CLOSED with this caregiver selected."""
        stmt = (
            select(JobApplicationModel)
            .join(JobPostModel, JobPostModel.id == JobApplicationModel.job_post_id)
            .where(
                JobApplicationModel.caregiver_id == caregiver_id,
                JobApplicationModel.status.in_([ApplicationStatus.ACCEPTED, ApplicationStatus.COMPLETED]),
                JobPostModel.status == JobStatus.CLOSED,
                JobPostModel.selected_caregiver_id == caregiver_id,
            )
            .order_by(JobApplicationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_schedule(self, caregiver_id: str) -> List[JobApplicationModel]:
        """Accepted or completed applications of jobs where the caregiver is selected."""
        stmt = (
            select(JobApplicationModel)
            .join(JobPostModel, JobPostModel.id == JobApplicationModel.job_post_id)
            .where(
                JobApplicationModel.caregiver_id == caregiver_id,
                JobApplicationModel.status.in_([ApplicationStatus.ACCEPTED, ApplicationStatus.COMPLETED]),
                JobPostModel.selected_caregiver_id == caregiver_id,
            )
            .order_by(JobPostModel.start_date.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())
