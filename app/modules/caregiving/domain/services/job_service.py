# 📄 File: app/modules/caregiving/domain/services/job_service.py
# 🧭 Purpose (Layman Explanation):
# Runs the pet-sitting job board: owners post jobs and pick a caregiver, caregivers browse jobs
# near them and apply, and finishing a job pays the caregiver.
#
# 🧪 Purpose (Technical Summary):
# Domain service for the job post lifecycle (OPEN -> ONGOING -> CLOSED) and job applications.
# Owner-only actions are checked against the caller's id; selecting a caregiver accepts one
# application and rejects the rest; ending a job completes the accepted application and adds
# its requested amount to the caregiver's earnings. Notifications are written in the same unit
# of work.
#
# 🔗 Dependencies:
# - JobPostRepositoryImpl, JobApplicationRepositoryImpl, ReviewRepositoryImpl
# - accounts CaregiverRepositoryImpl, NotificationService
#
# 🔄 Connected Modules / Calls From:
# - user jobs router, caregiver jobs router

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.accounts.infrastructure.database.caregiver_repository_impl import CaregiverRepositoryImpl
from app.modules.caregiving.infrastructure.database.job_repository_impl import (
    JobApplicationRepositoryImpl,
    JobPostRepositoryImpl,
)
from app.modules.caregiving.infrastructure.database.models import (
    ApplicationStatus,
    JobApplicationModel,
    JobPostModel,
    JobStatus,
)
from app.modules.caregiving.infrastructure.database.review_repository_impl import ReviewRepositoryImpl
from app.modules.caregiving.presentation.api.schemas.job_schemas import (
    ApplicationWithCaregiver,
    ApplicationWithJob,
    JobPostDetail,
    JobPostListItem,
    RatedCaregiver,
    ReviewWithUser,
    SelectedCaregiver,
)
from app.modules.notifications.domain.services.notification_service import NotificationService
from app.modules.notifications.infrastructure.database.models import NotificationType
from app.shared.core.exceptions import AuthorizationError, BusinessRuleViolationError, NotFoundError, ValidationError
from app.shared.utils.formatters import average
from app.shared.utils.helpers import as_utc, same_location
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import require_fields

logger = get_logger(__name__)

JOB_NOT_FOUND_MESSAGE = "Job post not found"
JOB_REQUIRED_FIELDS = ("title", "description", "city", "area", "startDate", "endDate", "priceRangeLow", "priceRangeHigh")
APPLY_REQUIRED_FIELDS = ("jobPostId", "proposal", "requestedAmount")


class JobAction:
    SELECT_CAREGIVER = "select_caregiver"
    END_JOB = "end_job"
    CANCEL_JOB = "cancel_job"


class JobService:
    """
    Domain service for job posts and applications.

    Business rules:
    - Only the poster may act on or delete a job
    - Only OPEN jobs accept applications, once per caregiver
    - A job can be deleted only while OPEN with no caregiver selected
    """

    def __init__(
        self,
        job_repository: JobPostRepositoryImpl = Depends(),
        application_repository: JobApplicationRepositoryImpl = Depends(),
        review_repository: ReviewRepositoryImpl = Depends(),
        caregiver_repository: CaregiverRepositoryImpl = Depends(),
        notification_service: NotificationService = Depends(),
    ):
        self.job_repository = job_repository
        self.application_repository = application_repository
        self.review_repository = review_repository
        self.caregiver_repository = caregiver_repository
        self.notification_service = notification_service

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_job(self, job_id: str) -> JobPostModel:
        job = await self.job_repository.get_by_id(job_id)
        if job is None:
            raise NotFoundError(JOB_NOT_FOUND_MESSAGE, resource_type="job_post", resource_id=job_id)
        return job

    async def _get_owned_job(self, user_id: str, job_id: str) -> JobPostModel:
        job = await self._get_job(job_id)
        if job.user_id != user_id:
            raise AuthorizationError("Unauthorized: You don't own this job post", resource_type="job_post", resource_id=job_id)
        return job

    async def _list_items(self, jobs: List[JobPostModel]) -> List[Dict[str, Any]]:
        counts = await self.job_repository.application_counts(job.id for job in jobs)
        return [
            JobPostListItem.model_validate(job).model_copy(update={"application_count": counts.get(job.id, 0)}).to_json()
            for job in jobs
        ]

    # ------------------------------------------------------------------
    # Owner side
    # ------------------------------------------------------------------

    async def list_jobs(self, user_id: str, user_only: bool = False) -> List[Dict[str, Any]]:
        jobs = await self.job_repository.list_all(user_id if user_only else None)
        return await self._list_items(jobs)

    async def create_job(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Post a new OPEN job.

        Args:
            data: camelCase request fields

        Raises:
            ValidationError: Missing field, inverted price range or end before start
        """
        require_fields(data, JOB_REQUIRED_FIELDS)
        if data["priceRangeLow"] < 0 or data["priceRangeHigh"] < 0:
            raise ValidationError("Price range cannot be negative", field="priceRangeLow")
        if data["priceRangeLow"] > data["priceRangeHigh"]:
            raise ValidationError("Price range low cannot exceed price range high", field="priceRangeLow")

        start_date, end_date = as_utc(data["startDate"]), as_utc(data["endDate"])
        if end_date < start_date:
            raise ValidationError("End date cannot be before start date", field="endDate")

        job = await self.job_repository.create(
            title=data["title"].strip(),
            description=data["description"].strip(),
            tags=data.get("tags") or [],
            country=data.get("country"),
            city=data["city"].strip(),
            area=data["area"].strip(),
            price_range_low=data["priceRangeLow"],
            price_range_high=data["priceRangeHigh"],
            start_date=start_date,
            end_date=end_date,
            user_id=user_id,
        )
        logger.log_business_event("job_posted", f"Job post {job.id} created", entity_id=job.id)
        return JobPostListItem.model_validate(job).to_json()

    async def get_job_detail(self, job_id: str) -> Dict[str, Any]:
        """Job post with its applications (first applied first) and the selected caregiver's reviews."""
        job = await self._get_job(job_id)
        applications = await self.application_repository.list_for_job(job.id)

        caregiver_ids = [application.caregiver_id for application in applications]
        if job.selected_caregiver_id:
            caregiver_ids.append(job.selected_caregiver_id)
        ratings = await self.review_repository.average_ratings(caregiver_ids)

        application_items = [
            ApplicationWithCaregiver.model_validate(application).model_copy(
                update={
                    "caregiver": RatedCaregiver.model_validate(application.caregiver).model_copy(
                        update={"average_rating": ratings.get(application.caregiver_id, 0)}
                    )
                }
            )
            for application in applications
        ]

        selected = None
        if job.selected_caregiver is not None:
            reviews = await self.review_repository.list_for_caregiver(job.selected_caregiver_id)
            selected = SelectedCaregiver.model_validate(job.selected_caregiver).model_copy(
                update={
                    "average_rating": average(review.rating for review in reviews),
                    "reviews": [ReviewWithUser.model_validate(review) for review in reviews],
                }
            )

        detail = JobPostDetail.model_validate(job).model_copy(
            update={
                "application_count": len(applications),
                "applications": application_items,
                "selected_caregiver": selected,
            }
        )
        return detail.to_json()

    async def perform_action(
        self,
        user_id: str,
        job_id: str,
        action: Optional[str],
        application_id: Optional[str] = None,
        caregiver_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Apply an owner action to a job.

        Raises:
            AuthorizationError: Caller does not own the job
            ValidationError: Unknown action or missing application
            BusinessRuleViolationError: Ending a job without an accepted application
        """
        job = await self._get_owned_job(user_id, job_id)

        if action == JobAction.SELECT_CAREGIVER:
            job = await self._select_caregiver(job, application_id, caregiver_id)
        elif action == JobAction.END_JOB:
            job = await self._end_job(job)
        elif action == JobAction.CANCEL_JOB:
            job = await self.job_repository.update(job, {"status": JobStatus.CLOSED})
            logger.log_business_event("job_cancelled", f"Job post {job.id} cancelled", entity_id=job.id)
        else:
            raise ValidationError("Invalid action", field="action")

        return JobPostListItem.model_validate(job).to_json()

    async def _select_caregiver(
        self, job: JobPostModel, application_id: Optional[str], caregiver_id: Optional[str]
    ) -> JobPostModel:
        if job.status != JobStatus.OPEN:
            raise BusinessRuleViolationError("Caregivers can only be selected for open jobs", rule="select_caregiver")

        if application_id:
            application = await self.application_repository.get_by_id(application_id)
        elif caregiver_id:
            application = await self.application_repository.find(caregiver_id, job.id)
        else:
            raise ValidationError("Application ID is required", field="applicationId")

        if application is None or application.job_post_id != job.id:
            raise NotFoundError("Application not found", resource_type="job_application")

        await self.application_repository.accept_only(application)
        job = await self.job_repository.update(
            job,
            {"selected_caregiver_id": application.caregiver_id, "status": JobStatus.ONGOING},
        )

        await self.notification_service.notify(
            application.caregiver_id,
            NotificationType.JOB_ACCEPTED,
            f"Your application for \"{job.title}\" has been accepted!",
        )
        logger.log_business_event(
            "caregiver_selected", f"Caregiver {application.caregiver_id} selected for job {job.id}", entity_id=job.id
        )
        return job

    async def _end_job(self, job: JobPostModel) -> JobPostModel:
        accepted = await self.application_repository.accepted_for_job(job.id)
        if not job.selected_caregiver_id or accepted is None:
            raise BusinessRuleViolationError("Job post not found or no caregiver selected", rule="end_job")
        if job.status != JobStatus.ONGOING:
            raise BusinessRuleViolationError("Only ongoing jobs can be ended", rule="end_job")

        await self.application_repository.set_status(accepted, ApplicationStatus.COMPLETED)
        caregiver = await self.caregiver_repository.get_by_id(job.selected_caregiver_id)
        await self.caregiver_repository.add_earnings(caregiver, accepted.requested_amount)

        job = await self.job_repository.update(job, {"status": JobStatus.CLOSED})
        logger.log_business_event(
            "job_completed", f"Job post {job.id} completed", entity_id=job.id, amount=accepted.requested_amount
        )
        return job

    async def delete_job(self, user_id: str, job_id: str) -> None:
        job = await self._get_owned_job(user_id, job_id)
        if job.status != JobStatus.OPEN or job.selected_caregiver_id:
            raise BusinessRuleViolationError(
                "Cannot delete job: Job is not open or has a selected caregiver", rule="delete_job"
            )
        await self.job_repository.delete(job)

    # ------------------------------------------------------------------
    # Caregiver side
    # ------------------------------------------------------------------

    async def caregiver_jobs(self, caregiver_id: str, applied_only: bool = False) -> Dict[str, Any]:
        """
        Either the caregiver's applications, or the OPEN jobs not yet applied to split into
        local (same city and area) and other jobs.
        """
        if applied_only:
            applications = await self.application_repository.list_for_caregiver(caregiver_id)
            counts = await self.job_repository.application_counts(a.job_post_id for a in applications)
            return {
                "applications": [
                    ApplicationWithJob.model_validate(application).model_copy(
                        update={
                            "job_post": JobPostListItem.model_validate(application.job_post).model_copy(
                                update={"application_count": counts.get(application.job_post_id, 0)}
                            )
                        }
                    ).to_json()
                    for application in applications
                ]
            }

        caregiver = await self.caregiver_repository.get_by_id(caregiver_id)
        if caregiver is None:
            raise NotFoundError("Caregiver not found", resource_type="caregiver", resource_id=caregiver_id)

        applied = await self.application_repository.applied_job_ids(caregiver_id)
        jobs = await self.job_repository.list_open(exclude_ids=applied)
        local = [job for job in jobs if same_location(job.city, job.area, caregiver.city, caregiver.area)]
        other = [job for job in jobs if job not in local]

        return {
            "localJobs": await self._list_items(local),
            "otherJobs": await self._list_items(other),
        }

    async def get_job_for_caregiver(self, job_id: str) -> Dict[str, Any]:
        job = await self._get_job(job_id)
        items = await self._list_items([job])
        return items[0]

    async def apply(self, caregiver_id: str, data: Dict[str, Any]) -> JobApplicationModel:
        """
        Apply to an OPEN job and notify its poster.

        Raises:
            NotFoundError: Unknown job
            BusinessRuleViolationError: Job not OPEN or already applied
        """
        require_fields(data, APPLY_REQUIRED_FIELDS)
        if data["requestedAmount"] < 0:
            raise ValidationError("Requested amount cannot be negative", field="requestedAmount")

        job = await self._get_job(data["jobPostId"])
        if job.status != JobStatus.OPEN:
            raise BusinessRuleViolationError("This job is no longer accepting applications", rule="job_open")

        if await self.application_repository.find(caregiver_id, job.id):
            raise BusinessRuleViolationError("You have already applied to this job", rule="single_application")

        application = await self.application_repository.create(
            caregiver_id, job.id, data["proposal"].strip(), data["requestedAmount"]
        )
        await self.notification_service.notify(
            job.user_id,
            NotificationType.JOB_APPLICATION,
            f"{application.caregiver.name} has applied for your job: {job.title}",
        )
        logger.log_user_action("apply_job", caregiver_id, resource=job.id)
        return application
