# 📄 File: app/modules/caregiving/domain/services/review_service.py
# 🧭 Purpose (Layman Explanation):
# Lets owners review caregivers who finished a job for them, and shows everyone a caregiver's
# public profile and work calendar.
#
# 🧪 Purpose (Technical Summary):
# Domain service for caregiver reviews (one per owner and caregiver, upserted, only after a
# CLOSED job with that caregiver) and the public caregiver profile and schedule.
#
# 🔗 Dependencies:
# - ReviewRepositoryImpl, JobApplicationRepositoryImpl, accounts CaregiverRepositoryImpl
#
# 🔄 Connected Modules / Calls From:
# - reviews router, public caregiver router

from typing import Any, Dict, List, Optional

from fastapi import Depends

from app.modules.accounts.infrastructure.database.caregiver_repository_impl import CaregiverRepositoryImpl
from app.modules.accounts.infrastructure.database.models import CaregiverModel
from app.modules.caregiving.infrastructure.database.job_repository_impl import JobApplicationRepositoryImpl
from app.modules.caregiving.infrastructure.database.models import ReviewModel
from app.modules.caregiving.infrastructure.database.review_repository_impl import ReviewRepositoryImpl
from app.modules.caregiving.presentation.api.schemas.job_schemas import (
    ApplicationWithJob,
    PublicCaregiverProfile,
    ReviewWithUser,
    ScheduleEntry,
)
from app.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.shared.utils.formatters import average, format_location
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import validate_rating

logger = get_logger(__name__)

SCHEDULE_COLORS = ("teal", "pink", "purple", "blue")
SCHEDULE_TIME = "Full day"


class ReviewService:
    """Domain service for caregiver reviews and public caregiver pages."""

    def __init__(
        self,
        review_repository: ReviewRepositoryImpl = Depends(),
        application_repository: JobApplicationRepositoryImpl = Depends(),
        caregiver_repository: CaregiverRepositoryImpl = Depends(),
    ):
        self.review_repository = review_repository
        self.application_repository = application_repository
        self.caregiver_repository = caregiver_repository

    async def _get_caregiver(self, caregiver_id: str) -> CaregiverModel:
        caregiver = await self.caregiver_repository.get_by_id(caregiver_id)
        if caregiver is None:
            raise NotFoundError("Caregiver not found", resource_type="caregiver", resource_id=caregiver_id)
        return caregiver

    async def list_reviews(self, caregiver_id: Optional[str]) -> List[ReviewModel]:
        if not caregiver_id:
            raise ValidationError("Caregiver ID is required", field="caregiverId")
        return await self.review_repository.list_for_caregiver(caregiver_id)

    async def submit_review(
        self, user_id: str, caregiver_id: Optional[str], rating: Any, comment: Optional[str]
    ) -> ReviewModel:
        """
        Create or replace the caller's review of a caregiver.

        Raises:
            ValidationError: Missing caregiver or rating outside 1..5
            NotFoundError: Unknown caregiver
            AuthorizationError: No CLOSED job of the caller with this caregiver selected
        """
        if not caregiver_id:
            raise ValidationError("Caregiver ID is required", field="caregiverId")
        rating = validate_rating(rating)
        await self._get_caregiver(caregiver_id)

        if not await self.review_repository.has_closed_job(user_id, caregiver_id):
            raise AuthorizationError(
                "You can only review caregivers who completed a job for you", resource_type="caregiver"
            )

        review = await self.review_repository.upsert(user_id, caregiver_id, rating, comment)
        logger.log_user_action("review_caregiver", user_id, resource=caregiver_id, rating=rating)
        return review

    async def public_profile(self, caregiver_id: str) -> Dict[str, Any]:
        """Caregiver profile with reviews, average rating and completed jobs."""
        caregiver = await self._get_caregiver(caregiver_id)
        reviews = await self.review_repository.list_for_caregiver(caregiver_id)
        completed = await self.application_repository.list_completed_for_caregiver(caregiver_id)

        return {
            "caregiver": PublicCaregiverProfile.model_validate(caregiver).to_json(),
            "reviews": [ReviewWithUser.model_validate(review).to_json() for review in reviews],
            "averageRating": average(review.rating for review in reviews),
            "completedJobs": [
                ApplicationWithJob.model_validate(application).to_json() for application in completed
            ],
        }

    async def schedule(self, caregiver_id: str) -> List[Dict[str, Any]]:
        """Calendar entries for the jobs the caregiver was selected for, one color per job."""
        await self._get_caregiver(caregiver_id)
        applications = await self.application_repository.list_schedule(caregiver_id)

        colors: Dict[str, str] = {}
        entries = []
        for application in applications:
            job = application.job_post
            if job.id not in colors:
                colors[job.id] = SCHEDULE_COLORS[len(colors) % len(SCHEDULE_COLORS)]
            entries.append(
                ScheduleEntry(
                    id=job.id,
                    title=job.title,
                    start_date=job.start_date,
                    end_date=job.end_date,
                    description=job.description,
                    location=format_location(job.area, job.city),
                    status=job.status,
                    amount=application.requested_amount,
                    client=job.user.name,
                    time=SCHEDULE_TIME,
                    color=colors[job.id],
                ).to_json()
            )
        return entries
