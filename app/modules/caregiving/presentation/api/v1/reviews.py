"""
Caregiver review endpoints, mounted under /api/users/reviews.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.caregiving.domain.services.review_service import ReviewService
from app.modules.caregiving.presentation.api.schemas.job_schemas import CreateReviewRequest, ReviewWithUser
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump, dump_many

reviews_router = APIRouter()


@reviews_router.get("", summary="Reviews of a caregiver")
async def list_reviews(
    caregiver_id: Optional[str] = Query(default=None, alias="caregiverId"),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ReviewService = Depends(),
) -> dict:
    reviews = await service.list_reviews(caregiver_id)
    return {"reviews": dump_many(ReviewWithUser, reviews)}


@reviews_router.post("", status_code=status.HTTP_201_CREATED, summary="Review a caregiver")
async def create_review(
    payload: CreateReviewRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: ReviewService = Depends(),
) -> dict:
    review = await service.submit_review(principal.id, payload.caregiver_id, payload.rating, payload.comment)
    return {"review": dump(ReviewWithUser, review)}
