# 📄 File: app/modules/community/presentation/api/v1/donation_posts.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for offering pets for adoption, applying to adopt them and seeing planned
# adoption meetings.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/donation (role user). Fixed paths (`/meetings`,
# `/application/...`) are declared before `/{post_id}`.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.community.domain.services.donation_post_service import DonationPostService
from app.modules.community.presentation.api.schemas.community_schemas import (
    AdoptionRequest,
    CommentRequest,
    CommentResponse,
    CreateDonationPostRequest,
    UpdateDonationPostRequest,
)
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump

donation_posts_router = APIRouter()


@donation_posts_router.get("", summary="List donation posts")
async def list_posts(
    city: Optional[str] = Query(default=None),
    area: Optional[str] = Query(default=None),
    mine: Optional[str] = Query(default=None),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    """All posts, the caller's with `mine=true`, or the available ones of an area."""
    posts = await service.list_posts(principal.id, city=city, area=area, mine=mine == "true")
    return {"message": "Donation posts retrieved successfully", "posts": posts}


@donation_posts_router.post("", status_code=status.HTTP_201_CREATED, summary="Offer a pet for adoption")
async def create_post(
    payload: CreateDonationPostRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    post = await service.create_post(principal.id, payload.model_dump(by_alias=True))
    return {"message": "Donation post created successfully", "post": post}


@donation_posts_router.get("/meetings", summary="Accepted adoption meetings")
async def meetings(
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    return await service.meetings(principal.id)


@donation_posts_router.put("/application/{form_id}/accept", summary="Accept an adoption application")
async def accept_application(
    form_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    form = await service.accept_application(principal.id, form_id)
    return {"message": "Adoption application accepted successfully", "adoptionForm": form}


@donation_posts_router.get("/{post_id}", summary="Donation post with comments and applications")
async def get_post(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    result = await service.get_post(principal.id, post_id)
    return {"message": "Post retrieved successfully", **result}


@donation_posts_router.put("/{post_id}", summary="Update a donation post")
async def update_post(
    post_id: str,
    payload: UpdateDonationPostRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    post = await service.update_post(principal.id, post_id, payload.model_dump(by_alias=True))
    return {"message": "Post updated successfully", "post": post}


@donation_posts_router.delete("/{post_id}", summary="Delete a donation post")
async def delete_post(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    await service.delete_post(principal.id, post_id)
    return {"message": "Post deleted successfully"}


@donation_posts_router.post("/{post_id}/upvote", summary="Upvote a donation post")
async def upvote(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    count = await service.upvote(principal.id, post_id)
    return {"message": "Post upvoted successfully", "upvotesCount": count}


@donation_posts_router.post("/{post_id}/remove-upvote", summary="Remove an upvote")
async def remove_upvote(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    count = await service.remove_upvote(principal.id, post_id)
    return {"message": "Upvote removed successfully", "upvotesCount": count}


@donation_posts_router.post("/{post_id}/comment", status_code=status.HTTP_201_CREATED, summary="Comment on a post")
async def add_comment(
    post_id: str,
    payload: CommentRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    comment = await service.add_comment(principal.id, post_id, payload.content)
    return {"message": "Comment added successfully", "comment": dump(CommentResponse, comment)}


@donation_posts_router.delete("/{post_id}/comment/{comment_id}", summary="Delete own comment")
async def delete_comment(
    post_id: str,
    comment_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    await service.delete_comment(principal.id, post_id, comment_id)
    return {"message": "Comment deleted successfully"}


@donation_posts_router.post("/{post_id}/apply", status_code=status.HTTP_201_CREATED, summary="Apply to adopt")
async def apply(
    post_id: str,
    payload: AdoptionRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: DonationPostService = Depends(),
) -> dict:
    form = await service.apply(principal.id, post_id, payload.description, payload.meeting_schedule)
    return {"message": "Adoption application submitted successfully", "adoptionForm": form}
