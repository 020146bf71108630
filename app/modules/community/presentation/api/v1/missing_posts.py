# 📄 File: app/modules/community/presentation/api/v1/missing_posts.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for reporting lost pets, following the reports in your neighbourhood and
# helping with upvotes and comments.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/missingposts (role user).
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.modules.community.domain.services.missing_post_service import MissingPostService
from app.modules.community.presentation.api.schemas.community_schemas import (
    CommentRequest,
    CommentResponse,
    CreateMissingPostRequest,
    UpdateMissingPostRequest,
    UpdateMissingPostStatusRequest,
)
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.core.schemas import dump

missing_posts_router = APIRouter()


@missing_posts_router.get("", summary="List missing pet posts")
async def list_posts(
    city: Optional[str] = Query(default=None),
    area: Optional[str] = Query(default=None),
    mine: Optional[str] = Query(default=None),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    """All posts, the caller's with `mine=true`, or the unresolved ones of an area."""
    posts = await service.list_posts(principal.id, city=city, area=area, mine=mine == "true")
    return {"message": "Missing posts retrieved successfully", "posts": posts}


@missing_posts_router.post("", status_code=status.HTTP_201_CREATED, summary="Report a missing pet")
async def create_post(
    payload: CreateMissingPostRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    post = await service.create_post(principal.id, payload.model_dump(by_alias=True))
    return {"message": "Missing post created successfully", "post": post}


@missing_posts_router.get("/{post_id}", summary="Missing post with comments")
async def get_post(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    result = await service.get_post(principal.id, post_id)
    return {"message": "Post retrieved successfully", **result}


@missing_posts_router.head("/{post_id}", summary="Whether the caller upvoted a post")
async def head_post(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> Response:
    has_upvoted = await service.has_upvoted(principal.id, post_id)
    return Response(status_code=status.HTTP_200_OK, headers={"X-Has-Upvoted": str(has_upvoted).lower()})


@missing_posts_router.put("/{post_id}", summary="Update a missing post")
async def update_post(
    post_id: str,
    payload: UpdateMissingPostRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    post = await service.update_post(principal.id, post_id, payload.model_dump(by_alias=True))
    return {"message": "Post updated successfully", "post": post}


@missing_posts_router.patch("/{post_id}", summary="Mark a pet found or missing")
async def update_status(
    post_id: str,
    payload: UpdateMissingPostStatusRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    post = await service.update_status(principal.id, post_id, payload.status)
    return {"message": "Post status updated successfully", "post": post}


@missing_posts_router.delete("/{post_id}", summary="Delete a missing post")
async def delete_post(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    await service.delete_post(principal.id, post_id)
    return {"message": "Post deleted successfully"}


# ----------------------------------------------------------------------
# Upvotes
# ----------------------------------------------------------------------

@missing_posts_router.post("/{post_id}/upvote", summary="Upvote a missing post")
async def upvote(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    count = await service.upvote(principal.id, post_id)
    return {"message": "Post upvoted successfully", "upvotesCount": count}


@missing_posts_router.post("/{post_id}/remove-upvote", summary="Remove an upvote")
async def remove_upvote(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    count = await service.remove_upvote(principal.id, post_id)
    return {"message": "Upvote removed successfully", "upvotesCount": count}


# ----------------------------------------------------------------------
# Comments
# ----------------------------------------------------------------------

@missing_posts_router.get("/{post_id}/comment", summary="Comments of a missing post")
async def list_comments(
    post_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    return {"comments": await service.list_comments(post_id)}


@missing_posts_router.post("/{post_id}/comment", status_code=status.HTTP_201_CREATED, summary="Comment on a post")
async def add_comment(
    post_id: str,
    payload: CommentRequest,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    comment = await service.add_comment(principal.id, post_id, payload.content)
    return {"message": "Comment added successfully", "comment": dump(CommentResponse, comment)}


@missing_posts_router.delete("/{post_id}/comment/{comment_id}", summary="Delete own comment")
async def delete_comment(
    post_id: str,
    comment_id: str,
    principal: CurrentPrincipal = Depends(get_current_user),
    service: MissingPostService = Depends(),
) -> dict:
    await service.delete_comment(principal.id, post_id, comment_id)
    return {"message": "Comment deleted successfully"}
