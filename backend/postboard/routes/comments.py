"""
Postboard Backend — Comment Route Handlers
============================================

What:  Comments listed and created under /posts/{post_id}/comments, edited
       and deleted under /comments/{comment_id}.
Auth:  Listing is public; everything else depends on `require_user`.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.dependencies import AuthenticatedUser, require_user
from postboard.database import get_db_session
from postboard.schemas.comment import (
    CommentListResponse,
    CommentMutationResponse,
    CommentPayload,
)
from postboard.schemas.common import ErrorResponse, MessageResponse, PageRequest
from postboard.services.comment_service import comment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Comments"])


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentMutationResponse,
    responses={
        400: {"description": "Content missing", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Comment on a post",
)
async def create_comment(
    post_id: str,
    payload: CommentPayload,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> CommentMutationResponse:
    comment = await comment_service.create_comment(
        db=db, raw_post_id=post_id, payload=payload, user=user
    )
    return CommentMutationResponse(message="Comment successfully posted", comment=comment)


@router.get(
    "/posts/{post_id}/comments",
    response_model=CommentListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List the comments under a post",
)
async def list_comments(
    post_id: str,
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 10, max 100)"),
    db: AsyncSession = Depends(get_db_session),
) -> CommentListResponse:
    return await comment_service.list_comments(
        db=db, raw_post_id=post_id, page=PageRequest.from_query(page, limit)
    )


@router.put(
    "/comments/{comment_id}",
    response_model=CommentMutationResponse,
    responses={
        400: {"description": "Content missing", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Comment was not found", "model": ErrorResponse},
    },
    summary="Edit a comment you wrote",
)
async def update_comment(
    comment_id: str,
    payload: CommentPayload,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> CommentMutationResponse:
    comment = await comment_service.update_comment(
        db=db, raw_id=comment_id, payload=payload, user=user
    )
    return CommentMutationResponse(message="Comment successfully saved", comment=comment)


@router.delete(
    "/comments/{comment_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "The comment was not found", "model": ErrorResponse},
    },
    summary="Delete a comment you wrote",
)
async def delete_comment(
    comment_id: str,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await comment_service.delete_comment(db=db, raw_id=comment_id, user=user)
    return MessageResponse(message="Comment successfully deleted")
