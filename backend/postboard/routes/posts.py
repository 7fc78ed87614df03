"""
Postboard Backend — Post Route Handlers
=========================================

What:  Post CRUD under /posts.
Auth:  GET routes are public. POST/PUT/DELETE depend on `require_user`, and
       the service applies the ownership check before PUT/DELETE.

Pagination (GET /posts):
    ?page=2&limit=5 → offset 5, five items, plus
    {"currentPage", "totalPages", "total", "perPage"}.
    page/limit arrive as raw strings; PageRequest.from_query falls back to
    the defaults for anything that is not a positive integer.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.dependencies import AuthenticatedUser, require_user
from postboard.database import get_db_session
from postboard.schemas.common import ErrorResponse, MessageResponse, PageRequest
from postboard.schemas.post import (
    PostEnvelope,
    PostListResponse,
    PostMutationResponse,
    PostPayload,
)
from postboard.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PostMutationResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: PostPayload,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> PostMutationResponse:
    post = await post_service.create_post(db=db, payload=payload, user=user)
    return PostMutationResponse(message="Post created successfully", post=post)


@router.get(
    "",
    response_model=PostListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List posts with page/limit pagination",
)
async def list_posts(
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 10, max 100)"),
    db: AsyncSession = Depends(get_db_session),
) -> PostListResponse:
    return await post_service.list_posts(db=db, page=PageRequest.from_query(page, limit))


@router.get(
    "/{post_id}",
    response_model=PostEnvelope,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Get a single post",
)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PostEnvelope:
    return PostEnvelope(post=await post_service.get_post(db=db, raw_id=post_id))


@router.put(
    "/{post_id}",
    response_model=PostMutationResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Update a post you wrote",
)
async def update_post(
    post_id: str,
    payload: PostPayload,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> PostMutationResponse:
    post = await post_service.update_post(db=db, raw_id=post_id, payload=payload, user=user)
    return PostMutationResponse(message="Post successfully updated", post=post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Delete a post you wrote (and its comments)",
)
async def delete_post(
    post_id: str,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await post_service.delete_post(db=db, raw_id=post_id, user=user)
    return MessageResponse(message="Post successfully deleted")
