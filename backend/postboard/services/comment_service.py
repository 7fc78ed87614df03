"""
Postboard Backend — Comment Service
=====================================

What:  Comments scoped under a post: create, list, update, delete.
How:   Same shape as PostService; reads join comments with users and return
       CommentView. Creating a comment first checks that the parent post
       exists, so comments never point at a missing post.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.dependencies import AuthenticatedUser
from postboard.auth.ownership import ensure_owner
from postboard.exceptions import NotFoundError
from postboard.models.comment import Comment
from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.comment import CommentListResponse, CommentPayload, CommentView
from postboard.schemas.common import PageRequest, Pagination
from postboard.services.base import (
    database_errors,
    parse_resource_id,
    require_fields,
    try_parse_id,
)
from postboard.services.post_service import POST_NOT_FOUND, author_view

logger = logging.getLogger(__name__)

# Edit and delete report a missing comment differently
UPDATE_NOT_FOUND = "Comment was not found"
DELETE_NOT_FOUND = "The comment was not found"
REQUIRED_FIELDS = "Content is required"


def comment_view(comment: Comment, author: User) -> CommentView:
    return CommentView(
        id=str(comment.id),
        content=comment.content,
        post_id=str(comment.post_id),
        author=author_view(author),
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentService:
    """Business logic for comments."""

    async def _fetch(self, db: AsyncSession, comment_id: uuid.UUID) -> Optional[CommentView]:
        result = await db.execute(
            select(Comment, User)
            .join(User, Comment.author_id == User.id)
            .where(Comment.id == comment_id)
        )
        row = result.first()
        if row is None:
            return None
        comment, author = row
        return comment_view(comment, author)

    async def _get_owned(
        self,
        db: AsyncSession,
        raw_id: str,
        user: AuthenticatedUser,
        not_found_message: str,
        forbidden_message: str,
    ) -> Comment:
        comment_id = parse_resource_id(raw_id, not_found_message, "comment")
        comment = await db.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError(
                message=not_found_message, resource="comment", resource_id=str(comment_id)
            )
        ensure_owner(comment.author_id, user, forbidden_message)
        return comment

    async def create_comment(
        self,
        db: AsyncSession,
        raw_post_id: str,
        payload: CommentPayload,
        user: AuthenticatedUser,
    ) -> CommentView:
        """
        Add a comment to an existing post.

        Raises:
            ValidationError: content missing
            NotFoundError: the post does not exist
        """
        require_fields(REQUIRED_FIELDS, content=payload.content)
        post_id = parse_resource_id(raw_post_id, POST_NOT_FOUND, "post")

        with database_errors("creating comment", post_id=str(post_id)):
            if await db.get(Post, post_id) is None:
                raise NotFoundError(message=POST_NOT_FOUND, resource="post",
                                    resource_id=str(post_id))
            comment = Comment(content=payload.content, author_id=user.user_id, post_id=post_id)
            db.add(comment)
            await db.flush()
            view = await self._fetch(db, comment.id)

        if view is None:
            raise NotFoundError(message="User not found", resource="user",
                                resource_id=str(user.user_id))
        logger.info("Comment %s on post %s by %s", comment.id, post_id, user.user_id)
        return view

    async def list_comments(
        self,
        db: AsyncSession,
        raw_post_id: str,
        page: PageRequest,
    ) -> CommentListResponse:
        """
        One page of a post's comments. A post id that matches nothing
        (including a malformed one) yields an empty page, not an error.
        """
        post_id = try_parse_id(raw_post_id)
        if post_id is None:
            return CommentListResponse(comments=[], pagination=Pagination.build(page, 0))

        with database_errors("listing comments", post_id=str(post_id)):
            total = (
                await db.execute(
                    select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
                )
            ).scalar() or 0
            if page.offset >= total:
                return CommentListResponse(
                    comments=[], pagination=Pagination.build(page, total)
                )
            result = await db.execute(
                select(Comment, User)
                .join(User, Comment.author_id == User.id)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at, Comment.id)
                .offset(page.offset)
                .limit(page.limit)
            )
            comments = [comment_view(comment, author) for comment, author in result.all()]

        return CommentListResponse(comments=comments, pagination=Pagination.build(page, total))

    async def update_comment(
        self,
        db: AsyncSession,
        raw_id: str,
        payload: CommentPayload,
        user: AuthenticatedUser,
    ) -> CommentView:
        require_fields(REQUIRED_FIELDS, content=payload.content)

        with database_errors("updating comment", comment_id=str(raw_id)):
            comment = await self._get_owned(
                db, raw_id, user, UPDATE_NOT_FOUND, "User unauthorized"
            )
            comment.content = payload.content
            await db.flush()
            view = await self._fetch(db, comment.id)

        logger.info("Comment %s updated by %s", comment.id, user.user_id)
        return view

    async def delete_comment(self, db: AsyncSession, raw_id: str, user: AuthenticatedUser) -> None:
        with database_errors("deleting comment", comment_id=str(raw_id)):
            comment = await self._get_owned(
                db, raw_id, user, DELETE_NOT_FOUND, "User is unauthorised."
            )
            await db.delete(comment)
            await db.flush()

        logger.info("Comment %s deleted by %s", comment.id, user.user_id)


comment_service = CommentService()
