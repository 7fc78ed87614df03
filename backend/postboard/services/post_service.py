"""
Postboard Backend — Post Service
==================================

What:  CRUD for posts, with ownership enforcement on update and delete.
How:   Reads join posts with users explicitly and return PostView, the
       denormalized read model (post + author's public fields). The stored
       Post entity never leaves this module.

Mutation Flow (update/delete):
    validate body → fetch by id (404) → ensure_owner (403) → write → flush

Query plans:
    list:  SELECT posts JOIN users ORDER BY created_at, id LIMIT :limit OFFSET :offset
           → idx_posts_created_at_id
    count: SELECT count(*) FROM posts
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.dependencies import AuthenticatedUser
from postboard.auth.ownership import ensure_owner
from postboard.exceptions import NotFoundError
from postboard.models.comment import Comment
from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.common import AuthorView, PageRequest, Pagination
from postboard.schemas.post import PostListResponse, PostPayload, PostView
from postboard.services.base import database_errors, parse_resource_id, require_fields

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"
REQUIRED_FIELDS = "Title and content are required"


def author_view(user: User) -> AuthorView:
    return AuthorView(id=str(user.id), username=user.username, email=user.email)


def post_view(post: Post, author: User) -> PostView:
    return PostView(
        id=str(post.id),
        title=post.title,
        content=post.content,
        author=author_view(author),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostService:
    """
    Business logic for posts.

    Every method receives the request's AsyncSession; commit/rollback is
    handled by the session dependency, so methods only flush.
    """

    async def _fetch(self, db: AsyncSession, post_id: uuid.UUID) -> Optional[PostView]:
        result = await db.execute(
            select(Post, User)
            .join(User, Post.author_id == User.id)
            .where(Post.id == post_id)
        )
        row = result.first()
        if row is None:
            return None
        post, author = row
        return post_view(post, author)

    async def _get_owned(
        self,
        db: AsyncSession,
        raw_id: str,
        user: AuthenticatedUser,
        forbidden_message: str,
    ) -> Post:
        post_id = parse_resource_id(raw_id, POST_NOT_FOUND, "post")
        post = await db.get(Post, post_id)
        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND, resource="post", resource_id=str(post_id))
        ensure_owner(post.author_id, user, forbidden_message)
        return post

    async def create_post(
        self,
        db: AsyncSession,
        payload: PostPayload,
        user: AuthenticatedUser,
    ) -> PostView:
        """Create a post authored by the authenticated user."""
        require_fields(REQUIRED_FIELDS, title=payload.title, content=payload.content)

        with database_errors("creating post", user_id=str(user.user_id)):
            post = Post(title=payload.title, content=payload.content, author_id=user.user_id)
            db.add(post)
            await db.flush()
            view = await self._fetch(db, post.id)

        if view is None:
            # The author row vanished between token issue and insert
            raise NotFoundError(message="User not found", resource="user",
                                resource_id=str(user.user_id))
        logger.info("Post %s created by %s", post.id, user.user_id)
        return view

    async def list_posts(self, db: AsyncSession, page: PageRequest) -> PostListResponse:
        """One page of posts in storage order, with pagination metadata."""
        with database_errors("listing posts"):
            total = (await db.execute(select(func.count()).select_from(Post))).scalar() or 0
            # Past the last page; also keeps out-of-range offsets away from the driver
            if page.offset >= total:
                return PostListResponse(posts=[], pagination=Pagination.build(page, total))
            result = await db.execute(
                select(Post, User)
                .join(User, Post.author_id == User.id)
                .order_by(Post.created_at, Post.id)
                .offset(page.offset)
                .limit(page.limit)
            )
            posts = [post_view(post, author) for post, author in result.all()]

        return PostListResponse(posts=posts, pagination=Pagination.build(page, total))

    async def get_post(self, db: AsyncSession, raw_id: str) -> PostView:
        """Fetch one post; NotFoundError if it does not exist."""
        post_id = parse_resource_id(raw_id, POST_NOT_FOUND, "post")
        with database_errors("fetching post", post_id=str(post_id)):
            view = await self._fetch(db, post_id)
        if view is None:
            raise NotFoundError(message=POST_NOT_FOUND, resource="post", resource_id=str(post_id))
        return view

    async def update_post(
        self,
        db: AsyncSession,
        raw_id: str,
        payload: PostPayload,
        user: AuthenticatedUser,
    ) -> PostView:
        """Replace title and content of a post the caller owns."""
        require_fields(REQUIRED_FIELDS, title=payload.title, content=payload.content)

        with database_errors("updating post", post_id=str(raw_id)):
            post = await self._get_owned(db, raw_id, user, "Not authorized to update this post")
            post.title = payload.title
            post.content = payload.content
            await db.flush()
            view = await self._fetch(db, post.id)

        logger.info("Post %s updated by %s", post.id, user.user_id)
        return view

    async def delete_post(self, db: AsyncSession, raw_id: str, user: AuthenticatedUser) -> None:
        """Delete a post the caller owns, together with its comments."""
        with database_errors("deleting post", post_id=str(raw_id)):
            post = await self._get_owned(
                db, raw_id, user, "You are not authorized to delete this post"
            )
            # Explicit so SQLite (no FK enforcement by default) matches PostgreSQL's CASCADE
            await db.execute(delete(Comment).where(Comment.post_id == post.id))
            await db.delete(post)
            await db.flush()

        logger.info("Post %s deleted by %s", post.id, user.user_id)


post_service = PostService()
