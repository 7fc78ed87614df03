"""Postboard Backend — Comment Request/Response Schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from postboard.schemas.common import ApiModel, AuthorView, Pagination


class CommentPayload(ApiModel):
    """Body of POST /posts/{postId}/comments and PUT /comments/{id}."""

    content: Optional[str] = None


class CommentView(ApiModel):
    id: str
    content: str
    post_id: str
    author: AuthorView
    created_at: datetime
    updated_at: datetime


class CommentMutationResponse(ApiModel):
    message: str
    comment: CommentView


class CommentListResponse(ApiModel):
    comments: List[CommentView] = Field(description="One page of comments for a post")
    pagination: Pagination
