"""
Postboard Backend — Post Request/Response Schemas
===================================================

PostView is the denormalized read model: the post row joined with its
author's public fields. Services build it; routes only return it.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from postboard.schemas.common import ApiModel, AuthorView, Pagination


class PostPayload(ApiModel):
    """Body of POST /posts and PUT /posts/{id}."""

    title: Optional[str] = None
    content: Optional[str] = None


class PostView(ApiModel):
    id: str
    title: str
    content: str
    author: AuthorView
    created_at: datetime
    updated_at: datetime


class PostEnvelope(ApiModel):
    """GET /posts/{id}"""

    post: PostView


class PostMutationResponse(ApiModel):
    """POST /posts and PUT /posts/{id}"""

    message: str
    post: PostView


class PostListResponse(ApiModel):
    posts: List[PostView] = Field(description="One page of posts")
    pagination: Pagination
