# Importing the models registers them on Base.metadata (Alembic, create_all)
from postboard.models.comment import Comment
from postboard.models.post import Post
from postboard.models.user import User

__all__ = ["Comment", "Post", "User"]
