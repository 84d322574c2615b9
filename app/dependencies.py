from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.repositories.comment_repository import SqlAlchemyCommentRepository
from app.repositories.post_repository import SqlAlchemyPostRepository
from app.services.comment_service import CommentService
from app.services.post_service import PostService


def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    """Build a ``PostService`` bound to the request-scoped session."""
    return PostService(SqlAlchemyPostRepository(db))


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    """Build a ``CommentService`` bound to the request-scoped session."""
    return CommentService(SqlAlchemyCommentRepository(db))


def get_current_author(
    x_user_name: str | None = Header(
        None,
        description="Display name of the caller. Placeholder until authentication is added.",
    ),
) -> str:
    """
    Resolve the caller identity used as a comment's author.

    There is no authentication yet: the ``X-User-Name`` header is trusted
    as-is and ``settings.DEFAULT_AUTHOR`` is used when it is missing or
    blank.
    """
    if x_user_name and x_user_name.strip():
        return x_user_name.strip()
    return settings.DEFAULT_AUTHOR
