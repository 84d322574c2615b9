"""
Comment service — business logic for the Comment aggregate.

Reads are projected to ``CommentResponse`` here so the entity never
leaves the service layer.  On creation the author always comes from the
caller identity handed in by the router; any id, timestamp or author in
the request body is ignored.  Updates only touch ``content``.
"""
import logging
import uuid

from app.mapping import apply_comment_request, comment_from_request, comment_to_response
from app.repositories.base import CommentRepository
from app.schemas import CommentRequest, CommentResponse

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, repository: CommentRepository) -> None:
        self._repository = repository

    async def list(self) -> list[CommentResponse]:
        logger.info("Retrieving all comments")
        try:
            comments = await self._repository.get_all()
        except Exception:
            logger.exception("Error occurred while retrieving comments")
            raise
        logger.debug("Retrieved %d comments", len(comments))
        return [comment_to_response(c) for c in comments]

    async def get_by_id(self, comment_id: uuid.UUID) -> CommentResponse | None:
        logger.info("Retrieving comment with ID: %s", comment_id)
        comment = await self._repository.get_by_id(comment_id)
        if comment is None:
            logger.warning("Comment with ID: %s not found", comment_id)
            return None
        return comment_to_response(comment)

    async def add(self, data: CommentRequest, author: str) -> CommentResponse:
        logger.info("Adding new comment by author: %s to post: %s", author, data.post_id)
        comment = comment_from_request(data, author)
        try:
            await self._repository.add(comment)
        except Exception:
            logger.exception(
                "Error occurred while adding comment by %s to post: %s", author, data.post_id
            )
            raise
        logger.info("Successfully added comment with ID: %s", comment.id)
        return comment_to_response(comment)

    async def update(self, comment_id: uuid.UUID, data: CommentRequest) -> bool:
        logger.info("Updating comment with ID: %s", comment_id)
        comment = await self._repository.get_by_id(comment_id)
        if comment is None:
            logger.warning("Comment with ID: %s not found for update", comment_id)
            return False

        apply_comment_request(comment, data)
        comment.touch()
        try:
            await self._repository.update(comment)
        except Exception:
            logger.exception("Error occurred while updating comment with ID: %s", comment_id)
            raise
        logger.info("Successfully updated comment with ID: %s", comment_id)
        return True

    async def delete(self, comment_id: uuid.UUID) -> bool:
        logger.info("Deleting comment with ID: %s", comment_id)
        comment = await self._repository.get_by_id(comment_id)
        if comment is None:
            logger.warning("Comment with ID: %s not found for deletion", comment_id)
            return False

        try:
            await self._repository.delete(comment)
        except Exception:
            logger.exception("Error occurred while deleting comment with ID: %s", comment_id)
            raise
        logger.info("Successfully deleted comment with ID: %s", comment_id)
        return True
