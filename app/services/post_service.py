"""
Post service — business logic for the Post aggregate.

Design notes
------------
- A near pass-through over ``PostRepository``: the only rules added here
  are building the entity from the request DTO and refreshing
  ``updated_at`` on every update.
- Not-found is signalled by ``None`` / ``False`` return values, never by
  an exception; routers decide the HTTP status.
- Storage errors are logged and propagated unchanged.
"""
import logging
import uuid
from typing import Optional, Sequence

from app.mapping import apply_post_request, post_from_request
from app.models import Post
from app.repositories.base import PostRepository
from app.schemas import PostRequest

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, repository: PostRepository) -> None:
        self._repository = repository

    async def list(self) -> Sequence[Post]:
        logger.info("Retrieving all posts")
        try:
            posts = await self._repository.get_all()
        except Exception:
            logger.exception("Error occurred while retrieving posts")
            raise
        logger.debug("Retrieved %d posts", len(posts))
        return posts

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[Post]:
        logger.info("Retrieving post with ID: %s", post_id)
        post = await self._repository.get_by_id(post_id)
        if post is None:
            logger.warning("Post with ID: %s not found", post_id)
        return post

    async def add(self, data: PostRequest) -> Post:
        """Create and persist a new post; id and timestamps are server-assigned."""
        post = post_from_request(data)
        logger.info("Adding new post with title: %r", post.title)
        try:
            await self._repository.add(post)
        except Exception:
            logger.exception("Error occurred while adding post %s", post.id)
            raise
        logger.info("Successfully added post with ID: %s", post.id)
        return post

    async def update(self, post_id: uuid.UUID, data: PostRequest) -> bool:
        """
        Overlay title and content onto the stored post.

        Returns False, without touching storage, when the post does not
        exist.
        """
        logger.info("Updating post with ID: %s", post_id)
        post = await self._repository.get_by_id(post_id)
        if post is None:
            logger.warning("Post with ID: %s not found for update", post_id)
            return False

        apply_post_request(post, data)
        post.touch()
        try:
            await self._repository.update(post)
        except Exception:
            logger.exception("Error occurred while updating post with ID: %s", post_id)
            raise
        logger.info("Successfully updated post with ID: %s", post_id)
        return True

    async def delete(self, post_id: uuid.UUID) -> bool:
        logger.info("Deleting post with ID: %s", post_id)
        post = await self._repository.get_by_id(post_id)
        if post is None:
            logger.warning("Post with ID: %s not found for deletion", post_id)
            return False

        try:
            await self._repository.delete(post)
        except Exception:
            logger.exception("Error occurred while deleting post with ID: %s", post_id)
            raise
        logger.info("Successfully deleted post with ID: %s", post_id)
        return True
