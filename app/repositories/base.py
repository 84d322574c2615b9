"""
Repository interfaces - the storage contract the services depend on.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

from app.models import Comment, Post

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base for entity repositories. All operations are async."""

    @abstractmethod
    async def get_all(self) -> Sequence[T]:
        """List all entities."""

    @abstractmethod
    async def get_by_id(self, entity_id: uuid.UUID) -> Optional[T]:
        """Get entity by id, or None when no row matches."""

    @abstractmethod
    async def add(self, entity: T) -> None:
        """Persist a new entity."""

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Persist changes made to an existing entity."""

    @abstractmethod
    async def delete(self, entity: T) -> None:
        """Remove an entity."""


class PostRepository(BaseRepository[Post]):
    """Repository for posts."""


class CommentRepository(BaseRepository[Comment]):
    """Repository for comments."""
