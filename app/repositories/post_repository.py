import uuid
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Post
from app.repositories.base import PostRepository


class SqlAlchemyPostRepository(PostRepository):
    """Post storage backed by the request-scoped AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> Sequence[Post]:
        result = await self.session.execute(select(Post).order_by(Post.created_at))
        return result.scalars().all()

    async def get_by_id(self, entity_id: uuid.UUID) -> Optional[Post]:
        result = await self.session.execute(select(Post).where(Post.id == entity_id))
        return result.scalar_one_or_none()

    async def add(self, entity: Post) -> None:
        self.session.add(entity)
        await self.session.commit()

    async def update(self, entity: Post) -> None:
        self.session.add(entity)
        await self.session.commit()

    async def delete(self, entity: Post) -> None:
        await self.session.delete(entity)
        await self.session.commit()
