import uuid
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Comment
from app.repositories.base import CommentRepository


class SqlAlchemyCommentRepository(CommentRepository):
    """Comment storage backed by the request-scoped AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> Sequence[Comment]:
        result = await self.session.execute(select(Comment).order_by(Comment.created_at))
        return result.scalars().all()

    async def get_by_id(self, entity_id: uuid.UUID) -> Optional[Comment]:
        result = await self.session.execute(select(Comment).where(Comment.id == entity_id))
        return result.scalar_one_or_none()

    async def add(self, entity: Comment) -> None:
        self.session.add(entity)
        await self.session.commit()

    async def update(self, entity: Comment) -> None:
        self.session.add(entity)
        await self.session.commit()

    async def delete(self, entity: Comment) -> None:
        await self.session.delete(entity)
        await self.session.commit()
