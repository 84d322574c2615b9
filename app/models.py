from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend.

    SQLite drops the offset on storage; values read back are tagged as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


# ---------------------------------------------------------------------------
# BaseEntity — audit columns shared by every table
# ---------------------------------------------------------------------------
class BaseEntity(Base):
    """
    Abstract base for persisted aggregates.

    ``id``, ``created_at`` and ``updated_at`` are assigned when the object
    is constructed rather than at flush time, so a freshly built entity
    already carries its identifier before it reaches the database.
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __init__(self, **kwargs) -> None:
        now = utcnow()
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    def touch(self) -> None:
        """Refresh ``updated_at`` to the current UTC time."""
        self.updated_at = utcnow()


# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------
class Post(BaseEntity):
    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("title", "")
        kwargs.setdefault("content", "")
        super().__init__(**kwargs)


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(BaseEntity):
    __tablename__ = "comments"

    # Reference by value only; the owning post is neither loaded nor enforced.
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    author: Mapped[str] = mapped_column(String, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("author", "")
        kwargs.setdefault("content", "")
        super().__init__(**kwargs)
