import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

COMMENT_MIN_LENGTH = 5
COMMENT_MAX_LENGTH = 500


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Post ---

class PostRequest(CamelModel):
    title: str
    content: str = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Post title is required.")
        return value


class PostResponse(CamelModel):
    id: uuid.UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentRequest(CamelModel):
    content: str
    post_id: uuid.UUID

    @field_validator("post_id")
    @classmethod
    def post_id_not_nil(cls, value: uuid.UUID) -> uuid.UUID:
        if value.int == 0:
            raise ValueError("PostId is required and cannot be an empty GUID.")
        return value

    @field_validator("content")
    @classmethod
    def content_length(cls, value: str) -> str:
        # Bounds apply to the trimmed text; the stored value is left as sent.
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Comment content is required.")
        if len(trimmed) < COMMENT_MIN_LENGTH:
            raise ValueError("Comment content too short.")
        if len(trimmed) > COMMENT_MAX_LENGTH:
            raise ValueError("Comment limit exceeded.")
        return value


class CommentResponse(CamelModel):
    id: uuid.UUID
    post_id: uuid.UUID
    author: str
    content: str
    created_at: datetime


# --- Acknowledgements and errors ---

class MessageResponse(CamelModel):
    message: str
    id: uuid.UUID | None = None


class ProblemDetails(BaseModel):
    title: str
    status: int = 500
    detail: str | None = None
    instance: str | None = None


class ValidationProblemDetails(BaseModel):
    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: dict[str, list[str]] = Field(default_factory=dict)
    instance: str | None = None
