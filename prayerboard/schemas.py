"""
Pydantic schemas for the prayer board API.

Request bodies only carry client-supplied fields; ids, timestamps, counts,
the moderation flag and the anonymity flag are always filled in server-side.
Everything goes over the wire with camelCase keys.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

DEFAULT_CATEGORY = "Other"

Category = Literal["Faith", "Health", "Relationships", "Work", "Other"]
InspirationType = Literal["verse", "quote", "thought"]

AUTHOR_NAME_MAX_LENGTH = 100


def is_anonymous_author(author_name: Optional[str]) -> bool:
    """A post is anonymous when no usable author name was given."""
    return not author_name or not author_name.strip()


def _bounded(
    value: str,
    *,
    min_length: int,
    max_length: int,
    too_short: str,
    too_long: str,
) -> str:
    if len(value) < min_length:
        raise PydanticCustomError("too_short", too_short)
    if len(value) > max_length:
        raise PydanticCustomError("too_long", too_long)
    return value


def _check_author_name(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > AUTHOR_NAME_MAX_LENGTH:
        raise PydanticCustomError(
            "too_long",
            "Name must be less than {max_length} characters",
            {"max_length": AUTHOR_NAME_MAX_LENGTH},
        )
    return value


AuthorName = Annotated[Optional[str], AfterValidator(_check_author_name)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Request bodies


class PrayerCreate(ApiModel):
    content: str
    category: Category = DEFAULT_CATEGORY
    author_name: AuthorName = None

    @field_validator("content")
    @classmethod
    def check_content_length(cls, value: str) -> str:
        return _bounded(
            value,
            min_length=10,
            max_length=1000,
            too_short="Prayer must be at least 10 characters",
            too_long="Prayer must be less than 1000 characters",
        )


class QuestionCreate(ApiModel):
    title: str
    content: str
    author_name: AuthorName = None

    @field_validator("title")
    @classmethod
    def check_title_length(cls, value: str) -> str:
        return _bounded(
            value,
            min_length=5,
            max_length=200,
            too_short="Title must be at least 5 characters",
            too_long="Title must be less than 200 characters",
        )

    @field_validator("content")
    @classmethod
    def check_content_length(cls, value: str) -> str:
        return _bounded(
            value,
            min_length=10,
            max_length=2000,
            too_short="Question must be at least 10 characters",
            too_long="Question must be less than 2000 characters",
        )


class CommentCreate(ApiModel):
    """Body for both question comments and prayer comments."""

    content: str
    author_name: AuthorName = None

    @field_validator("content")
    @classmethod
    def check_content_length(cls, value: str) -> str:
        return _bounded(
            value,
            min_length=1,
            max_length=1000,
            too_short="Comment cannot be empty",
            too_long="Comment must be less than 1000 characters",
        )


class SessionScopedCreate(ApiModel):
    prayer_id: str
    session_id: str

    @field_validator("prayer_id")
    @classmethod
    def check_prayer_id(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("missing", "Prayer ID required")
        return value

    @field_validator("session_id")
    @classmethod
    def check_session_id(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("missing", "Session ID required")
        return value


class BookmarkCreate(SessionScopedCreate):
    pass


class LiftUpCreate(SessionScopedCreate):
    pass


class InspirationCreate(ApiModel):
    content: str
    attribution: str
    type: InspirationType


# Responses


class Prayer(ApiModel):
    id: str
    content: str
    category: str
    is_anonymous: bool
    author_name: Optional[str] = None
    lift_up_count: int
    is_moderated: bool
    created_at: datetime


class Question(ApiModel):
    id: str
    title: str
    content: str
    is_anonymous: bool
    author_name: Optional[str] = None
    is_moderated: bool
    created_at: datetime


class Comment(ApiModel):
    id: str
    question_id: str
    content: str
    is_anonymous: bool
    author_name: Optional[str] = None
    is_moderated: bool
    created_at: datetime


class PrayerComment(ApiModel):
    id: str
    prayer_id: str
    content: str
    is_anonymous: bool
    author_name: Optional[str] = None
    is_moderated: bool
    created_at: datetime


class Bookmark(ApiModel):
    id: str
    prayer_id: str
    session_id: str
    created_at: datetime


class DailyInspiration(ApiModel):
    id: str
    content: str
    attribution: str
    type: str


class LiftUpResult(ApiModel):
    success: bool
    count: int


class PrayerStatus(ApiModel):
    has_lifted: bool
    has_bookmark: bool


class SuccessResponse(ApiModel):
    success: bool


class HealthResponse(ApiModel):
    storage: str
    database: bool
    counts: dict[str, int]


class ErrorResponse(ApiModel):
    error: str
