"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def _reject_blank(value: str | None) -> str | None:
    """Whitespace-only title or content counts as empty."""
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Welcome to the Board"])
    content: str = Field(..., min_length=1, examples=["This is the first announcement."])
    is_pinned: bool = False
    created_by: str | None = Field(None, max_length=255)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return _reject_blank(value)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    is_pinned: bool | None = None
    modified_by: str | None = Field(None, max_length=255)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return _reject_blank(value)


class ArticleResponse(BaseModel):
    """Flattened article representation returned to callers."""

    id: int
    title: str
    content: str
    is_pinned: bool
    created_by: str | None = None
    created: datetime | None = None
    modified_by: str | None = None
    modified: datetime | None = None


class ArticlePage(BaseModel):
    """One page of articles with the total record count."""

    items: list[ArticleResponse]
    total_records: int
    page_index: int
    page_size: int
