"""Pydantic schemas for books."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..db.schemas import BookRecord
from ..ratings import RatingAggregate

ALL_GENRES = "all"
MIN_PUBLISHED_YEAR = 1000


def _current_year() -> int:
    return date.today().year


def _required_text(v: Optional[str], label: str) -> str:
    if v is None or not v.strip():
        raise ValueError(f"{label} is required")
    return v.strip()


def _check_year(v: int) -> int:
    if v < MIN_PUBLISHED_YEAR or v > _current_year():
        raise ValueError(
            f"Published year must be between {MIN_PUBLISHED_YEAR} and {_current_year()}"
        )
    return v


class BookCreate(BaseModel):
    """Schema for adding a book."""

    title: str
    author: str
    genre: str
    published_year: int = Field(default_factory=_current_year)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v):
        return _required_text(v, "Title")

    @field_validator("author")
    @classmethod
    def author_required(cls, v):
        return _required_text(v, "Author")

    @field_validator("genre")
    @classmethod
    def genre_required(cls, v):
        return _required_text(v, "Genre")

    @field_validator("published_year")
    @classmethod
    def year_in_range(cls, v):
        return _check_year(v)

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v):
        """Store blank descriptions as missing."""
        if v is not None and not v.strip():
            return None
        return v


class BookUpdate(BaseModel):
    """Schema for editing a book. Only set fields are written."""

    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    published_year: Optional[int] = None
    description: Optional[str] = None

    @field_validator("title", "author", "genre")
    @classmethod
    def not_blank(cls, v, info):
        if v is None:
            return v
        return _required_text(v, info.field_name.capitalize())

    @field_validator("published_year")
    @classmethod
    def year_in_range(cls, v):
        if v is None:
            return v
        return _check_year(v)

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class BookWithRating(BaseModel):
    """A book with its rating aggregate attached."""

    book: BookRecord
    rating: RatingAggregate

    model_config = {"frozen": True}

    @property
    def id(self) -> str:
        return self.book.id


class BookPage(BaseModel):
    """One page of the directory listing."""

    items: list[BookWithRating]
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1
