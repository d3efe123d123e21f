"""Pydantic records for rows read from the store.

Every ORM row is converted into one of these before it leaves a manager,
so callers never see loosely-typed data. A row that does not validate is
rejected with ``MalformedRecordError``.
"""

from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import MalformedRecordError, ValidationError

RecordT = TypeVar("RecordT", bound=BaseModel)


class ProfileRecord(BaseModel):
    """A user's profile."""

    id: str
    user_id: str = Field(..., min_length=1)
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def member_since(self) -> int:
        """Year the profile was created."""
        return self.created_at.year


class BookRecord(BaseModel):
    """A catalogue entry."""

    id: str
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    published_year: int
    description: Optional[str] = None
    added_by: str = Field(..., min_length=1)
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


class ReviewRecord(BaseModel):
    """A user's rating and review of one book."""

    id: str
    book_id: str
    user_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    review_text: str
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


def to_record(model: type[RecordT], row: Any) -> RecordT:
    """Validate an ORM row into a typed record."""
    try:
        return model.model_validate(row)
    except PydanticValidationError as e:
        raise MalformedRecordError(
            f"Malformed {model.__name__} row: {_first_message(e)}"
        ) from e


def validate_input(model: type[RecordT], **data: Any) -> RecordT:
    """Build an input schema, converting pydantic errors to ValidationError."""
    try:
        return model(**data)
    except PydanticValidationError as e:
        raise ValidationError(_first_message(e)) from e


def _first_message(error: PydanticValidationError) -> str:
    """Readable message for the first failing field."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    # Messages from our own validators are already user-facing
    if first.get("type") == "value_error":
        return message.removeprefix("Value error, ")
    return f"{location}: {message}" if location else message
