"""Pydantic schemas for user profiles."""

from pydantic import BaseModel, field_validator

from ..books.schemas import BookWithRating
from ..db.schemas import ProfileRecord
from ..reviews.schemas import ReviewWithBook


class ProfileCreate(BaseModel):
    """Schema for registering a profile."""

    user_id: str
    name: str
    email: str

    @field_validator("user_id", "name")
    @classmethod
    def not_blank(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f"{info.field_name.replace('_', ' ').capitalize()} is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def looks_like_email(cls, v):
        v = (v or "").strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Please enter a valid email address")
        return v


class ProfileSummary(BaseModel):
    """Dashboard data for one user."""

    profile: ProfileRecord
    books: list[BookWithRating]
    reviews: list[ReviewWithBook]

    @property
    def books_added(self) -> int:
        return len(self.books)

    @property
    def reviews_written(self) -> int:
        return len(self.reviews)

    @property
    def member_since(self) -> int:
        return self.profile.member_since
