"""Pydantic schemas for book reviews."""

from pydantic import BaseModel, field_validator

from ..db.schemas import ReviewRecord

ANONYMOUS_NAME = "Anonymous"


class ReviewDraft(BaseModel):
    """Rating and text as entered in the review form.

    A rating of 0 means no star was selected.
    """

    rating: int
    review_text: str

    @field_validator("rating")
    @classmethod
    def rating_selected(cls, v):
        if v == 0:
            raise ValueError("Please select a rating")
        if v < 1 or v > 5:
            raise ValueError("Rating must be between 1 and 5")
        return v

    @field_validator("review_text")
    @classmethod
    def text_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Please write a review")
        return v.strip()


class ReviewWithReviewer(BaseModel):
    """A review joined with the reviewer's display name."""

    review: ReviewRecord
    reviewer_name: str = ANONYMOUS_NAME

    model_config = {"frozen": True}

    @property
    def id(self) -> str:
        return self.review.id

    @property
    def user_id(self) -> str:
        return self.review.user_id


class ReviewWithBook(BaseModel):
    """A review joined with its book's title and author."""

    review: ReviewRecord
    book_title: str
    book_author: str

    model_config = {"frozen": True}

    @property
    def id(self) -> str:
        return self.review.id
