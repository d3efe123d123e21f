"""Book reviews and ratings module."""

from .manager import ReviewManager
from .schemas import ReviewDraft, ReviewWithBook, ReviewWithReviewer

__all__ = [
    "ReviewManager",
    "ReviewDraft",
    "ReviewWithBook",
    "ReviewWithReviewer",
]
