"""Book directory and book management."""

from .manager import BookManager
from .schemas import ALL_GENRES, BookCreate, BookPage, BookUpdate, BookWithRating

__all__ = [
    "ALL_GENRES",
    "BookManager",
    "BookCreate",
    "BookUpdate",
    "BookPage",
    "BookWithRating",
]
