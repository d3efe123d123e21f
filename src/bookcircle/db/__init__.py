"""Database module for local SQLite storage."""

from .models import Base, Book, Profile, Review
from .schemas import BookRecord, ProfileRecord, ReviewRecord, to_record, validate_input
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "Book",
    "Profile",
    "Review",
    "BookRecord",
    "ProfileRecord",
    "ReviewRecord",
    "to_record",
    "validate_input",
    "Database",
    "get_db",
    "reset_db",
]
