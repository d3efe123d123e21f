"""Pytest configuration and shared fixtures.

This module provides fixtures for testing bookcircle, including an
in-memory database, registered users and a factory for books with fixed
creation times.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest

from bookcircle.auth import AuthSession
from bookcircle.books import BookManager
from bookcircle.config import reset_config
from bookcircle.db.models import Book, Profile, Review
from bookcircle.db.sqlite import Database, reset_db
from bookcircle.notifications import Notifier
from bookcircle.profiles import ProfileManager
from bookcircle.reviews import ReviewManager

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    reset_db()
    reset_config()
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture
def book_manager(db: Database) -> BookManager:
    return BookManager(db, page_size=5)


@pytest.fixture
def review_manager(db: Database) -> ReviewManager:
    return ReviewManager(db)


@pytest.fixture
def profile_manager(db: Database, book_manager, review_manager) -> ProfileManager:
    return ProfileManager(db, books=book_manager, reviews=review_manager)


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


# ============================================================================
# Identity Fixtures
# ============================================================================


@pytest.fixture
def alice(db: Database) -> AuthSession:
    """Logged-in user with a profile."""
    with db.get_session() as session:
        session.add(Profile(
            user_id="alice",
            name="Alice Reader",
            email="alice@example.com",
            created_at="2023-04-05T10:00:00+00:00",
        ))
    return AuthSession("alice")


@pytest.fixture
def bob(db: Database) -> AuthSession:
    """Second logged-in user with a profile."""
    with db.get_session() as session:
        session.add(Profile(
            user_id="bob",
            name="Bob Critic",
            email="bob@example.com",
            created_at="2024-02-01T09:30:00+00:00",
        ))
    return AuthSession("bob")


@pytest.fixture
def anonymous() -> AuthSession:
    return AuthSession.anonymous()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def make_book(db: Database) -> Callable[..., str]:
    """Factory inserting books with strictly increasing creation times.

    Each call is one minute newer than the last, so newest-first ordering
    is deterministic.
    """
    counter = {"n": 0}

    def _make(
        title: str = "Untitled",
        author: str = "Anonymous Author",
        genre: str = "Fiction",
        published_year: int = 2000,
        added_by: str = "alice",
        description: Optional[str] = None,
    ) -> str:
        counter["n"] += 1
        created = BASE_TIME + timedelta(minutes=counter["n"])
        with db.get_session() as session:
            book = Book(
                title=title,
                author=author,
                genre=genre,
                published_year=published_year,
                description=description,
                added_by=added_by,
                created_at=created.isoformat(),
            )
            session.add(book)
            session.flush()
            return book.id

    return _make


@pytest.fixture
def make_review(db: Database) -> Callable[..., str]:
    """Factory inserting reviews directly, bypassing ownership checks."""
    counter = {"n": 0}

    def _make(book_id: str, user_id: str, rating: int, text: str = "A review.") -> str:
        counter["n"] += 1
        created = BASE_TIME + timedelta(days=1, minutes=counter["n"])
        with db.get_session() as session:
            review = Review(
                book_id=book_id,
                user_id=user_id,
                rating=rating,
                review_text=text,
                created_at=created.isoformat(),
            )
            session.add(review)
            session.flush()
            return review.id

    return _make


@pytest.fixture
def dune(make_book) -> str:
    """A book owned by alice."""
    return make_book(
        title="Dune",
        author="Frank Herbert",
        genre="Science Fiction",
        published_year=1965,
        description="Desert planet politics.",
    )


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()
