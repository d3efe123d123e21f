"""Book manager for the directory listing and book CRUD."""

import logging
import math
from typing import Optional

from sqlalchemy import func, or_, select

from ..auth import AuthSession
from ..config import get_config
from ..db.models import Book
from ..db.schemas import BookRecord, to_record
from ..db.sqlite import Database, get_db
from ..errors import AuthorizationError, NotFoundError, ValidationError
from ..ratings import load_aggregates
from .schemas import ALL_GENRES, BookCreate, BookPage, BookUpdate, BookWithRating

logger = logging.getLogger(__name__)


class BookManager:
    """Manages book listing, lookup and owner-only edits."""

    def __init__(self, db: Optional[Database] = None, page_size: Optional[int] = None):
        """Initialize book manager.

        Args:
            db: Database instance
            page_size: Directory page size, defaults to the configured value
        """
        self.db = db or get_db()
        self.page_size = page_size or get_config().page_size

    # -------------------------------------------------------------------------
    # Directory
    # -------------------------------------------------------------------------

    def list_books(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        search_term: Optional[str] = None,
        genre: Optional[str] = ALL_GENRES,
    ) -> BookPage:
        """List one page of books, newest first.

        Args:
            page: 1-indexed page number
            page_size: Rows per page, defaults to the manager's page size
            search_term: Case-insensitive substring of title or author
            genre: Exact genre, or "all" for no genre filter

        Returns:
            BookPage with rating aggregates attached
        """
        page_size = page_size or self.page_size
        if page < 1:
            raise ValidationError(f"Page must be at least 1, got {page}")
        if page_size < 1:
            raise ValidationError(f"Page size must be at least 1, got {page_size}")

        term = (search_term or "").strip()

        with self.db.get_session() as session:
            stmt = select(Book)
            count_stmt = select(func.count()).select_from(Book)

            if term:
                # Literal substring: instr() has no wildcards
                needle = term.casefold()
                match = or_(
                    func.instr(func.casefold(Book.title), needle) > 0,
                    func.instr(func.casefold(Book.author), needle) > 0,
                )
                stmt = stmt.where(match)
                count_stmt = count_stmt.where(match)

            if genre and genre != ALL_GENRES:
                stmt = stmt.where(Book.genre == genre)
                count_stmt = count_stmt.where(Book.genre == genre)

            total = session.execute(count_stmt).scalar() or 0

            stmt = (
                stmt.order_by(Book.created_at.desc(), Book.id.desc())
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            books = session.execute(stmt).scalars().all()

            items = self._with_ratings(session, books)

        return BookPage(
            items=items,
            page=page,
            page_size=page_size,
            total_count=total,
            total_pages=math.ceil(total / page_size),
        )

    def list_genres(self) -> list[str]:
        """Get the distinct genres across all books, sorted."""
        with self.db.get_session() as session:
            stmt = select(Book.genre).distinct().order_by(Book.genre)
            return [genre for genre in session.execute(stmt).scalars().all() if genre]

    def list_books_by_owner(self, user_id: str) -> list[BookWithRating]:
        """Get every book a user added, newest first."""
        with self.db.get_session() as session:
            stmt = (
                select(Book)
                .where(Book.added_by == user_id)
                .order_by(Book.created_at.desc(), Book.id.desc())
            )
            books = session.execute(stmt).scalars().all()
            return self._with_ratings(session, books)

    # -------------------------------------------------------------------------
    # Book CRUD
    # -------------------------------------------------------------------------

    def get_book(self, book_id: str) -> BookRecord:
        """Get a book by ID.

        Raises:
            NotFoundError: If no book has this ID
        """
        with self.db.get_session() as session:
            book = session.get(Book, book_id)
            if not book:
                raise NotFoundError(f"Book not found: {book_id}")
            return to_record(BookRecord, book)

    def create_book(self, auth: AuthSession, data: BookCreate) -> BookRecord:
        """Add a book owned by the current user.

        Args:
            auth: Caller identity, must be logged in
            data: Validated book fields

        Returns:
            Created book
        """
        user_id = auth.require_user("Please log in to add a book")

        with self.db.get_session() as session:
            book = Book(
                title=data.title,
                author=data.author,
                genre=data.genre,
                published_year=data.published_year,
                description=data.description,
                added_by=user_id,
            )
            session.add(book)
            session.flush()
            record = to_record(BookRecord, book)

        logger.info("Book %s added by %s", record.id, user_id)
        return record

    def update_book(self, auth: AuthSession, book_id: str, data: BookUpdate) -> BookRecord:
        """Edit a book. Only the owner may edit.

        Raises:
            NotFoundError: If the book does not exist
            AuthorizationError: If the caller is not the owner
        """
        auth.require_user("Please log in to edit a book")

        with self.db.get_session() as session:
            book = self._owned_book(session, auth, book_id, "You can only edit your own books")

            for field, value in data.model_dump(exclude_unset=True).items():
                # Required columns cannot be cleared
                if value is None and field != "description":
                    continue
                setattr(book, field, value)

            session.flush()
            record = to_record(BookRecord, book)

        logger.info("Book %s updated by %s", book_id, auth.user_id)
        return record

    def delete_book(self, auth: AuthSession, book_id: str) -> None:
        """Delete a book and its reviews. Only the owner may delete.

        Raises:
            NotFoundError: If the book does not exist
            AuthorizationError: If the caller is not the owner
        """
        auth.require_user("Please log in to delete a book")

        with self.db.get_session() as session:
            book = self._owned_book(session, auth, book_id, "You can only delete your own books")
            session.delete(book)

        logger.info("Book %s deleted by %s", book_id, auth.user_id)

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    def _owned_book(self, session, auth: AuthSession, book_id: str, message: str) -> Book:
        book = session.get(Book, book_id)
        if not book:
            raise NotFoundError(f"Book not found: {book_id}")
        if not auth.owns(book.added_by):
            raise AuthorizationError(message)
        return book

    def _with_ratings(self, session, books) -> list[BookWithRating]:
        """Convert books to records with aggregates from one grouped query."""
        aggregates = load_aggregates(session, [book.id for book in books])
        return [
            BookWithRating(book=to_record(BookRecord, book), rating=aggregates[book.id])
            for book in books
        ]
