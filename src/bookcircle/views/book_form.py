"""Add/edit book form."""

from datetime import date
from typing import Any, Optional

from ..auth import AuthSession
from ..books.manager import BookManager
from ..books.schemas import BookCreate, BookUpdate
from ..db.schemas import BookRecord, validate_input
from ..errors import BookCircleError, ValidationError
from ..notifications import Notifier
from .base import DIRECTORY_ROUTE, book_route, report_failure

FORM_FIELDS = ("title", "author", "genre", "published_year", "description")


class BookFormView:
    """Form state for adding a book, or editing one the caller owns."""

    def __init__(
        self,
        auth: AuthSession,
        books: BookManager,
        notifier: Optional[Notifier] = None,
        book_id: Optional[str] = None,
    ):
        self.auth = auth
        self.books = books
        self.notifier = notifier or Notifier()
        self.book_id = book_id

        self.fields: dict[str, Any] = {
            "title": "",
            "author": "",
            "genre": "",
            "published_year": date.today().year,
            "description": "",
        }
        self.saving = False
        self.saved: Optional[BookRecord] = None
        self.redirect: Optional[str] = None

    @property
    def is_edit(self) -> bool:
        return self.book_id is not None

    def load(self) -> bool:
        """Pre-fill the form in edit mode. Non-owners are turned away."""
        if not self.is_edit:
            return True

        try:
            book = self.books.get_book(self.book_id)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to fetch book details")
            self.redirect = DIRECTORY_ROUTE
            return False

        if not self.auth.owns(book.added_by):
            self.notifier.error("You can only edit your own books")
            self.redirect = DIRECTORY_ROUTE
            return False

        self.fields.update(
            title=book.title,
            author=book.author,
            genre=book.genre,
            published_year=book.published_year,
            description=book.description or "",
        )
        return True

    def update(self, **changes: Any) -> None:
        """Change form fields."""
        for name, value in changes.items():
            if name not in FORM_FIELDS:
                raise KeyError(f"Unknown form field: {name}")
            self.fields[name] = value

    def submit(self) -> bool:
        """Save the book and point the redirect at its detail page."""
        if not self.auth.is_authenticated:
            self.notifier.error("Please log in to add a book")
            return False

        try:
            data = validate_input(BookCreate, **self.fields)
        except ValidationError as e:
            self.notifier.error(str(e))
            return False

        self.saving = True
        try:
            if self.is_edit:
                record = self.books.update_book(
                    self.auth, self.book_id, BookUpdate(**data.model_dump())
                )
            else:
                record = self.books.create_book(self.auth, data)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to save book")
            return False
        finally:
            self.saving = False

        self.saved = record
        self.notifier.success(
            "Book updated successfully" if self.is_edit else "Book added successfully"
        )
        self.redirect = book_route(record.id)
        return True
