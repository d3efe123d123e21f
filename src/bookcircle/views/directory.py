"""Directory view: paginated, searchable, genre-filtered book listing."""

import logging
from typing import Optional

from ..books.manager import BookManager
from ..books.schemas import ALL_GENRES, BookPage, BookWithRating
from ..errors import BookCircleError
from ..notifications import Notifier
from .base import RequestTracker, report_failure

logger = logging.getLogger(__name__)


class DirectoryView:
    """State of the book directory page.

    Changing the search term or genre always returns to page 1.
    """

    def __init__(self, books: BookManager, notifier: Optional[Notifier] = None):
        self.books = books
        self.notifier = notifier or Notifier()

        self.page = 1
        self.search_term = ""
        self.genre = ALL_GENRES

        self.items: list[BookWithRating] = []
        self.total_pages = 0
        self.total_count = 0
        self.genres: list[str] = []

        self.loading = False
        self.error: Optional[str] = None

        self._requests = RequestTracker()

    @property
    def is_empty(self) -> bool:
        """True when a completed fetch found no books."""
        return not self.loading and self.error is None and not self.items

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """Load the genre filter options and the current page."""
        self.load_genres()
        return self.refresh()

    def load_genres(self) -> bool:
        try:
            self.genres = self.books.list_genres()
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to fetch genres")
            return False
        return True

    def begin_request(self) -> int:
        """Start a fetch and return its generation token."""
        self.loading = True
        return self._requests.begin()

    def fetch(self) -> BookPage:
        """Query the page matching the current filters."""
        return self.books.list_books(
            page=self.page,
            search_term=self.search_term,
            genre=self.genre,
        )

    def apply(self, token: int, result: BookPage) -> bool:
        """Apply a fetched page unless a newer request has started."""
        if not self._requests.is_current(token):
            logger.debug("Discarding stale directory result (token %d)", token)
            return False

        self.items = result.items
        self.total_pages = result.total_pages
        self.total_count = result.total_count
        self.loading = False
        self.error = None
        return True

    def fail(self, token: int, error: BookCircleError) -> bool:
        """Record a failed fetch unless a newer request has started."""
        if not self._requests.is_current(token):
            return False

        self.loading = False
        self.error = report_failure(self.notifier, error, "Failed to fetch books")
        return True

    def refresh(self) -> bool:
        """Fetch the current page. Returns True if the result was applied."""
        token = self.begin_request()
        try:
            result = self.fetch()
        except BookCircleError as e:
            self.fail(token, e)
            return False
        return self.apply(token, result)

    # -------------------------------------------------------------------------
    # Filters and pagination
    # -------------------------------------------------------------------------

    def set_search(self, term: str) -> bool:
        self.search_term = term or ""
        self.page = 1
        return self.refresh()

    def set_genre(self, genre: Optional[str]) -> bool:
        self.genre = genre or ALL_GENRES
        self.page = 1
        return self.refresh()

    def go_to(self, page: int) -> bool:
        """Jump to a page, clamped to the known page range."""
        last = max(self.total_pages, 1)
        self.page = min(max(page, 1), last)
        return self.refresh()

    def next_page(self) -> bool:
        if self.page >= self.total_pages:
            return False
        return self.go_to(self.page + 1)

    def previous_page(self) -> bool:
        if self.page <= 1:
            return False
        return self.go_to(self.page - 1)
