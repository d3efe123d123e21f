"""Book detail view: one book, its reviews, and the caller's review panel."""

from typing import Optional

from ..auth import AuthSession
from ..books.manager import BookManager
from ..db.schemas import BookRecord
from ..errors import BookCircleError
from ..notifications import Notifier
from ..ratings import RatingAggregate, aggregate_ratings
from ..reviews.manager import ReviewManager
from ..reviews.schemas import ReviewWithReviewer
from .base import DIRECTORY_ROUTE, report_failure
from .review_session import ReviewSession


class BookDetailView:
    """State of a book's detail page."""

    def __init__(
        self,
        book_id: str,
        auth: AuthSession,
        books: BookManager,
        reviews: ReviewManager,
        notifier: Optional[Notifier] = None,
    ):
        self.book_id = book_id
        self.auth = auth
        self.books = books
        self.reviews_manager = reviews
        self.notifier = notifier or Notifier()

        self.book: Optional[BookRecord] = None
        self.reviews: list[ReviewWithReviewer] = []
        self.loading = True
        self.redirect: Optional[str] = None
        self.confirming_book_delete = False

        # Only logged-in users get a review panel
        self.review_session: Optional[ReviewSession] = None
        if auth.is_authenticated:
            self.review_session = ReviewSession(
                book_id,
                auth,
                reviews,
                notifier=self.notifier,
                on_change=self.fetch_reviews,
            )

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """Fetch the book and its reviews.

        A missing book sends the user back to the directory.
        """
        self.loading = True
        try:
            self.book = self.books.get_book(self.book_id)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to fetch book details")
            self.redirect = DIRECTORY_ROUTE
            self.loading = False
            return False

        self.fetch_reviews()
        self.loading = False
        return True

    def fetch_reviews(self) -> bool:
        """Refetch the review list and the caller's own review within it."""
        try:
            reviews = self.reviews_manager.list_for_book(self.book_id)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to fetch reviews")
            return False

        self.reviews = reviews
        if self.review_session is not None:
            own = next((r.review for r in reviews if r.user_id == self.auth.user_id), None)
            self.review_session.sync(own)
        return True

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def aggregate(self) -> RatingAggregate:
        return aggregate_ratings(r.review.rating for r in self.reviews)

    @property
    def is_book_owner(self) -> bool:
        return self.book is not None and self.auth.owns(self.book.added_by)

    def can_edit_review(self, item: ReviewWithReviewer) -> bool:
        """Edit/delete controls on a review card are for its author only."""
        return self.auth.owns(item.user_id)

    # -------------------------------------------------------------------------
    # Book deletion
    # -------------------------------------------------------------------------

    def request_delete_book(self) -> bool:
        """Open the delete confirmation for the book."""
        if not self.is_book_owner:
            self.notifier.error("You can only delete your own books")
            return False
        self.confirming_book_delete = True
        return True

    def cancel_delete_book(self) -> None:
        self.confirming_book_delete = False

    def confirm_delete_book(self) -> bool:
        """Delete the book after confirmation and return to the directory."""
        if not self.confirming_book_delete:
            return False

        try:
            self.books.delete_book(self.auth, self.book_id)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to delete book")
            return False

        self.confirming_book_delete = False
        self.notifier.success("Book deleted successfully")
        self.redirect = DIRECTORY_ROUTE
        return True
