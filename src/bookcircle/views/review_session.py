"""The caller's single review of one book: create, edit, delete."""

from enum import Enum
from typing import Callable, Optional

from ..auth import AuthSession
from ..db.schemas import ReviewRecord, validate_input
from ..errors import BookCircleError, ValidationError
from ..notifications import Notifier
from ..reviews.manager import ReviewManager
from ..reviews.schemas import ReviewDraft
from .base import report_failure


class ReviewMode(str, Enum):
    """What the review panel shows."""

    NONE = "none"  # no review yet, empty form
    VIEW = "view"  # stored review, read-only
    EDIT = "edit"  # stored review, form pre-filled


class ReviewSession:
    """Review panel state for one user on one book.

    Failed calls post a notification and leave the state untouched.
    """

    def __init__(
        self,
        book_id: str,
        auth: AuthSession,
        reviews: ReviewManager,
        notifier: Optional[Notifier] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.book_id = book_id
        self.auth = auth
        self.reviews = reviews
        self.notifier = notifier or Notifier()
        self.on_change = on_change

        self.review: Optional[ReviewRecord] = None
        self.editing = False
        self.confirming_delete = False
        self.submitting = False

        # Form state; rating 0 means no star selected
        self.rating = 0
        self.review_text = ""

    @property
    def mode(self) -> ReviewMode:
        if self.review is None:
            return ReviewMode.NONE
        return ReviewMode.EDIT if self.editing else ReviewMode.VIEW

    @property
    def can_manage(self) -> bool:
        """Edit/delete controls are shown only to the review's author."""
        return self.review is not None and self.auth.owns(self.review.user_id)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """Look up the caller's existing review of this book."""
        try:
            review = self.reviews.get_user_review(self.book_id, self.auth.user_id)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to fetch reviews")
            return False
        self.sync(review)
        return True

    def sync(self, review: Optional[ReviewRecord]) -> None:
        """Adopt the stored review after a refetch.

        The form is left alone while the user is editing.
        """
        self.review = review
        if review is None:
            self.editing = False
            self._reset_form()
        elif not self.editing:
            self._fill_form(review)

    # -------------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------------

    def set_rating(self, rating: int) -> None:
        self.rating = rating

    def set_text(self, text: str) -> None:
        self.review_text = text

    def begin_edit(self) -> bool:
        if self.mode != ReviewMode.VIEW or not self.can_manage:
            return False
        self.editing = True
        self._fill_form(self.review)
        return True

    def cancel_edit(self) -> bool:
        """Leave edit mode without saving; the form reverts to the stored review."""
        if self.mode != ReviewMode.EDIT:
            return False
        self.editing = False
        self._fill_form(self.review)
        return True

    def submit(self) -> bool:
        """Create the review, or update it when one already exists."""
        if not self.auth.is_authenticated:
            self.notifier.error("Please log in to submit a review")
            return False

        try:
            draft = validate_input(ReviewDraft, rating=self.rating, review_text=self.review_text)
        except ValidationError as e:
            self.notifier.error(str(e))
            return False

        updating = self.review is not None
        self.submitting = True
        try:
            if updating:
                record = self.reviews.update_review(self.auth, self.review.id, draft)
            else:
                # Updates in place if another session created one meanwhile
                record = self.reviews.submit_review(self.auth, self.book_id, draft)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to submit review")
            return False
        finally:
            self.submitting = False

        self.review = record
        self.editing = False
        self._fill_form(record)
        self.notifier.success(
            "Review updated successfully" if updating else "Review submitted successfully"
        )
        self._changed()
        return True

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def request_delete(self) -> bool:
        """Open the delete confirmation."""
        if not self.can_manage:
            return False
        self.confirming_delete = True
        return True

    def cancel_delete(self) -> None:
        self.confirming_delete = False

    def confirm_delete(self) -> bool:
        """Delete the review after confirmation."""
        if not self.confirming_delete or self.review is None:
            return False

        try:
            self.reviews.delete_review(self.auth, self.review.id)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to delete review")
            return False

        self.confirming_delete = False
        self.sync(None)
        self.notifier.success("Review deleted successfully")
        self._changed()
        return True

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    def _fill_form(self, review: ReviewRecord) -> None:
        self.rating = review.rating
        self.review_text = review.review_text

    def _reset_form(self) -> None:
        self.rating = 0
        self.review_text = ""

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
