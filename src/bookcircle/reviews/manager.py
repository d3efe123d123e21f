"""Review manager for book review operations."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..auth import AuthSession
from ..db.models import Book, Profile, Review
from ..db.schemas import ReviewRecord, to_record
from ..db.sqlite import Database, get_db
from ..errors import AuthorizationError, DuplicateReviewError, NotFoundError
from .schemas import ANONYMOUS_NAME, ReviewDraft, ReviewWithBook, ReviewWithReviewer

logger = logging.getLogger(__name__)


class ReviewManager:
    """Manages book review operations."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize review manager.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_for_book(self, book_id: str) -> list[ReviewWithReviewer]:
        """Get all reviews of a book, newest first, with reviewer names.

        Args:
            book_id: Book ID

        Returns:
            Reviews joined with the reviewer's profile name
        """
        with self.db.get_session() as session:
            stmt = (
                select(Review, Profile.name)
                .outerjoin(Profile, Profile.user_id == Review.user_id)
                .where(Review.book_id == book_id)
                .order_by(Review.created_at.desc(), Review.id.desc())
            )
            return [
                ReviewWithReviewer(
                    review=to_record(ReviewRecord, review),
                    reviewer_name=name or ANONYMOUS_NAME,
                )
                for review, name in session.execute(stmt).all()
            ]

    def list_for_user(self, user_id: str) -> list[ReviewWithBook]:
        """Get all reviews a user wrote, newest first, with book details.

        Args:
            user_id: Reviewer's user ID

        Returns:
            Reviews joined with the reviewed book's title and author
        """
        with self.db.get_session() as session:
            stmt = (
                select(Review, Book.title, Book.author)
                .join(Book, Book.id == Review.book_id)
                .where(Review.user_id == user_id)
                .order_by(Review.created_at.desc(), Review.id.desc())
            )
            return [
                ReviewWithBook(
                    review=to_record(ReviewRecord, review),
                    book_title=title,
                    book_author=author,
                )
                for review, title, author in session.execute(stmt).all()
            ]

    def get_review(self, review_id: str) -> ReviewRecord:
        """Get a review by ID.

        Raises:
            NotFoundError: If no review has this ID
        """
        with self.db.get_session() as session:
            review = session.get(Review, review_id)
            if not review:
                raise NotFoundError(f"Review not found: {review_id}")
            return to_record(ReviewRecord, review)

    def get_user_review(self, book_id: str, user_id: Optional[str]) -> Optional[ReviewRecord]:
        """Get the review a user wrote for a book, if any."""
        if not user_id:
            return None

        with self.db.get_session() as session:
            review = self._find_user_review(session, book_id, user_id)
            return to_record(ReviewRecord, review) if review else None

    # -------------------------------------------------------------------------
    # Review CRUD
    # -------------------------------------------------------------------------

    def create_review(self, auth: AuthSession, book_id: str, draft: ReviewDraft) -> ReviewRecord:
        """Create the caller's review of a book.

        Raises:
            AuthorizationError: If the caller is anonymous
            NotFoundError: If the book does not exist
            DuplicateReviewError: If the caller already reviewed this book
        """
        user_id = auth.require_user("Please log in to submit a review")

        with self.db.get_session() as session:
            if not session.get(Book, book_id):
                raise NotFoundError(f"Book not found: {book_id}")

            if self._find_user_review(session, book_id, user_id):
                raise DuplicateReviewError("You have already reviewed this book")

            review = Review(
                book_id=book_id,
                user_id=user_id,
                rating=draft.rating,
                review_text=draft.review_text,
            )
            session.add(review)
            try:
                session.flush()
            except IntegrityError as e:
                # Lost a race with another insert for the same user and book
                raise DuplicateReviewError("You have already reviewed this book") from e
            record = to_record(ReviewRecord, review)

        logger.info("Review %s created on book %s by %s", record.id, book_id, user_id)
        return record

    def update_review(self, auth: AuthSession, review_id: str, draft: ReviewDraft) -> ReviewRecord:
        """Update the rating and text of the caller's review.

        Raises:
            NotFoundError: If the review does not exist
            AuthorizationError: If the caller did not write the review
        """
        auth.require_user("Please log in to edit a review")

        with self.db.get_session() as session:
            review = self._owned_review(session, auth, review_id, "You can only edit your own reviews")
            review.rating = draft.rating
            review.review_text = draft.review_text
            session.flush()
            record = to_record(ReviewRecord, review)

        logger.info("Review %s updated by %s", review_id, auth.user_id)
        return record

    def delete_review(self, auth: AuthSession, review_id: str) -> None:
        """Delete the caller's review.

        Raises:
            NotFoundError: If the review does not exist
            AuthorizationError: If the caller did not write the review
        """
        auth.require_user("Please log in to delete a review")

        with self.db.get_session() as session:
            review = self._owned_review(
                session, auth, review_id, "You can only delete your own reviews"
            )
            session.delete(review)

        logger.info("Review %s deleted by %s", review_id, auth.user_id)

    def submit_review(self, auth: AuthSession, book_id: str, draft: ReviewDraft) -> ReviewRecord:
        """Create the caller's review, or update it in place if one exists.

        A user never ends up with two reviews of the same book.
        """
        user_id = auth.require_user("Please log in to submit a review")

        existing = self.get_user_review(book_id, user_id)
        if existing:
            return self.update_review(auth, existing.id, draft)

        try:
            return self.create_review(auth, book_id, draft)
        except DuplicateReviewError:
            existing = self.get_user_review(book_id, user_id)
            if not existing:
                raise
            return self.update_review(auth, existing.id, draft)

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    def _find_user_review(self, session, book_id: str, user_id: str) -> Optional[Review]:
        stmt = select(Review).where(Review.book_id == book_id, Review.user_id == user_id)
        return session.execute(stmt).scalar_one_or_none()

    def _owned_review(self, session, auth: AuthSession, review_id: str, message: str) -> Review:
        review = session.get(Review, review_id)
        if not review:
            raise NotFoundError(f"Review not found: {review_id}")
        if not auth.owns(review.user_id):
            raise AuthorizationError(message)
        return review
