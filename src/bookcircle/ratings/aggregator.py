"""Average rating and review count for books.

``aggregate_ratings`` is the single definition of a book's aggregate; the
directory, detail and profile pages all go through it. ``load_aggregates``
attaches aggregates to many books with one grouped query.
"""

from collections import defaultdict
from typing import Iterable, Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import Review

MAX_STARS = 5


class RatingAggregate(BaseModel):
    """Mean rating and number of reviews for one book."""

    average: float = 0.0
    count: int = 0

    model_config = {"frozen": True}

    @property
    def display_average(self) -> str:
        """Average rounded to one decimal, e.g. ``"4.0"``."""
        return f"{self.average:.1f}"

    @property
    def rounded_stars(self) -> int:
        """Average rounded to the nearest whole star."""
        # Half-up, not banker's rounding: 2.5 shows three stars
        return int(self.average + 0.5)

    @property
    def count_label(self) -> str:
        return f"{self.count} {'review' if self.count == 1 else 'reviews'}"

    @property
    def badge(self) -> Optional[str]:
        """Card badge like ``"4.0 (3 reviews)"``; None when unreviewed."""
        if self.count == 0:
            return None
        return f"{self.display_average} ({self.count_label})"


def aggregate_ratings(ratings: Iterable[int]) -> RatingAggregate:
    """Compute the mean and count of a sequence of ratings.

    The average is 0.0 for an empty sequence. No rounding is applied.
    """
    values = list(ratings)
    if not values:
        return RatingAggregate(average=0.0, count=0)
    return RatingAggregate(average=sum(values) / len(values), count=len(values))


def load_aggregates(session: Session, book_ids: Iterable[str]) -> dict[str, RatingAggregate]:
    """Fetch aggregates for many books in a single query.

    Args:
        session: Open database session
        book_ids: Books to aggregate

    Returns:
        Mapping of every requested book id to its aggregate. Books with no
        reviews map to the zero aggregate.
    """
    ids = list(dict.fromkeys(book_ids))
    if not ids:
        return {}

    stmt = select(Review.book_id, Review.rating).where(Review.book_id.in_(ids))

    ratings_by_book: dict[str, list[int]] = defaultdict(list)
    for book_id, rating in session.execute(stmt):
        ratings_by_book[book_id].append(rating)

    return {book_id: aggregate_ratings(ratings_by_book.get(book_id, [])) for book_id in ids}


def star_bar(filled: int, total: int = MAX_STARS) -> str:
    """Render ``filled`` of ``total`` stars."""
    filled = max(0, min(filled, total))
    return "★" * filled + "☆" * (total - filled)
