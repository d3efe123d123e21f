"""Rating aggregation."""

from .aggregator import RatingAggregate, aggregate_ratings, load_aggregates, star_bar

__all__ = [
    "RatingAggregate",
    "aggregate_ratings",
    "load_aggregates",
    "star_bar",
]
