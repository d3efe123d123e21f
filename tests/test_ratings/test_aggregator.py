"""Tests for rating aggregation."""

import pytest

from bookcircle.ratings import RatingAggregate, aggregate_ratings, load_aggregates, star_bar


class TestAggregateRatings:
    """Tests for the pure aggregate function."""

    def test_empty_list_is_zero(self):
        result = aggregate_ratings([])
        assert result.average == 0.0
        assert result.count == 0

    def test_mean_of_ratings(self):
        result = aggregate_ratings([5, 4, 3])
        assert result.average == pytest.approx(4.0)
        assert result.count == 3

    @pytest.mark.parametrize("ratings", [[1], [2, 5], [1, 2, 2, 5], [3, 3, 4, 4, 5, 1, 2]])
    def test_average_is_sum_over_count(self, ratings):
        result = aggregate_ratings(ratings)
        assert result.average == pytest.approx(sum(ratings) / len(ratings))
        assert result.count == len(ratings)

    def test_no_rounding_applied(self):
        result = aggregate_ratings([5, 4, 4])
        assert result.average == pytest.approx(13 / 3)

    def test_accepts_generators(self):
        result = aggregate_ratings(r for r in [2, 4])
        assert result.average == pytest.approx(3.0)
        assert result.count == 2

    def test_same_input_same_output(self):
        assert aggregate_ratings([1, 5]) == aggregate_ratings([1, 5])


class TestRatingAggregateDisplay:
    """Tests for presentation helpers."""

    def test_badge_with_reviews(self):
        assert aggregate_ratings([5, 4, 3]).badge == "4.0 (3 reviews)"

    def test_badge_singular(self):
        assert aggregate_ratings([5]).badge == "5.0 (1 review)"

    def test_no_badge_without_reviews(self):
        assert aggregate_ratings([]).badge is None

    def test_display_average_one_decimal(self):
        assert aggregate_ratings([5, 4, 4]).display_average == "4.3"

    def test_rounded_stars(self):
        assert RatingAggregate(average=4.4, count=5).rounded_stars == 4
        assert RatingAggregate(average=2.5, count=2).rounded_stars == 3
        assert RatingAggregate().rounded_stars == 0

    def test_star_bar(self):
        assert star_bar(3) == "★★★☆☆"
        assert star_bar(0) == "☆☆☆☆☆"
        assert star_bar(9) == "★★★★★"


class TestLoadAggregates:
    """Tests for the batched aggregate query."""

    def test_groups_by_book(self, db, make_book, make_review):
        first = make_book(title="First")
        second = make_book(title="Second")
        unreviewed = make_book(title="Third")
        make_review(first, "u1", 5)
        make_review(first, "u2", 4)
        make_review(first, "u3", 3)
        make_review(second, "u1", 2)

        with db.get_session() as session:
            result = load_aggregates(session, [first, second, unreviewed])

        assert result[first].average == pytest.approx(4.0)
        assert result[first].count == 3
        assert result[second].average == pytest.approx(2.0)
        assert result[second].count == 1
        assert result[unreviewed] == RatingAggregate(average=0.0, count=0)

    def test_empty_ids(self, db):
        with db.get_session() as session:
            assert load_aggregates(session, []) == {}

    def test_unknown_book_gets_zero(self, db):
        with db.get_session() as session:
            result = load_aggregates(session, ["missing"])
        assert result == {"missing": RatingAggregate()}
