"""Unit tests for the pure insight aggregator."""

import pytest

from app.services.insight_service import InsightSnapshot, RatingScore, aggregate


class TestAggregate:

    def test_no_ratings_produces_no_insight(self):
        assert aggregate([], preparation_count=3) is None

    def test_mixed_dimension_sets(self):
        """Missing dimensions are excluded from that dimension's average."""
        ratings = [
            RatingScore(4, {"taste": 4, "texture": 5}),
            RatingScore(2, {"taste": 2}),
        ]

        snapshot = aggregate(ratings, preparation_count=2)

        assert snapshot.average_overall_rating == 3.0
        assert snapshot.dimension_averages == {"taste": 3.0, "texture": 5.0}
        assert snapshot.total_ratings == 2

    def test_preparation_count_is_taken_as_given(self):
        """Preps without ratings still count as preparations."""
        snapshot = aggregate([RatingScore(5)], preparation_count=4)

        assert snapshot.total_preparations == 4
        assert snapshot.total_ratings == 1

    def test_average_is_not_rounded(self):
        snapshot = aggregate(
            [RatingScore(5), RatingScore(4), RatingScore(4)], preparation_count=1
        )
        assert snapshot.average_overall_rating == pytest.approx(13 / 3)

    def test_ratings_without_dimensions(self):
        snapshot = aggregate([RatingScore(3), RatingScore(1)], preparation_count=2)

        assert snapshot == InsightSnapshot(
            average_overall_rating=2.0,
            total_ratings=2,
            total_preparations=2,
            dimension_averages={},
        )

    def test_accepts_objects_with_rating_attributes(self):
        """Anything exposing overall_rating and dimensions can be aggregated."""

        class Row:
            def __init__(self, overall_rating, dimensions):
                self.overall_rating = overall_rating
                self.dimensions = dimensions

        snapshot = aggregate([Row(1, None), Row(5, {"ease": 3})], preparation_count=2)

        assert snapshot.average_overall_rating == 3.0
        assert snapshot.dimension_averages == {"ease": 3.0}

    def test_each_call_is_a_full_recomputation(self):
        first = aggregate([RatingScore(5, {"taste": 5})], preparation_count=1)
        second = aggregate(
            [RatingScore(5, {"taste": 5}), RatingScore(1, {"taste": 1})],
            preparation_count=1,
        )

        assert first.average_overall_rating == 5.0
        assert second.average_overall_rating == 3.0
        assert second.dimension_averages == {"taste": 3.0}
