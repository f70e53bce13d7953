"""Unit tests for rating timeline smoothing."""
from datetime import datetime, timedelta, timezone

import pytest

from src.analytics.errors import AnalyticsParameterError
from src.analytics.smoothing import build_rating_series, smooth_ratings, smooth_series
from src.models.schemas import FeedbackRecord


T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _record(rating, created_at, text="ok"):
    return FeedbackRecord(text=text, rating=rating, created_at=created_at, organization_id="org-1")


class TestSmoothSeries:
    """Test smooth_series."""

    def test_constant_series_is_fixed_point(self):
        assert smooth_series([4, 4, 4, 4], gamma=1.0) == pytest.approx([4, 4, 4, 4])

    def test_window_and_global_target(self):
        # target = mean([1, 2, 3]) * 0.6 = 1.2; windows (1, 1, 1), (1, 2, 2), (2, 3, 3)
        result = smooth_series([1, 2, 3], gamma=0.6)
        assert result == pytest.approx([(1.2 + 1) / 2, (1.2 + 5 / 3) / 2, (1.2 + 8 / 3) / 2])

    def test_window_does_not_look_ahead(self):
        """The next value never enters the window of the current point."""
        # target = 3; first window is (1, 1, 1) even though 5 follows
        result = smooth_series([1, 5], gamma=1.0)
        assert result[0] == pytest.approx(2.0)
        # second window is (1, 5, 5)
        assert result[1] == pytest.approx((3 + 11 / 3) / 2)

    def test_later_values_only_affect_target(self):
        # Same mean, same history: the first two points must match
        first = smooth_series([2, 4, 6, 0], gamma=1.0)
        second = smooth_series([2, 4, 0, 6], gamma=1.0)
        assert first[:2] == pytest.approx(second[:2])
        assert first[2] != pytest.approx(second[2])

    def test_single_value(self):
        assert smooth_series([5], gamma=0.6) == pytest.approx([4.0])

    def test_empty_series(self):
        assert smooth_series([], gamma=0.6) == []

    def test_same_length_as_input(self):
        values = [5, 1, 4, 2, 3, 5]
        assert len(smooth_series(values)) == len(values)

    @pytest.mark.parametrize("gamma", [0.0, -0.5, 1.5])
    def test_invalid_gamma(self, gamma):
        with pytest.raises(AnalyticsParameterError):
            smooth_series([1, 2, 3], gamma=gamma)


class TestBuildRatingSeries:
    """Test grouping of ratings by timestamp."""

    def test_sorted_by_timestamp(self):
        records = [
            _record(3, T0 + timedelta(days=2)),
            _record(1, T0),
            _record(5, T0 + timedelta(days=1)),
        ]
        timestamps, values = build_rating_series(records)
        assert timestamps == [T0, T0 + timedelta(days=1), T0 + timedelta(days=2)]
        assert values == [1.0, 5.0, 3.0]

    def test_same_timestamp_last_write_wins(self):
        t1 = T0 + timedelta(hours=1)
        records = [_record(5, t1), _record(1, T0), _record(3, t1)]
        timestamps, values = build_rating_series(records)
        assert timestamps == [T0, t1]
        assert values == [1.0, 3.0]

    def test_keep_collisions_preserves_every_record(self):
        t1 = T0 + timedelta(hours=1)
        records = [_record(5, t1), _record(1, T0), _record(3, t1)]
        timestamps, values = build_rating_series(records, keep_collisions=True)
        assert timestamps == [T0, t1, t1]
        assert values == [1.0, 5.0, 3.0]

    def test_empty_records(self):
        assert build_rating_series([]) == ([], [])


class TestSmoothRatings:
    """Test smooth_ratings."""

    def test_pairs_timestamps_with_smoothed_values(self):
        records = [_record(4, T0 + timedelta(days=1)), _record(4, T0)]
        series = smooth_ratings(records, gamma=1.0)
        assert [timestamp for timestamp, _ in series] == [T0, T0 + timedelta(days=1)]
        assert [value for _, value in series] == pytest.approx([4.0, 4.0])

    def test_invalid_gamma_rejected_before_computation(self):
        with pytest.raises(AnalyticsParameterError):
            smooth_ratings([], gamma=2.0)
