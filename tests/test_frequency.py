"""Unit tests for word frequency counting."""
import pytest

from src.analytics.errors import AnalyticsParameterError
from src.text.frequency import count_words, top_n
from src.text.tokenizer import TextConfig


class TestCountWords:
    """Test count_words."""

    def test_counts_non_stop_words(self):
        table = count_words("Great service and great price")
        assert dict(table) == {"great": 2, "service": 1, "price": 1}

    def test_keys_follow_first_seen_order(self):
        table = count_words("price great service great")
        assert list(table) == ["price", "great", "service"]

    def test_no_zero_counts_or_stop_words(self):
        table = count_words("the the and of is")
        assert len(table) == 0

    def test_empty_text(self):
        assert count_words("") == {}

    def test_custom_config(self):
        table = count_words("the price", TextConfig())
        assert dict(table) == {"the": 1, "price": 1}


class TestTopN:
    """Test top_n selection."""

    def test_sorted_descending_by_count(self):
        table = count_words("bravo alpha alpha charlie charlie charlie")
        assert list(top_n(table, 3).items()) == [("charlie", 3), ("alpha", 2), ("bravo", 1)]

    def test_ties_keep_first_seen_order(self):
        table = count_words("delta alpha charlie alpha bravo charlie")
        result = top_n(table, 3)
        assert list(result.items()) == [("alpha", 2), ("charlie", 2), ("delta", 1)]

    def test_returns_fewer_entries_than_n(self):
        table = count_words("alpha bravo")
        result = top_n(table, 10)
        assert len(result) == 2

    def test_zero_returns_empty(self):
        assert top_n(count_words("alpha bravo"), 0) == {}

    def test_negative_n_rejected(self):
        with pytest.raises(AnalyticsParameterError):
            top_n(count_words("alpha"), -1)
