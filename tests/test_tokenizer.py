"""Unit tests for tokenization and stop-word filtering."""
import dataclasses
from collections import Counter

import pytest

from src.text.tokenizer import (
    DEFAULT_TEXT_CONFIG,
    TextConfig,
    remove_stop_words,
    tokenize,
    tokenize_without_stop_words,
)


class TestTokenize:
    """Test the word tokenizer."""

    def test_lowercases_and_strips_punctuation(self):
        assert tokenize("Great service!! Fast, friendly.") == ["great", "service", "fast", "friendly"]

    def test_blank_input_yields_no_tokens(self):
        assert tokenize("") == []
        assert tokenize("   \n\t ") == []
        assert tokenize("?!...") == []

    def test_non_string_input_degrades_to_empty(self):
        assert tokenize(None) == []
        assert tokenize(42) == []

    def test_apostrophes_and_underscores_split_tokens(self):
        assert tokenize("don't snake_case") == ["don", "t", "snake", "case"]

    def test_digits_are_kept(self):
        assert tokenize("Delivered in 3 days, order #A12") == ["delivered", "in", "3", "days", "order", "a12"]

    def test_unicode_letters(self):
        assert tokenize("Café CRÈME") == ["café", "crème"]


class TestStopWordFilter:
    """Test stop-word removal."""

    def test_default_config_removes_english_stop_words(self):
        tokens = ["the", "service", "and", "price"]
        assert remove_stop_words(tokens) == ["service", "price"]

    def test_order_is_preserved(self):
        tokens = ["price", "the", "delivery", "of", "app"]
        assert remove_stop_words(tokens) == ["price", "delivery", "app"]

    def test_custom_config(self):
        """Test that a custom stop-word set replaces the default one."""
        config = TextConfig.from_words(["Service", "great"])
        tokens = ["great", "service", "the", "price"]
        assert remove_stop_words(tokens, config) == ["the", "price"]

    def test_empty_config_keeps_everything(self):
        assert remove_stop_words(["the", "price"], TextConfig()) == ["the", "price"]

    def test_config_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_TEXT_CONFIG.stop_words = frozenset()

    def test_default_config_contains_common_words(self):
        assert {"the", "and", "is"} <= DEFAULT_TEXT_CONFIG.stop_words

    def test_default_config_keeps_feedback_terms(self):
        assert not {"bill", "call", "system", "computer", "fire"} & DEFAULT_TEXT_CONFIG.stop_words
        assert tokenize_without_stop_words("The bill was wrong and the system is down") == [
            "bill", "wrong", "system",
        ]

    def test_tokenize_and_filter_is_idempotent(self):
        """Re-tokenizing the filtered output yields the same multiset."""
        text = "The app is SLOW, and the checkout page crashes; slow slow!"
        filtered = tokenize_without_stop_words(text)
        again = tokenize_without_stop_words(" ".join(filtered))
        assert Counter(again) == Counter(filtered)
        assert "slow" in filtered
