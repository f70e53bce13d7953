# src/text/tokenizer.py
"""
Word tokenization and stop-word filtering for feedback texts.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

# Runs of letters/digits; punctuation, whitespace and underscores separate tokens
TOKEN_PATTERN = re.compile(r"[^\W_]+")


@dataclass(frozen=True)
class TextConfig:
    """Immutable stop-word configuration passed to the tokenizer and filters."""
    stop_words: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "TextConfig":
        return cls(stop_words=frozenset(word.lower() for word in words))


# Words in the sklearn list that carry meaning in customer feedback
FEEDBACK_TERMS = frozenset({
    "bill", "call", "computer", "system", "fire", "interest", "detail",
    "empty", "full", "find", "found", "front", "back", "top", "bottom",
    "move", "side", "part", "thick", "thin", "describe",
})

DEFAULT_TEXT_CONFIG = TextConfig.from_words(ENGLISH_STOP_WORDS - FEEDBACK_TERMS)


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split raw text into lowercase alphanumeric tokens.

    Args:
        text: Raw feedback text (may be empty or None)

    Returns:
        Tokens in the order they appear; empty list for blank or non-string input
    """
    if not isinstance(text, str):
        return []
    return TOKEN_PATTERN.findall(text.lower())


def remove_stop_words(tokens: List[str], config: TextConfig = DEFAULT_TEXT_CONFIG) -> List[str]:
    """Drop tokens found in the configured stop-word set, keeping order."""
    return [token for token in tokens if token.lower() not in config.stop_words]


def tokenize_without_stop_words(text: Optional[str], config: TextConfig = DEFAULT_TEXT_CONFIG) -> List[str]:
    return remove_stop_words(tokenize(text), config)
