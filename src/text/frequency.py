# src/text/frequency.py
"""
Word frequency tables and top-N keyword extraction.
"""

from collections import Counter
from typing import Dict, Optional

from src.analytics.errors import validate_top_n
from src.text.tokenizer import DEFAULT_TEXT_CONFIG, TextConfig, tokenize_without_stop_words


def count_words(text: Optional[str], config: TextConfig = DEFAULT_TEXT_CONFIG) -> Counter:
    """
    Count non stop-word tokens of a text.

    Keys keep the order in which each token was first seen, which is what
    `top_n` uses to break ties.
    """
    return Counter(tokenize_without_stop_words(text, config))


def top_n(table: Counter, n: int) -> Dict[str, int]:
    """
    Return the n most frequent tokens, highest count first.

    Tokens with equal counts keep their first-seen order. Fewer than n
    entries are returned when the table is smaller.
    """
    validate_top_n(n)
    if n == 0:
        return {}
    # most_common is a stable sort on insertion order for equal counts
    return dict(table.most_common(n))
