# src/analytics/smoothing.py
"""
Rating timeline construction and smoothing.
"""

from typing import List, Sequence, Tuple
from datetime import datetime
import logging

import pandas as pd

from src.analytics.errors import validate_smoothing_factor
from src.models.schemas import FeedbackRecord

logger = logging.getLogger(__name__)


def build_rating_series(
    records: Sequence[FeedbackRecord],
    keep_collisions: bool = False,
) -> Tuple[List[datetime], List[float]]:
    """
    Group ratings by timestamp and sort them chronologically.

    Args:
        records: Feedback records in corpus order
        keep_collisions: When False, records sharing the exact same timestamp
            collapse to a single point and the later record wins. When True,
            every record is kept and ties stay in corpus order.

    Returns:
        Tuple of (timestamps, ratings), ascending by timestamp
    """
    if not records:
        return [], []

    df = pd.DataFrame(
        {
            "created_at": [record.created_at for record in records],
            "rating": [float(record.rating) for record in records],
        }
    )

    if not keep_collisions:
        before = len(df)
        df = df.drop_duplicates(subset="created_at", keep="last")
        if len(df) < before:
            logger.debug(f"Merged {before - len(df)} ratings sharing a timestamp")

    # Stable sort keeps corpus order among equal timestamps
    df = df.sort_values("created_at", kind="mergesort")

    timestamps = [records[i].created_at for i in df.index]
    return timestamps, df["rating"].tolist()


def smooth_series(values: Sequence[float], gamma: float = 0.6) -> List[float]:
    """
    Smooth a chronological series toward its scaled global mean.

    Each point becomes the mean of ``mean(values) * gamma`` and the 3-point
    window ``(prev, value, value)``: the previous raw value (the value itself
    at the first index) and the current value counted twice. The window never
    looks ahead to the next point.
    """
    gamma = validate_smoothing_factor(gamma)
    length = len(values)
    if length == 0:
        return []

    target = (sum(values) / length) * gamma
    smoothed = []
    for i, value in enumerate(values):
        prev = values[i - 1] if i > 0 else value
        window_avg = (prev + value + value) / 3
        smoothed.append((target + window_avg) / 2)
    return smoothed


def smooth_ratings(
    records: Sequence[FeedbackRecord],
    gamma: float = 0.6,
    keep_collisions: bool = False,
) -> List[Tuple[datetime, float]]:
    """Build the rating series of a corpus and pair each timestamp with its smoothed rating."""
    gamma = validate_smoothing_factor(gamma)
    timestamps, ratings = build_rating_series(records, keep_collisions=keep_collisions)
    return list(zip(timestamps, smooth_series(ratings, gamma)))
