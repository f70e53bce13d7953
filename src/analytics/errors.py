# src/analytics/errors.py
"""
Parameter validation shared by the analytics components.
"""

import numbers


class AnalyticsParameterError(ValueError):
    """Raised when an analytics query is called with an invalid parameter."""


def validate_cluster_count(k: int) -> int:
    if not isinstance(k, numbers.Integral) or isinstance(k, bool) or k <= 0:
        raise AnalyticsParameterError(f"Cluster count must be a positive integer, got {k!r}")
    return k


def validate_top_n(n: int) -> int:
    if not isinstance(n, numbers.Integral) or isinstance(n, bool) or n < 0:
        raise AnalyticsParameterError(f"Top-N must be a non-negative integer, got {n!r}")
    return n


def validate_smoothing_factor(gamma: float) -> float:
    if isinstance(gamma, bool) or not isinstance(gamma, numbers.Real) or not 0.0 < gamma <= 1.0:
        raise AnalyticsParameterError(f"Smoothing factor must be in (0, 1], got {gamma!r}")
    return float(gamma)


def validate_max_iter(max_iter: int) -> int:
    if not isinstance(max_iter, numbers.Integral) or isinstance(max_iter, bool) or max_iter <= 0:
        raise AnalyticsParameterError(f"Iteration cap must be a positive integer, got {max_iter!r}")
    return max_iter
