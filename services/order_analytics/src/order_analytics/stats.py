"""
Shared statistics helpers for the analyzers.

All helpers are zero-guarded: empty input or a zero denominator yields the
neutral value instead of raising.
"""

from typing import Dict, Iterable, Sequence

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    if not denominator:
        return default
    return float(numerator) / float(denominator)


def percentage(part: float, whole: float) -> float:
    return safe_divide(part, whole) * 100


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def median(values: Sequence[float]) -> float:
    """Middle value; mean of the two middles on an even count."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=float)))


def population_variance(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def ols_slope(values: Sequence[float]) -> float:
    """Least-squares slope of values against their index 0..n-1."""
    if len(values) < 2:
        return 0.0
    y = np.asarray(values, dtype=float)
    x = np.arange(len(y), dtype=float)
    slope, _intercept = np.polyfit(x, y, 1)
    return float(slope)


def linearly_weighted_mean(values: Sequence[float]) -> float:
    """Mean where the i-th value (oldest first) has weight i + 1."""
    if len(values) == 0:
        return 0.0
    weights = np.arange(1, len(values) + 1, dtype=float)
    return float(np.average(np.asarray(values, dtype=float), weights=weights))


def trend_percentage(values: Sequence[float]) -> float:
    """OLS slope expressed as a percentage of the mean of the values."""
    if len(values) < 2:
        return 0.0
    return percentage(ols_slope(values), mean(values))


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def keyword_mask(names: pd.Series, keywords: Sequence[str]) -> pd.Series:
    """Boolean mask of names containing any keyword as a substring."""
    return names.map(lambda name: contains_any(name, keywords)).astype(bool)


def counts_in_order(values: pd.Series) -> pd.Series:
    """Occurrence counts keyed by value, in first-seen order."""
    if values.empty:
        return pd.Series(dtype="int64")
    return values.groupby(values, sort=False).size()


def top_n(counts: pd.Series, n: int) -> Dict[str, int]:
    """
    The n largest counts, descending.

    The sort is stable, so equal counts keep their existing (first-seen) order.
    """
    ranked = counts.sort_values(ascending=False, kind="stable").head(n)
    return to_int_dict(ranked)


def to_int_dict(series: pd.Series) -> Dict[str, int]:
    return {str(key): int(value) for key, value in series.items()}


def to_float_dict(series: pd.Series) -> Dict[str, float]:
    return {str(key): float(value) for key, value in series.items()}
