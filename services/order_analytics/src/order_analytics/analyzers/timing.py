"""
Time-based facets: daily/weekly ordering patterns and longer-term cadence.
"""

import pandas as pd

from .. import stats
from ..models import PatternAnalytics, TimeAnalytics, TimeGapDistribution, WeekendSplit

SECONDS_PER_DAY = 24 * 60 * 60


def analyze_patterns(orders: pd.DataFrame) -> PatternAnalytics:
    """
    Hour-of-day and day-of-week distribution.

    Ties resolve to the lowest hour and to the earliest day in a Sunday-first
    week. Weekend means Saturday or Sunday.
    """
    total_orders = len(orders)
    hourly = orders.groupby("hour", sort=True).size()
    # Keyed by (weekday, day_name) so idxmax yields the earliest Sunday-first day
    daily = orders.groupby(["weekday", "day_name"], sort=True).size()
    weekend_orders = int(orders["is_weekend"].sum())

    return PatternAnalytics(
        peak_hour=int(hourly.idxmax()),
        peak_day=daily.idxmax()[1],
        weekend_vs_weekday=WeekendSplit(
            weekend_orders=weekend_orders,
            weekday_orders=total_orders - weekend_orders,
            weekend_percentage=stats.percentage(weekend_orders, total_orders),
        ),
        hourly_patterns=stats.to_int_dict(hourly),
    )


def gaps_in_days(sorted_orders: pd.DataFrame) -> pd.Series:
    """Fractional days between consecutive orders."""
    return (
        sorted_orders["timestamp"].diff().dropna().dt.total_seconds() / SECONDS_PER_DAY
    )


def span_in_days(start: pd.Timestamp, end: pd.Timestamp) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY


def ordering_acceleration(sorted_orders: pd.DataFrame) -> float:
    """
    Percentage change in orders/day between the first and second half.

    The split is at index n // 2; the first half's frequency is midpoint
    orders over the days from the first order to the midpoint order.
    """
    total_orders = len(sorted_orders)
    midpoint = total_orders // 2
    if midpoint == 0:
        return 0.0

    timestamps = sorted_orders["timestamp"]
    first_half_days = span_in_days(timestamps.iloc[0], timestamps.iloc[midpoint])
    second_half_days = span_in_days(timestamps.iloc[midpoint], timestamps.iloc[-1])

    first_half_freq = stats.safe_divide(midpoint, first_half_days)
    second_half_freq = stats.safe_divide(total_orders - midpoint, second_half_days)

    if first_half_freq <= 0:
        return 0.0
    return (second_half_freq - first_half_freq) / first_half_freq * 100


def _bucket_gaps(gaps: pd.Series) -> TimeGapDistribution:
    return TimeGapDistribution(
        same_day=int((gaps < 1).sum()),
        within_week=int(((gaps >= 1) & (gaps <= 7)).sum()),
        within_month=int(((gaps > 7) & (gaps <= 30)).sum()),
        over_month=int((gaps > 30).sum()),
    )


def analyze_time(sorted_orders: pd.DataFrame) -> TimeAnalytics:
    """
    Monthly cadence, gaps between orders, weekday/quarter spend and whether
    ordering is speeding up or slowing down.

    Args:
        sorted_orders: Order frame sorted ascending by timestamp

    Returns:
        TimeAnalytics facet (all zero for an empty frame)
    """
    if sorted_orders.empty:
        return TimeAnalytics()

    gaps = gaps_in_days(sorted_orders)

    by_weekday = sorted_orders.groupby(["weekday", "day_name"], sort=True)[
        "total_value"
    ].sum()
    by_quarter = sorted_orders.groupby("quarter", sort=True)["total_value"].sum()

    return TimeAnalytics(
        order_frequency_trend=stats.to_int_dict(
            sorted_orders.groupby("month", sort=True).size()
        ),
        average_days_between_orders=stats.mean(gaps.tolist()),
        spending_by_day_of_week={
            day_name: float(total) for (_, day_name), total in by_weekday.items()
        },
        seasonal_patterns=stats.to_float_dict(by_quarter),
        time_gap_distribution=_bucket_gaps(gaps),
        ordering_acceleration=ordering_acceleration(sorted_orders),
    )
