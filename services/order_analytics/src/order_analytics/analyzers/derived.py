"""
Derived facets built on top of the independent facet outputs.

The coefficients below are fixed heuristic blends, reproduced literally.
"""

import pandas as pd

from .. import stats
from ..constants import (
    DEFAULT_SPENDING_PERCENTILE,
    LIFETIME_WEIGHT,
    RECENT_MONTHS_WINDOW,
    RECENT_WEIGHT,
    SPENDING_PERCENTILE_BUCKETS,
    TREND_CLAMP_PERCENT,
    TREND_LABEL_THRESHOLD,
)
from ..models import (
    AdvancedMetrics,
    ComparativeMetrics,
    CostOptimizationAnalytics,
    ExplorationSplit,
    PredictiveAnalytics,
    RestaurantAnalytics,
    SpendingAnalytics,
    TimeAnalytics,
)
from .timing import span_in_days

# Used for lifetime value when a single order gives no observable span
SINGLE_ORDER_SPAN_DAYS = 30


def months_between(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Calendar months from start to end, both inclusive, at least 1."""
    span = (end.year - start.year) * 12 + (end.month - start.month) + 1
    return max(1, span)


def spending_trend_label(trend_percentage: float) -> str:
    if trend_percentage > TREND_LABEL_THRESHOLD:
        return "increasing"
    if trend_percentage < -TREND_LABEL_THRESHOLD:
        return "decreasing"
    return "stable"


def analyze_predictive(
    sorted_orders: pd.DataFrame,
    spending: SpendingAnalytics,
    time_analysis: TimeAnalytics,
) -> PredictiveAnalytics:
    """
    Forecast next month's spend from recent and lifetime monthly averages.

    The forecast blends a linearly weighted average of the last six monthly
    totals (70%) with the lifetime monthly average (30%), then applies the
    recent trend: the least-squares slope of those totals as a percentage of
    their mean, clamped to +/-15%.
    """
    if len(sorted_orders) < 2:
        return PredictiveAnalytics(
            forecasted_monthly_spending=spending.average_order_value,
            spending_trend="stable",
            trend_percentage=0.0,
            predicted_next_order_days=7,
            # Total times twelve, not scaled by the observed span
            estimated_annual_spending=spending.total_spent * 12,
        )

    timestamps = sorted_orders["timestamp"]
    active_months = months_between(timestamps.iloc[0], timestamps.iloc[-1])
    lifetime_monthly_avg = spending.total_spent / active_months

    monthly_totals = [
        spending.monthly_spending[month] for month in sorted(spending.monthly_spending)
    ]
    recent = monthly_totals[-RECENT_MONTHS_WINDOW:]
    recent_weighted_avg = (
        stats.linearly_weighted_mean(recent) if recent else lifetime_monthly_avg
    )

    trend = stats.clamp(
        stats.trend_percentage(recent), -TREND_CLAMP_PERCENT, TREND_CLAMP_PERCENT
    )
    base_forecast = (
        recent_weighted_avg * RECENT_WEIGHT + lifetime_monthly_avg * LIFETIME_WEIGHT
    )
    forecast = base_forecast * (1 + trend / 100)

    return PredictiveAnalytics(
        forecasted_monthly_spending=forecast,
        spending_trend=spending_trend_label(trend),
        trend_percentage=trend,
        predicted_next_order_days=max(1.0, time_analysis.average_days_between_orders),
        estimated_annual_spending=forecast * 12,
    )


def churn_risk(acceleration: float) -> float:
    if acceleration < -20:
        return 80
    if acceleration < 0:
        return 50
    return 20


def analyze_advanced(
    sorted_orders: pd.DataFrame,
    restaurants: RestaurantAnalytics,
    time_analysis: TimeAnalytics,
    spending: SpendingAnalytics,
) -> AdvancedMetrics:
    """Composite behavioural scores, each capped at 100 where noted."""
    total_orders = len(sorted_orders)
    timestamps = sorted_orders["timestamp"]

    if total_orders > 1:
        span_days = span_in_days(timestamps.iloc[0], timestamps.iloc[-1])
    else:
        span_days = SINGLE_ORDER_SPAN_DAYS
    lifetime_value = spending.total_spent / max(1.0, span_days) * 365

    orders_per_restaurant = total_orders / max(1, restaurants.unique_restaurants)

    loyalty_pct = restaurants.loyalty_analysis.top_restaurant_percentage
    brand_loyalty = min(
        100.0, loyalty_pct * 0.6 + (100 - spending.voucher_usage_rate) * 0.4
    )

    hours = sorted_orders["hour"].tolist()
    hour_variance = stats.population_variance(hours) if len(hours) > 1 else 0.0

    restaurant_counts = sorted_orders["restaurant_name"].value_counts()
    top_count = int(restaurant_counts.max()) if total_orders else 0
    exploitation = stats.percentage(top_count, total_orders)

    return AdvancedMetrics(
        customer_lifetime_value=lifetime_value,
        order_efficiency_score=min(100.0, orders_per_restaurant * 10),
        brand_loyalty_score=brand_loyalty,
        spontaneity_index=min(100.0, hour_variance / 50 * 100),
        deal_dependency_ratio=spending.voucher_usage_rate,
        churn_risk_score=churn_risk(time_analysis.ordering_acceleration),
        exploration_vs_exploitation=ExplorationSplit(
            exploration_percentage=100 - exploitation,
            exploitation_percentage=exploitation,
        ),
    )


def spending_percentile(average_monthly_spending: float) -> int:
    for threshold, percentile in SPENDING_PERCENTILE_BUCKETS:
        if average_monthly_spending > threshold:
            return percentile
    return DEFAULT_SPENDING_PERCENTILE


def order_frequency_category(average_monthly_orders: float) -> str:
    if average_monthly_orders > 15:
        return "Heavy"
    if average_monthly_orders > 8:
        return "Moderate"
    return "Light"


def analyze_comparative(
    spending: SpendingAnalytics,
    time_analysis: TimeAnalytics,
    cost_optimization: CostOptimizationAnalytics,
) -> ComparativeMetrics:
    """Place the user against fixed regional spending and frequency baselines."""
    monthly_values = list(spending.monthly_spending.values())
    if monthly_values:
        average_monthly_spending = stats.mean(monthly_values)
    else:
        average_monthly_spending = spending.average_order_value * 4

    average_monthly_orders = stats.mean(
        list(time_analysis.order_frequency_trend.values())
    )

    fee_score = max(0.0, 100 - cost_optimization.average_fee_percentage * 2)
    value_consciousness = spending.voucher_usage_rate * 0.6 + fee_score * 0.4

    return ComparativeMetrics(
        spending_percentile=spending_percentile(average_monthly_spending),
        order_frequency_category=order_frequency_category(average_monthly_orders),
        value_consciousness_score=value_consciousness,
    )
