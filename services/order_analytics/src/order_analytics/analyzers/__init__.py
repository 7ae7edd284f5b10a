"""
Facet analyzers.

Each analyzer is a pure function of the order/item frames (and, for derived
facets, of previously computed facets) returning a frozen facet model.
"""

from .derived import analyze_advanced, analyze_comparative, analyze_predictive
from .food import analyze_food, analyze_health_dietary, analyze_order_behavior
from .restaurants import analyze_diversity, analyze_restaurants
from .spending import (
    analyze_cost_optimization,
    analyze_payments,
    analyze_prices,
    analyze_spending,
    categorize_spending,
)
from .timing import analyze_patterns, analyze_time

__all__ = [
    "analyze_spending",
    "categorize_spending",
    "analyze_restaurants",
    "analyze_food",
    "analyze_patterns",
    "analyze_payments",
    "analyze_prices",
    "analyze_order_behavior",
    "analyze_diversity",
    "analyze_time",
    "analyze_cost_optimization",
    "analyze_health_dietary",
    "analyze_predictive",
    "analyze_advanced",
    "analyze_comparative",
]
