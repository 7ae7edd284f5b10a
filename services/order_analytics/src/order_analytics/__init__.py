"""
Order analytics engine.

Turns a user's food-delivery order history into spending, restaurant, food,
timing, cost, dietary and predictive facets plus templated insights.
"""

from .analytics_service import AnalyticsService, analyze, empty_analytics
from .exceptions import InvalidOrderDataError
from .models import FullAnalytics, Insight, Order, OrderItem
from .normalizer import map_payment_method, normalize_order, normalize_orders

__all__ = [
    "AnalyticsService",
    "analyze",
    "empty_analytics",
    "InvalidOrderDataError",
    "FullAnalytics",
    "Insight",
    "Order",
    "OrderItem",
    "map_payment_method",
    "normalize_order",
    "normalize_orders",
]
