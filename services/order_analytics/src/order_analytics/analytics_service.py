"""
Order analytics service.

AnalyticsService is the single entry point of the engine: it drops cancelled
or failed orders, builds the order/item frames, runs every facet analyzer,
the derived facets and the insight generator, and assembles FullAnalytics.
"""

from typing import List, Optional, Sequence

from libs.analytics_shared.logging import get_logger
from libs.analytics_shared.metrics import Metrics

from .analyzers import (
    analyze_advanced,
    analyze_comparative,
    analyze_cost_optimization,
    analyze_diversity,
    analyze_food,
    analyze_health_dietary,
    analyze_order_behavior,
    analyze_patterns,
    analyze_payments,
    analyze_predictive,
    analyze_prices,
    analyze_restaurants,
    analyze_spending,
    analyze_time,
)
from .config import AnalyticsConfig, config
from .exceptions import InvalidOrderDataError
from .frame import OrderFrames
from .insights import generate_insights
from .models import FullAnalytics, Order

logger = get_logger(__name__, config.log_level)


def empty_analytics() -> FullAnalytics:
    """The canonical record returned when no usable orders remain."""
    return FullAnalytics()


class AnalyticsService:
    """
    Computes the full analytics record for one user's order history.

    The service holds no per-call state; the same instance can analyze any
    number of order lists.
    """

    def __init__(self, config: AnalyticsConfig = config):
        """
        Initialize the service.

        Args:
            config: Analytics configuration (timezone, currency, log level)
        """
        self.config = config
        logger.debug(
            f"Initializing AnalyticsService (timezone={config.timezone}, "
            f"currency={config.currency_code})"
        )

    @staticmethod
    def filter_valid(orders: Sequence[Order]) -> List[Order]:
        """Drop orders whose status marks them cancelled or failed."""
        return [order for order in orders if not order.is_excluded]

    def analyze(self, orders: Sequence[Order]) -> FullAnalytics:
        """
        Analyze an order history.

        Args:
            orders: Normalized orders, in any order

        Returns:
            FullAnalytics; the canonical empty record when nothing survives
            the status filter

        Raises:
            InvalidOrderDataError: if a surviving order has an unusable date
        """
        Metrics.counter("analytics_runs_total")
        valid_orders = self.filter_valid(orders)
        Metrics.gauge(
            "analytics_orders_filtered", len(orders) - len(valid_orders)
        )
        logger.info(
            f"Analyzing {len(valid_orders)} of {len(orders)} orders "
            "after status filtering"
        )

        if not valid_orders:
            return empty_analytics()

        with Metrics.timed("analytics_duration_ms"):
            try:
                frames = OrderFrames.from_orders(valid_orders, self.config.timezone)
            except InvalidOrderDataError as e:
                logger.warning(f"Rejecting order history: {e}")
                raise
            result = self._build(frames)

        logger.info(f"Analysis complete with {len(result.insights)} insights")
        return result

    def _build(self, frames: OrderFrames) -> FullAnalytics:
        orders, items = frames.orders, frames.items
        sorted_orders = frames.chronological().orders

        spending = analyze_spending(orders)
        restaurants = analyze_restaurants(orders)
        patterns = analyze_patterns(orders)
        time_analysis = analyze_time(sorted_orders)
        cost_optimization = analyze_cost_optimization(orders)
        logger.debug(
            f"Spending {spending.total_spent:.2f} across "
            f"{restaurants.unique_restaurants} restaurants"
        )

        return FullAnalytics(
            spending=spending,
            restaurants=restaurants,
            food=analyze_food(orders, items),
            patterns=patterns,
            payments=analyze_payments(orders),
            prices=analyze_prices(orders, items),
            behavior=analyze_order_behavior(orders, items),
            diversity=analyze_diversity(sorted_orders),
            time_analysis=time_analysis,
            cost_optimization=cost_optimization,
            health_dietary=analyze_health_dietary(orders, items),
            predictive=analyze_predictive(sorted_orders, spending, time_analysis),
            advanced=analyze_advanced(
                sorted_orders, restaurants, time_analysis, spending
            ),
            comparative=analyze_comparative(
                spending, time_analysis, cost_optimization
            ),
            insights=generate_insights(
                spending, restaurants, patterns, self.config.currency_symbol
            ),
        )


_default_service: Optional[AnalyticsService] = None


def analyze(orders: Sequence[Order]) -> FullAnalytics:
    """Analyze orders with a service built from the module configuration."""
    global _default_service
    if _default_service is None:
        _default_service = AnalyticsService()
    return _default_service.analyze(orders)
