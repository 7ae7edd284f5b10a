"""
Order analytics models: the normalized order input and every analytics facet.

Facet defaults are the canonical "no data" values, so a default-constructed
FullAnalytics is exactly the record returned when no usable orders remain.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    EMPTY_SPENDING_PERCENTILE,
    EXCLUDED_STATUS_TOKENS,
    UNKNOWN_RESTAURANT,
)

InsightCategory = Literal[
    "spending",
    "voucher",
    "timing",
    "loyalty",
    "frequency",
    "optimization",
    "health",
    "prediction",
    "other",
]
SpendingTrend = Literal["increasing", "decreasing", "stable"]


class FrozenModel(BaseModel):
    """Immutable base for orders and facets."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# -------------------------------------------------------------------------
# INPUT
# -------------------------------------------------------------------------


class OrderItem(FrozenModel):
    """A single line of an order."""

    name: str = Field(..., description="Item name; matched case-insensitively")
    quantity: int = Field(1, gt=0, description="Units ordered on this line")
    price: float = Field(
        0.0, ge=0, description="Line-applicable amount as normalized upstream"
    )


class Order(FrozenModel):
    """
    One normalized food-delivery order.

    Produced by the upstream normalizer; the analytics engine only reads it.
    """

    id: str = Field(..., description="Opaque order identifier")
    order_code: str = Field("N/A", description="Human-facing order code")
    restaurant_name: str = Field(UNKNOWN_RESTAURANT, description="Vendor name")

    # Monetary fields, currency-agnostic
    total_value: float = Field(0.0, ge=0, description="Amount charged")
    subtotal: float = Field(0.0, ge=0, description="Food subtotal before fees")
    delivery_fee: float = Field(0.0, ge=0)
    service_fee: float = Field(0.0, ge=0)
    voucher_discount: float = Field(0.0, ge=0, description="Voucher value applied")

    status: str = Field("", description="Free-text delivery status")
    date: str = Field(
        ...,
        description="ISO-8601 timestamp of when the order was placed",
        examples=["2024-01-05T12:00:00Z"],
    )
    items: List[OrderItem] = Field(default_factory=list)
    payment_method: str = Field("Unknown", description="Canonical payment label")

    @field_validator("restaurant_name")
    @classmethod
    def default_restaurant_name(cls, v: str) -> str:
        """Blank vendor names fall back to the shared sentinel."""
        return v.strip() or UNKNOWN_RESTAURANT

    @property
    def is_excluded(self) -> bool:
        """Cancelled or failed orders do not count towards analytics."""
        status = self.status.lower()
        return any(token in status for token in EXCLUDED_STATUS_TOKENS)


# -------------------------------------------------------------------------
# FACETS
# -------------------------------------------------------------------------


class SpendingCategory(FrozenModel):
    type: str = "N/A"
    description: str = "No data"
    color: str = "gray"


class SpendingAnalytics(FrozenModel):
    """Totals, averages and monthly spend."""

    total_spent: float = 0.0
    average_order_value: float = 0.0
    median_order_value: float = 0.0
    total_delivery_fees: float = 0.0
    total_service_fees: float = 0.0
    total_voucher_savings: float = 0.0
    voucher_usage_rate: float = Field(0.0, description="% of orders with a voucher")
    monthly_spending: Dict[str, float] = Field(
        default_factory=dict, description="YYYY-MM -> summed total_value"
    )
    spending_category: SpendingCategory = Field(default_factory=SpendingCategory)


class LoyaltyAnalysis(FrozenModel):
    level: str = "N/A"
    description: str = "No data"
    top_restaurant: str = ""
    top_restaurant_percentage: float = 0.0


class RestaurantAnalytics(FrozenModel):
    top_restaurants_by_orders: Dict[str, int] = Field(default_factory=dict)
    unique_restaurants: int = 0
    loyalty_analysis: LoyaltyAnalysis = Field(default_factory=LoyaltyAnalysis)


class FoodAnalytics(FrozenModel):
    top_food_items: Dict[str, int] = Field(default_factory=dict)
    food_categories: Dict[str, int] = Field(
        default_factory=dict, description="Only categories with at least one match"
    )
    average_items_per_order: float = Field(
        0.0, description="Item lines per order, quantities ignored"
    )
    total_unique_items: int = 0


class WeekendSplit(FrozenModel):
    weekend_orders: int = 0
    weekday_orders: int = 0
    weekend_percentage: float = 0.0


class PatternAnalytics(FrozenModel):
    peak_hour: int = 0
    peak_day: str = ""
    weekend_vs_weekday: WeekendSplit = Field(default_factory=WeekendSplit)
    hourly_patterns: Dict[str, int] = Field(
        default_factory=dict, description="Local hour (as string) -> order count"
    )


class PaymentAnalytics(FrozenModel):
    payment_method_counts: Dict[str, int] = Field(default_factory=dict)
    preferred_payment_method: str = "N/A"


class PriceRange(FrozenModel):
    min: float = 0.0
    max: float = 0.0


class PriceAnalytics(FrozenModel):
    average_price_per_item: float = 0.0
    price_range: PriceRange = Field(default_factory=PriceRange)
    restaurant_value_scores: Dict[str, float] = Field(
        default_factory=dict, description="Restaurant -> mean order value"
    )
    discount_effectiveness: float = Field(
        0.0, description="Mean voucher discount over orders that used one"
    )
    price_trend_over_time: Dict[str, float] = Field(
        default_factory=dict, description="YYYY-MM -> quantity-weighted item price"
    )


class OrderSizeDistribution(FrozenModel):
    small: int = 0
    medium: int = 0
    large: int = 0


class AddonFrequency(FrozenModel):
    drinks_percentage: float = 0.0
    desserts_percentage: float = 0.0


class ReorderPatterns(FrozenModel):
    exact_reorder_count: int = 0
    similar_items_frequency: Dict[str, int] = Field(default_factory=dict)


class OrderBehaviorAnalytics(FrozenModel):
    order_size_distribution: OrderSizeDistribution = Field(
        default_factory=OrderSizeDistribution
    )
    average_basket_size: float = 0.0
    addon_frequency: AddonFrequency = Field(default_factory=AddonFrequency)
    reorder_patterns: ReorderPatterns = Field(default_factory=ReorderPatterns)


class DiversityAnalytics(FrozenModel):
    cuisine_switching_rate: float = 0.0
    new_restaurants_per_month: Dict[str, int] = Field(default_factory=dict)
    restaurant_discovery_rate: float = 0.0
    cuisine_preference_evolution: Dict[str, Dict[str, int]] = Field(
        default_factory=dict
    )
    variety_score: float = 0.0


class TimeGapDistribution(FrozenModel):
    same_day: int = 0
    within_week: int = 0
    within_month: int = 0
    over_month: int = 0


class TimeAnalytics(FrozenModel):
    order_frequency_trend: Dict[str, int] = Field(default_factory=dict)
    average_days_between_orders: float = 0.0
    spending_by_day_of_week: Dict[str, float] = Field(default_factory=dict)
    seasonal_patterns: Dict[str, float] = Field(
        default_factory=dict, description="YYYY-Q# -> summed total_value"
    )
    time_gap_distribution: TimeGapDistribution = Field(
        default_factory=TimeGapDistribution
    )
    ordering_acceleration: float = Field(
        0.0, description="% change in orders/day, second half vs first half"
    )


class VoucherImpact(FrozenModel):
    avg_savings_with_voucher: float = 0.0
    avg_order_value_with_voucher: float = 0.0
    avg_order_value_without_voucher: float = 0.0


class DeliveryFeeVariance(FrozenModel):
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0


class CostOptimizationAnalytics(FrozenModel):
    fee_to_food_ratio: float = 0.0
    average_fee_percentage: float = 0.0
    optimal_order_value: float = 0.0
    voucher_impact: VoucherImpact = Field(default_factory=VoucherImpact)
    delivery_fee_variance: DeliveryFeeVariance = Field(
        default_factory=DeliveryFeeVariance
    )
    potential_savings: float = 0.0


class MealTypeDistribution(FrozenModel):
    breakfast: int = 0
    lunch: int = 0
    dinner: int = 0
    snack: int = 0


class HealthDietaryAnalytics(FrozenModel):
    healthy_vs_indulgent_ratio: float = Field(
        0.0,
        description="healthy / indulgent, or the raw healthy count when nothing is indulgent",
    )
    meal_type_distribution: MealTypeDistribution = Field(
        default_factory=MealTypeDistribution
    )
    drink_to_food_ratio: float = 0.0
    healthy_food_percentage: float = 0.0
    indulgent_food_percentage: float = 0.0


class PredictiveAnalytics(FrozenModel):
    forecasted_monthly_spending: float = 0.0
    spending_trend: SpendingTrend = "stable"
    trend_percentage: float = 0.0
    predicted_next_order_days: float = 0.0
    estimated_annual_spending: float = 0.0


class ExplorationSplit(FrozenModel):
    exploration_percentage: float = 0.0
    exploitation_percentage: float = 0.0


class AdvancedMetrics(FrozenModel):
    customer_lifetime_value: float = 0.0
    order_efficiency_score: float = 0.0
    brand_loyalty_score: float = 0.0
    spontaneity_index: float = 0.0
    deal_dependency_ratio: float = 0.0
    churn_risk_score: float = 0.0
    exploration_vs_exploitation: ExplorationSplit = Field(
        default_factory=ExplorationSplit
    )


class ComparativeMetrics(FrozenModel):
    spending_percentile: int = EMPTY_SPENDING_PERCENTILE
    order_frequency_category: str = "N/A"
    value_consciousness_score: float = 0.0


class Insight(FrozenModel):
    """A templated narrative about one facet of the user's ordering."""

    category: InsightCategory
    icon: str = ""
    title: str
    description: str
    detailed_explanation: str = Field(..., alias="detailedExplanation")
    color: str


class FullAnalytics(FrozenModel):
    """
    The complete result of one analysis run.

    Serialized keys use the camelCase aliases (timeAnalysis, ...) expected by
    existing consumers; construction accepts either spelling.
    """

    spending: SpendingAnalytics = Field(default_factory=SpendingAnalytics)
    restaurants: RestaurantAnalytics = Field(default_factory=RestaurantAnalytics)
    food: FoodAnalytics = Field(default_factory=FoodAnalytics)
    patterns: PatternAnalytics = Field(default_factory=PatternAnalytics)
    payments: PaymentAnalytics = Field(default_factory=PaymentAnalytics)
    prices: PriceAnalytics = Field(default_factory=PriceAnalytics)
    behavior: OrderBehaviorAnalytics = Field(default_factory=OrderBehaviorAnalytics)
    diversity: DiversityAnalytics = Field(default_factory=DiversityAnalytics)
    time_analysis: TimeAnalytics = Field(
        default_factory=TimeAnalytics, alias="timeAnalysis"
    )
    cost_optimization: CostOptimizationAnalytics = Field(
        default_factory=CostOptimizationAnalytics, alias="costOptimization"
    )
    health_dietary: HealthDietaryAnalytics = Field(
        default_factory=HealthDietaryAnalytics, alias="healthDietary"
    )
    predictive: PredictiveAnalytics = Field(default_factory=PredictiveAnalytics)
    advanced: AdvancedMetrics = Field(default_factory=AdvancedMetrics)
    comparative: ComparativeMetrics = Field(default_factory=ComparativeMetrics)
    insights: List[Insight] = Field(default_factory=list)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Structural JSON dump using the external (aliased) key names."""
        return self.model_dump_json(by_alias=True, indent=indent)


# -------------------------------------------------------------------------
# HTTP SURFACE
# -------------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    """Normalized orders to analyze."""

    orders: List[Order] = Field(..., description="Orders in any order")


class RawAnalyzeRequest(BaseModel):
    """Upstream order records that still need normalizing."""

    orders: List[Dict[str, Any]] = Field(..., description="Raw order history records")


class AnalyzeResponse(BaseModel):
    analytics: FullAnalytics
    order_count: int = Field(..., ge=0, description="Orders received")
    valid_order_count: int = Field(
        ..., ge=0, description="Orders left after dropping cancelled/failed ones"
    )
