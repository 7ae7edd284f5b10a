"""
Item-level facets: what gets ordered, basket shape and dietary mix.
"""

import pandas as pd

from .. import stats
from ..constants import (
    ADDON_DESSERT_KEYWORDS,
    ADDON_DRINK_KEYWORDS,
    FOOD_CATEGORIES,
    HEALTH_DRINK_KEYWORDS,
    HEALTHY_KEYWORDS,
    INDULGENT_KEYWORDS,
    REORDERED_ITEM_MIN_COUNT,
    REORDERED_ITEMS_LIMIT,
    TOP_FOOD_ITEMS_LIMIT,
)
from ..models import (
    AddonFrequency,
    FoodAnalytics,
    HealthDietaryAnalytics,
    MealTypeDistribution,
    OrderBehaviorAnalytics,
    OrderSizeDistribution,
    ReorderPatterns,
)


def analyze_food(orders: pd.DataFrame, items: pd.DataFrame) -> FoodAnalytics:
    """
    Most frequent items and keyword-based food categories.

    Counts are per item line (mentions), not per unit quantity.
    """
    names = items["name"]
    item_counts = stats.counts_in_order(names)

    categories = {}
    for category, keywords in FOOD_CATEGORIES.items():
        matched = int(stats.keyword_mask(names, keywords).sum())
        if matched > 0:
            categories[category] = matched

    return FoodAnalytics(
        top_food_items=stats.top_n(item_counts, TOP_FOOD_ITEMS_LIMIT),
        food_categories=categories,
        average_items_per_order=stats.safe_divide(len(items), len(orders)),
        total_unique_items=len(item_counts),
    )


def _order_signature(names: pd.Series) -> str:
    return "|".join(sorted(set(names)))


def analyze_order_behavior(
    orders: pd.DataFrame, items: pd.DataFrame
) -> OrderBehaviorAnalytics:
    """
    Basket sizes, drink/dessert add-ons and repeat orders.

    An order's size is its summed item quantity: up to 2 is small, up to 5
    medium, anything above large. Orders sharing the same set of distinct
    item names are exact reorders.
    """
    total_orders = len(orders)
    sizes = orders["quantity"]

    drink_orders = items.loc[
        stats.keyword_mask(items["name"], ADDON_DRINK_KEYWORDS), "seq"
    ]
    dessert_orders = items.loc[
        stats.keyword_mask(items["name"], ADDON_DESSERT_KEYWORDS), "seq"
    ]

    if items.empty:
        names_by_order = pd.Series(dtype=object)
    else:
        names_by_order = items.groupby("seq")["name"].apply(_order_signature)
    # Orders without items share the empty signature
    signatures = orders["seq"].map(names_by_order).fillna("")
    signature_counts = signatures.value_counts()
    exact_reorders = int((signature_counts > 1).sum())

    item_counts = stats.counts_in_order(items["name"])
    repeated = item_counts[item_counts >= REORDERED_ITEM_MIN_COUNT]

    return OrderBehaviorAnalytics(
        order_size_distribution=OrderSizeDistribution(
            small=int((sizes <= 2).sum()),
            medium=int(((sizes > 2) & (sizes <= 5)).sum()),
            large=int((sizes > 5).sum()),
        ),
        average_basket_size=stats.mean(sizes.tolist()),
        addon_frequency=AddonFrequency(
            drinks_percentage=stats.percentage(drink_orders.nunique(), total_orders),
            desserts_percentage=stats.percentage(
                dessert_orders.nunique(), total_orders
            ),
        ),
        reorder_patterns=ReorderPatterns(
            exact_reorder_count=exact_reorders,
            similar_items_frequency=stats.top_n(repeated, REORDERED_ITEMS_LIMIT),
        ),
    )


def classify_meal(hour: int) -> str:
    if 5 <= hour < 11:
        return "breakfast"
    if 11 <= hour < 16:
        return "lunch"
    if 16 <= hour < 22:
        return "dinner"
    return "snack"


def analyze_health_dietary(
    orders: pd.DataFrame, items: pd.DataFrame
) -> HealthDietaryAnalytics:
    """
    Healthy vs indulgent mix, drinks vs food and meal timing.

    The keyword sets overlap, so one item can count as several kinds.
    When nothing indulgent was ordered the "ratio" is the raw healthy count.
    """
    names = items["name"]
    total_mentions = len(names)
    healthy = int(stats.keyword_mask(names, HEALTHY_KEYWORDS).sum())
    indulgent = int(stats.keyword_mask(names, INDULGENT_KEYWORDS).sum())
    drinks = int(stats.keyword_mask(names, HEALTH_DRINK_KEYWORDS).sum())

    ratio = healthy / indulgent if indulgent > 0 else float(healthy)

    meals = orders["hour"].map(classify_meal).value_counts()

    return HealthDietaryAnalytics(
        healthy_vs_indulgent_ratio=ratio,
        meal_type_distribution=MealTypeDistribution(
            **{meal: int(count) for meal, count in meals.items()}
        ),
        drink_to_food_ratio=stats.safe_divide(drinks, total_mentions - drinks),
        healthy_food_percentage=stats.percentage(healthy, total_mentions),
        indulgent_food_percentage=stats.percentage(indulgent, total_mentions),
    )
