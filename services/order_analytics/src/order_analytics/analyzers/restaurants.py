"""
Restaurant facets: popularity, loyalty tier and diversity over time.
"""

import pandas as pd

from .. import stats
from ..constants import TOP_RESTAURANTS_LIMIT
from ..models import DiversityAnalytics, LoyaltyAnalysis, RestaurantAnalytics

# (minimum exclusive percentage, level, description), checked top-down
LOYALTY_TIERS = [
    (30, "Super Loyal", "You have a favorite place"),
    (15, "Loyal", "You like some places more"),
]
EXPLORER_TIER = ("Explorer", "You try many places")


def classify_loyalty(top_restaurant_percentage: float):
    for threshold, level, description in LOYALTY_TIERS:
        if top_restaurant_percentage > threshold:
            return level, description
    return EXPLORER_TIER


def analyze_restaurants(orders: pd.DataFrame) -> RestaurantAnalytics:
    """
    Order counts per restaurant and the loyalty tier of the favourite.

    Ranking ties keep first-seen order.
    """
    counts = stats.counts_in_order(orders["restaurant_name"])
    top_restaurants = stats.top_n(counts, TOP_RESTAURANTS_LIMIT)

    top_name = next(iter(top_restaurants), "")
    top_percentage = stats.percentage(top_restaurants.get(top_name, 0), len(orders))
    level, description = classify_loyalty(top_percentage)

    return RestaurantAnalytics(
        top_restaurants_by_orders=top_restaurants,
        unique_restaurants=len(counts),
        loyalty_analysis=LoyaltyAnalysis(
            level=level,
            description=description,
            top_restaurant=top_name,
            top_restaurant_percentage=top_percentage,
        ),
    )


def analyze_diversity(sorted_orders: pd.DataFrame) -> DiversityAnalytics:
    """
    How often the user switches restaurants and discovers new ones.

    Restaurant identity stands in for cuisine. Needs at least two orders in
    chronological order; fewer yields the zero facet.
    """
    total_orders = len(sorted_orders)
    if total_orders < 2:
        return DiversityAnalytics()

    names = sorted_orders["restaurant_name"]
    switches = int((names != names.shift()).iloc[1:].sum())

    first_visits = sorted_orders.drop_duplicates("restaurant_name", keep="first")
    new_per_month = first_visits.groupby("month", sort=True).size()

    evolution = {
        month: stats.to_int_dict(stats.counts_in_order(group["restaurant_name"]))
        for month, group in sorted_orders.groupby("month", sort=True)
    }

    unique_restaurants = len(first_visits)

    return DiversityAnalytics(
        cuisine_switching_rate=stats.percentage(switches, total_orders - 1),
        new_restaurants_per_month=stats.to_int_dict(new_per_month),
        restaurant_discovery_rate=stats.mean(new_per_month.tolist()),
        cuisine_preference_evolution=evolution,
        variety_score=min(100.0, (unique_restaurants / total_orders) * 200),
    )
