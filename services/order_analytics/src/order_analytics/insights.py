"""
Narrative insights derived from facet outputs.

Text is templated, not generated. Emission order is fixed: spending,
voucher (only above 20% usage), timing, loyalty.
"""

from typing import List

from .models import (
    Insight,
    PatternAnalytics,
    RestaurantAnalytics,
    SpendingAnalytics,
)

VOUCHER_INSIGHT_MIN_RATE = 20
SMART_SAVER_MIN_RATE = 50

SPENDING_DETAILS = {
    "Big Spender": "You enjoy premium meals and aren't afraid to spend more for quality food.",
    "Medium Spender": "You balance between quality and budget, ordering moderately priced meals.",
}
DEFAULT_SPENDING_DETAIL = (
    "You prefer budget-friendly options and focus on value for money."
)


def format_currency(amount: float, symbol: str, decimals: int = 0) -> str:
    """Format an amount as e.g. "Tk 1,234"."""
    return f"{symbol} {amount:,.{decimals}f}"


def spending_insight(spending: SpendingAnalytics, currency_symbol: str) -> Insight:
    category = spending.spending_category
    average = format_currency(spending.average_order_value, currency_symbol)
    detail = SPENDING_DETAILS.get(category.type, DEFAULT_SPENDING_DETAIL)
    return Insight(
        category="spending",
        icon="💰",
        title=category.type,
        description=category.description,
        detailed_explanation=f"Your average order is {average}. {detail}",
        color=category.color,
    )


def voucher_insight(spending: SpendingAnalytics, currency_symbol: str) -> Insight:
    rate = spending.voucher_usage_rate
    title = "Smart Saver" if rate > SMART_SAVER_MIN_RATE else "Deal Hunter"
    savings = format_currency(spending.total_voucher_savings, currency_symbol)
    return Insight(
        category="voucher",
        icon="🎫",
        title=title,
        description=f"You used vouchers {rate:.0f}% of the time",
        detailed_explanation=(
            f"You saved a total of {savings} by using vouchers on {rate:.1f}% of "
            "your orders. That's smart shopping! Keep looking for deals to save "
            "even more."
        ),
        color="#9b59b6",
    )


def timing_insight(patterns: PatternAnalytics) -> Insight:
    hour = patterns.peak_hour
    if 5 <= hour < 12:
        icon, title, description = "🌞", "Morning Person", "You order early in the day"
        detail = (
            f"You usually order around {hour}:00. You're an early bird who likes "
            "breakfast and brunch. Morning meals give you energy for the day."
        )
    elif 12 <= hour < 17:
        icon, title, description = "🍲", "Lunch Lover", "You order at lunch time"
        detail = (
            f"Your peak time is {hour}:00. You prefer ordering during lunch hours. "
            "This is the most popular time to order food."
        )
    elif 17 <= hour < 22:
        icon, title, description = "🌆", "Evening Eater", "You order for dinner"
        detail = (
            f"You typically order around {hour}:00. Evening is your main meal "
            "time, when you relax and enjoy dinner."
        )
    else:
        icon, title, description = "🌙", "Night Owl", "You order late at night"
        detail = (
            f"You order around {hour}:00. You're a night person who gets hungry "
            "late. Late-night ordering is your thing!"
        )
    return Insight(
        category="timing",
        icon=icon,
        title=title,
        description=description,
        detailed_explanation=detail,
        color="#3498db",
    )


def loyalty_insight(restaurants: RestaurantAnalytics) -> Insight:
    loyalty = restaurants.loyalty_analysis
    top_restaurant = loyalty.top_restaurant or "various places"
    pct = loyalty.top_restaurant_percentage

    if loyalty.level == "Super Loyal":
        detail = (
            f"{pct:.0f}% of your orders are from {top_restaurant}. You really love "
            "this place! Having a favorite restaurant means you know what you like."
        )
    elif loyalty.level == "Loyal":
        detail = (
            f"{pct:.0f}% of orders from {top_restaurant}. You have some favorites "
            "but also like trying other places. Good balance!"
        )
    else:
        detail = (
            f"You order from {restaurants.unique_restaurants} different restaurants. "
            "You love variety and trying new places. That's adventurous!"
        )

    return Insight(
        category="loyalty",
        icon="❤️",
        title=loyalty.level,
        description=loyalty.description,
        detailed_explanation=detail,
        color="#e67e22",
    )


def generate_insights(
    spending: SpendingAnalytics,
    restaurants: RestaurantAnalytics,
    patterns: PatternAnalytics,
    currency_symbol: str = "Tk",
) -> List[Insight]:
    """
    Build the ordered insight list for one analysis.

    Args:
        spending: Spending facet
        restaurants: Restaurant facet
        patterns: Pattern facet (for the peak hour)
        currency_symbol: Symbol used when quoting amounts

    Returns:
        Three or four insights
    """
    insights = [spending_insight(spending, currency_symbol)]
    if spending.voucher_usage_rate > VOUCHER_INSIGHT_MIN_RATE:
        insights.append(voucher_insight(spending, currency_symbol))
    insights.append(timing_insight(patterns))
    insights.append(loyalty_insight(restaurants))
    return insights
