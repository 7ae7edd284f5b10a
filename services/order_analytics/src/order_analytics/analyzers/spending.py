"""
Money-centric facets: spending, payments, item prices and fee optimization.
"""

import pandas as pd

from .. import stats
from ..models import (
    CostOptimizationAnalytics,
    DeliveryFeeVariance,
    PaymentAnalytics,
    PriceAnalytics,
    PriceRange,
    SpendingAnalytics,
    SpendingCategory,
    VoucherImpact,
)

BIG_SPENDER_THRESHOLD = 400
MEDIUM_SPENDER_THRESHOLD = 250


def categorize_spending(average_order_value: float) -> SpendingCategory:
    """Bucket an average order value; boundaries are strict greater-than."""
    if average_order_value > BIG_SPENDER_THRESHOLD:
        return SpendingCategory(
            type="Big Spender", description="You love premium food", color="#e74c3c"
        )
    if average_order_value > MEDIUM_SPENDER_THRESHOLD:
        return SpendingCategory(
            type="Medium Spender", description="Balanced spending", color="#f39c12"
        )
    return SpendingCategory(
        type="Light Spender", description="You save money", color="#27ae60"
    )


def analyze_spending(orders: pd.DataFrame) -> SpendingAnalytics:
    """
    Totals, averages, voucher usage and monthly spend.

    Args:
        orders: Non-empty order frame

    Returns:
        SpendingAnalytics facet
    """
    total_spent = float(orders["total_value"].sum())
    average_order_value = stats.safe_divide(total_spent, len(orders))
    monthly = orders.groupby("month", sort=True)["total_value"].sum()
    voucher_orders = int((orders["voucher_discount"] > 0).sum())

    return SpendingAnalytics(
        total_spent=total_spent,
        average_order_value=average_order_value,
        median_order_value=stats.median(orders["total_value"].tolist()),
        total_delivery_fees=float(orders["delivery_fee"].sum()),
        total_service_fees=float(orders["service_fee"].sum()),
        total_voucher_savings=float(orders["voucher_discount"].sum()),
        voucher_usage_rate=stats.percentage(voucher_orders, len(orders)),
        monthly_spending=stats.to_float_dict(monthly),
        spending_category=categorize_spending(average_order_value),
    )


def analyze_payments(orders: pd.DataFrame) -> PaymentAnalytics:
    counts = stats.counts_in_order(orders["payment_method"])
    if counts.empty:
        return PaymentAnalytics()

    # idxmax returns the first maximum, i.e. the earliest-seen method on a tie
    return PaymentAnalytics(
        payment_method_counts=stats.to_int_dict(counts),
        preferred_payment_method=str(counts.idxmax()),
    )


def analyze_prices(orders: pd.DataFrame, items: pd.DataFrame) -> PriceAnalytics:
    """
    Item price levels, per-restaurant order value and monthly price trend.

    Prices are weighted by quantity; the range uses raw line prices.
    """
    total_quantity = float(items["quantity"].sum())
    total_cost = float(items["line_total"].sum())

    if items.empty:
        price_range = PriceRange()
    else:
        price_range = PriceRange(
            min=float(items["price"].min()), max=float(items["price"].max())
        )

    restaurant_values = orders.groupby("restaurant_name", sort=False)[
        "total_value"
    ].mean()

    voucher_values = orders.loc[orders["voucher_discount"] > 0, "voucher_discount"]

    # Every month with an order gets an entry, even when it had no item lines
    monthly_items = items.groupby("month")[["line_total", "quantity"]].sum()
    price_trend = {}
    for month in sorted(orders["month"].unique()):
        if month in monthly_items.index:
            row = monthly_items.loc[month]
            price_trend[month] = stats.safe_divide(row["line_total"], row["quantity"])
        else:
            price_trend[month] = 0.0

    return PriceAnalytics(
        average_price_per_item=stats.safe_divide(total_cost, total_quantity),
        price_range=price_range,
        restaurant_value_scores=stats.to_float_dict(restaurant_values),
        discount_effectiveness=stats.mean(voucher_values.tolist()),
        price_trend_over_time=price_trend,
    )


def analyze_cost_optimization(orders: pd.DataFrame) -> CostOptimizationAnalytics:
    """
    Fee burden, voucher impact and a heuristic estimate of avoidable fees.

    The optimal order value assumes a delivery fee should be about 10% of the
    order; orders whose subtotal falls below it are counted as able to save
    half a mean delivery fee each. It is an upper-bound estimate.
    """
    total_spent = float(orders["total_value"].sum())
    total_fees = float((orders["delivery_fee"] + orders["service_fee"]).sum())
    total_food = total_spent - total_fees

    with_voucher = orders[orders["voucher_discount"] > 0]
    without_voucher = orders[orders["voucher_discount"] == 0]

    delivery_fees = orders["delivery_fee"]
    average_delivery_fee = stats.mean(delivery_fees.tolist())
    optimal_order_value = average_delivery_fee * 10
    suboptimal_orders = int((orders["subtotal"] < optimal_order_value).sum())

    return CostOptimizationAnalytics(
        fee_to_food_ratio=stats.percentage(total_fees, total_food)
        if total_food > 0
        else 0.0,
        average_fee_percentage=stats.percentage(total_fees, total_spent),
        optimal_order_value=optimal_order_value,
        voucher_impact=VoucherImpact(
            avg_savings_with_voucher=stats.mean(
                with_voucher["voucher_discount"].tolist()
            ),
            avg_order_value_with_voucher=stats.mean(
                with_voucher["total_value"].tolist()
            ),
            avg_order_value_without_voucher=stats.mean(
                without_voucher["total_value"].tolist()
            ),
        ),
        delivery_fee_variance=DeliveryFeeVariance(
            min=float(delivery_fees.min()) if len(delivery_fees) else 0.0,
            max=float(delivery_fees.max()) if len(delivery_fees) else 0.0,
            avg=average_delivery_fee,
        ),
        potential_savings=suboptimal_orders * (average_delivery_fee * 0.5),
    )
