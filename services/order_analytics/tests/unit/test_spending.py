# services/order_analytics/tests/unit/test_spending.py

import pytest

from order_analytics.analyzers import (
    analyze_cost_optimization,
    analyze_payments,
    analyze_prices,
    analyze_spending,
    categorize_spending,
)


@pytest.mark.unit
def test_spending_totals(three_orders, frames_of):
    spending = analyze_spending(frames_of(three_orders).orders)
    assert spending.total_spent == 1000
    assert spending.average_order_value == pytest.approx(333.333, rel=1e-4)
    assert spending.median_order_value == 300
    assert spending.total_voucher_savings == 50
    assert spending.voucher_usage_rate == pytest.approx(33.333, rel=1e-4)
    assert spending.monthly_spending == {"2024-01": 500, "2024-02": 500}
    assert spending.spending_category.type == "Medium Spender"


@pytest.mark.unit
@pytest.mark.parametrize(
    "totals,expected",
    [([100, 200, 300], 200), ([100, 200, 300, 400], 250), ([42], 42)],
)
def test_median_order_value(make_order, frames_of, totals, expected):
    orders = [make_order(id=str(i), total=t) for i, t in enumerate(totals)]
    assert analyze_spending(frames_of(orders).orders).median_order_value == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "aov,category,color",
    [
        (100, "Light Spender", "#27ae60"),
        (250, "Light Spender", "#27ae60"),
        (250.01, "Medium Spender", "#f39c12"),
        (400, "Medium Spender", "#f39c12"),
        (400.01, "Big Spender", "#e74c3c"),
    ],
)
def test_spending_category_boundaries(aov, category, color):
    result = categorize_spending(aov)
    assert result.type == category
    assert result.color == color


@pytest.mark.unit
def test_payment_counts_and_tie_break(make_order, frames_of):
    orders = [
        make_order(id="1", payment="bKash"),
        make_order(id="2", payment="Card"),
        make_order(id="3", payment="Card"),
        make_order(id="4", payment="bKash"),
    ]
    payments = analyze_payments(frames_of(orders).orders)
    assert payments.payment_method_counts == {"bKash": 2, "Card": 2}
    assert payments.preferred_payment_method == "bKash"


@pytest.mark.unit
def test_price_analytics(make_order, frames_of):
    orders = [
        make_order(
            id="1",
            restaurant="A",
            total=300,
            voucher=40,
            date="2024-01-05T12:00:00Z",
            items=[("Pizza", 2, 100), ("Coke", 1, 40)],
        ),
        make_order(
            id="2",
            restaurant="B",
            total=100,
            date="2024-02-05T12:00:00Z",
        ),
    ]
    frames = frames_of(orders)
    prices = analyze_prices(frames.orders, frames.items)
    # (2*100 + 1*40) / 3 units
    assert prices.average_price_per_item == pytest.approx(80)
    assert prices.price_range.min == 40
    assert prices.price_range.max == 100
    assert prices.restaurant_value_scores == {"A": 300, "B": 100}
    assert prices.discount_effectiveness == 40
    assert prices.price_trend_over_time == {
        "2024-01": pytest.approx(80),
        "2024-02": 0,
    }


@pytest.mark.unit
def test_price_analytics_without_items(make_order, frames_of):
    frames = frames_of([make_order()])
    prices = analyze_prices(frames.orders, frames.items)
    assert prices.average_price_per_item == 0
    assert prices.price_range.min == 0
    assert prices.price_range.max == 0


@pytest.mark.unit
def test_cost_optimization(make_order, frames_of):
    orders = [
        make_order(
            id="1",
            total=330,
            subtotal=300,
            delivery_fee=20,
            service_fee=10,
            voucher=25,
        ),
        make_order(id="2", total=170, subtotal=150, delivery_fee=20),
    ]
    cost = analyze_cost_optimization(frames_of(orders).orders)
    # fees 50 over food 450
    assert cost.fee_to_food_ratio == pytest.approx(50 / 450 * 100)
    assert cost.average_fee_percentage == pytest.approx(10)
    assert cost.optimal_order_value == 200
    assert cost.voucher_impact.avg_savings_with_voucher == 25
    assert cost.voucher_impact.avg_order_value_with_voucher == 330
    assert cost.voucher_impact.avg_order_value_without_voucher == 170
    assert cost.delivery_fee_variance.min == 20
    assert cost.delivery_fee_variance.max == 20
    assert cost.delivery_fee_variance.avg == 20
    # only the 150 subtotal is below the 200 optimal value
    assert cost.potential_savings == 10


@pytest.mark.unit
def test_cost_optimization_all_fees(make_order, frames_of):
    orders = [make_order(total=50, subtotal=0, delivery_fee=50)]
    cost = analyze_cost_optimization(frames_of(orders).orders)
    assert cost.fee_to_food_ratio == 0
    assert cost.average_fee_percentage == 100
