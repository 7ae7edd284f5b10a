# services/order_analytics/tests/unit/test_analytics_service.py

import json

import pytest

from order_analytics.analytics_service import AnalyticsService, empty_analytics
from order_analytics.config import AnalyticsConfig
from order_analytics.exceptions import InvalidOrderDataError
from order_analytics.models import FullAnalytics


@pytest.mark.unit
def test_empty_input_returns_canonical_record(service):
    assert service.analyze([]) == FullAnalytics()
    assert empty_analytics() == FullAnalytics()


@pytest.mark.unit
def test_all_cancelled_returns_canonical_record(service, make_order):
    orders = [
        make_order(id="1", status="Cancelled"),
        make_order(id="2", status="Payment FAILED"),
    ]
    assert service.analyze(orders) == empty_analytics()


@pytest.mark.unit
def test_cancelled_order_with_bad_date_is_ignored(service, make_order):
    orders = [
        make_order(id="1", total=120),
        make_order(id="2", status="cancelled", date="garbage"),
    ]
    result = service.analyze(orders)
    assert result.spending.total_spent == 120


@pytest.mark.unit
def test_invalid_date_propagates(service, make_order):
    orders = [make_order(id="1"), make_order(id="bad-1", date="31/31/2024")]
    with pytest.raises(InvalidOrderDataError, match="bad-1"):
        service.analyze(orders)


@pytest.mark.unit
def test_three_order_scenario(service, three_orders):
    result = service.analyze(three_orders)

    assert result.spending.total_spent == 1000
    assert result.spending.average_order_value == pytest.approx(333.333, rel=1e-4)
    assert result.spending.voucher_usage_rate == pytest.approx(33.333, rel=1e-4)
    assert result.restaurants.unique_restaurants == 2
    assert result.restaurants.top_restaurants_by_orders == {"A": 2, "B": 1}
    assert result.restaurants.loyalty_analysis.top_restaurant_percentage == (
        pytest.approx(66.667, rel=1e-4)
    )
    assert result.restaurants.loyalty_analysis.level == "Super Loyal"
    assert [i.category for i in result.insights] == [
        "spending",
        "voucher",
        "timing",
        "loyalty",
    ]


@pytest.mark.unit
def test_cancelled_orders_do_not_count(service, three_orders, make_order):
    with_cancelled = three_orders + [
        make_order(id="4", restaurant="C", total=999, status="Cancelled")
    ]
    assert service.analyze(with_cancelled) == service.analyze(three_orders)


@pytest.mark.unit
def test_analysis_is_idempotent(service, three_orders):
    assert service.analyze(three_orders) == service.analyze(three_orders)


@pytest.mark.unit
def test_input_order_does_not_change_sorted_facets(service, three_orders):
    forward = service.analyze(three_orders)
    backward = service.analyze(list(reversed(three_orders)))
    assert forward.time_analysis == backward.time_analysis
    assert forward.predictive == backward.predictive
    assert forward.advanced == backward.advanced
    assert forward.spending == backward.spending


@pytest.mark.unit
def test_result_is_plain_json(service, three_orders):
    data = json.loads(service.analyze(three_orders).to_json())
    assert data["timeAnalysis"]["order_frequency_trend"] == {
        "2024-01": 2,
        "2024-02": 1,
    }
    assert data["insights"][0]["detailedExplanation"].startswith(
        "Your average order is Tk 333."
    )


@pytest.mark.unit
def test_single_order(service, make_order):
    result = service.analyze([make_order(total=450, items=[("Pizza", 1, 450)])])
    assert result.spending.median_order_value == 450
    assert result.spending.spending_category.type == "Big Spender"
    assert result.time_analysis.average_days_between_orders == 0
    assert result.diversity.cuisine_switching_rate == 0
    assert result.predictive.predicted_next_order_days == 7
    assert result.advanced.churn_risk_score == 20


@pytest.mark.unit
def test_timezone_drives_calendar_fields(make_order):
    order = make_order(date="2024-01-05T20:00:00Z")
    utc = AnalyticsService(AnalyticsConfig(timezone="UTC")).analyze([order])
    dhaka = AnalyticsService(AnalyticsConfig(timezone="Asia/Dhaka")).analyze([order])
    assert utc.patterns.peak_hour == 20
    assert dhaka.patterns.peak_hour == 2
    assert utc.patterns.peak_day == "Friday"
    assert dhaka.patterns.peak_day == "Saturday"


@pytest.mark.unit
def test_unknown_timezone_is_rejected():
    with pytest.raises(ValueError):
        AnalyticsConfig(timezone="Mars/Olympus_Mons")


@pytest.mark.unit
def test_no_orders_lost_when_counting(service, make_order):
    orders = [
        make_order(id=str(i), restaurant=f"R{i % 13}", total=50 + i)
        for i in range(40)
    ]
    result = service.analyze(orders)
    assert sum(result.restaurants.top_restaurants_by_orders.values()) <= 40
    assert result.restaurants.unique_restaurants == 13
    assert result.spending.average_order_value * 40 == pytest.approx(
        result.spending.total_spent
    )


@pytest.mark.unit
def test_building_a_service_leaves_logger_level_alone():
    from order_analytics import analytics_service

    level = analytics_service.logger.level
    AnalyticsService(AnalyticsConfig(timezone="UTC", log_level="CRITICAL"))
    AnalyticsService(AnalyticsConfig(timezone="UTC", log_level="DEBUG"))
    assert analytics_service.logger.level == level
