# services/order_analytics/tests/integration/test_api.py

import pytest
from fastapi.testclient import TestClient

from order_analytics.analytics_service import AnalyticsService
from order_analytics.app import app, get_analytics_service
from order_analytics.config import AnalyticsConfig

ORDERS = [
    {
        "id": "1",
        "restaurant_name": "A",
        "total_value": 300,
        "voucher_discount": 50,
        "status": "Delivered",
        "date": "2024-01-05T12:00:00Z",
        "items": [{"name": "Chicken Burger", "quantity": 1, "price": 250}],
        "payment_method": "Card",
    },
    {
        "id": "2",
        "restaurant_name": "B",
        "total_value": 200,
        "status": "Delivered",
        "date": "2024-01-12T19:00:00Z",
        "payment_method": "bKash",
    },
    {
        "id": "3",
        "restaurant_name": "C",
        "total_value": 999,
        "status": "Cancelled",
        "date": "2024-01-13T19:00:00Z",
    },
]


@pytest.fixture
def client():
    app.dependency_overrides[get_analytics_service] = lambda: AnalyticsService(
        AnalyticsConfig(timezone="UTC", currency_symbol="Tk")
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.integration
def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["details"]["timezone"] == "UTC"
    assert body["details"]["checks"] == {"engine": "ok"}


@pytest.mark.integration
def test_analytics(client):
    response = client.post("/analytics", json={"orders": ORDERS})
    assert response.status_code == 200
    body = response.json()
    assert body["order_count"] == 3
    assert body["valid_order_count"] == 2
    analytics = body["analytics"]
    assert analytics["spending"]["total_spent"] == 500
    assert "timeAnalysis" in analytics
    assert analytics["payments"]["payment_method_counts"] == {"Card": 1, "bKash": 1}


@pytest.mark.integration
def test_analytics_empty_history(client):
    response = client.post("/analytics", json={"orders": []})
    assert response.status_code == 200
    analytics = response.json()["analytics"]
    assert analytics["spending"]["spending_category"]["type"] == "N/A"
    assert analytics["insights"] == []


@pytest.mark.integration
def test_analytics_invalid_date_is_422(client):
    bad = dict(ORDERS[0], id="bad-7", date="not-a-date")
    response = client.post("/analytics", json={"orders": [bad]})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "Validation Error"
    assert "bad-7" in detail["detail"]


@pytest.mark.integration
def test_analytics_rejects_negative_money(client):
    bad = dict(ORDERS[0], total_value=-5)
    response = client.post("/analytics", json={"orders": [bad]})
    assert response.status_code == 422


@pytest.mark.integration
def test_analytics_too_many_orders(client, monkeypatch):
    from order_analytics import app as app_module

    monkeypatch.setattr(app_module.config, "max_orders", 1)
    response = client.post("/analytics", json={"orders": ORDERS[:2]})
    assert response.status_code == 422
    assert "Too many orders" in response.json()["detail"]["detail"]


@pytest.mark.integration
def test_unexpected_error_is_500(client):
    class BrokenService(AnalyticsService):
        def analyze(self, orders):
            raise RuntimeError("boom")

    app.dependency_overrides[get_analytics_service] = lambda: BrokenService(
        AnalyticsConfig()
    )
    response = client.post("/analytics", json={"orders": ORDERS[:1]})
    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "Service Error"


@pytest.mark.integration
def test_raw_analytics(client, sample_raw_order):
    response = client.post("/analytics/raw", json={"orders": [sample_raw_order]})
    assert response.status_code == 200
    body = response.json()
    assert body["valid_order_count"] == 1
    analytics = body["analytics"]
    assert analytics["restaurants"]["top_restaurants_by_orders"] == {"Kacchi Bhai": 1}
    assert analytics["payments"]["preferred_payment_method"] == "bKash"
    # 13:15 at +06:00 is 07:15 UTC
    assert analytics["patterns"]["peak_hour"] == 7


@pytest.mark.integration
def test_raw_analytics_missing_date_is_422(client):
    response = client.post("/analytics/raw", json={"orders": [{"code": "nodate"}]})
    assert response.status_code == 422
    assert "nodate" in response.json()["detail"]["detail"]


@pytest.mark.integration
def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"
