from typing import List, Optional, Sequence, Tuple

import pytest

from order_analytics.analytics_service import AnalyticsService
from order_analytics.config import AnalyticsConfig
from order_analytics.frame import OrderFrames
from order_analytics.models import Order, OrderItem

ItemSpec = Tuple[str, int, float]


def build_order(
    id: str = "o1",
    restaurant: str = "A",
    total: float = 100.0,
    date: str = "2024-01-05T12:00:00Z",
    items: Optional[Sequence[ItemSpec]] = None,
    voucher: float = 0.0,
    delivery_fee: float = 0.0,
    service_fee: float = 0.0,
    subtotal: Optional[float] = None,
    status: str = "delivered",
    payment: str = "Card",
) -> Order:
    return Order(
        id=id,
        restaurant_name=restaurant,
        total_value=total,
        subtotal=total if subtotal is None else subtotal,
        delivery_fee=delivery_fee,
        service_fee=service_fee,
        voucher_discount=voucher,
        status=status,
        date=date,
        items=[
            OrderItem(name=name, quantity=quantity, price=price)
            for name, quantity, price in (items or [])
        ],
        payment_method=payment,
    )


@pytest.fixture
def make_order():
    """Factory for orders with sensible defaults; items are (name, qty, price)."""
    return build_order


@pytest.fixture
def frames_of():
    def _frames(orders: List[Order], timezone: str = "UTC") -> OrderFrames:
        return OrderFrames.from_orders(orders, timezone)

    return _frames


@pytest.fixture
def analytics_config():
    return AnalyticsConfig(timezone="UTC", currency_symbol="Tk")


@pytest.fixture
def service(analytics_config):
    return AnalyticsService(analytics_config)


@pytest.fixture
def three_orders(make_order):
    """Two orders from A (one with a voucher) and one from B."""
    return [
        make_order(
            id="1",
            restaurant="A",
            total=300,
            voucher=50,
            date="2024-01-05T12:00:00Z",
            items=[("Chicken Burger", 1, 250)],
        ),
        make_order(
            id="2",
            restaurant="A",
            total=200,
            date="2024-01-12T19:00:00Z",
            items=[("Pizza", 1, 200)],
        ),
        make_order(
            id="3",
            restaurant="B",
            total=500,
            date="2024-02-01T08:00:00Z",
            items=[("Kacchi Biryani", 2, 200), ("Coke", 1, 50)],
        ),
    ]
