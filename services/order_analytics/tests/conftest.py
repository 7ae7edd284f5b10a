# services/order_analytics/tests/conftest.py
"""
Minimal test configuration for order analytics tests.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ["TESTING"] = "true"


# Configure Python path for testing
def setup_python_path():
    """Set up Python path to allow imports from both service and shared libs."""
    # Get absolute paths
    project_root = Path(__file__).parent.parent.parent.parent.absolute()
    analytics_src = Path(__file__).parent.parent / "src"

    # Add paths to sys.path if not already present
    paths_to_add = [str(analytics_src), str(project_root)]
    for path in paths_to_add:
        if path not in sys.path:
            sys.path.insert(0, path)


# Set up paths immediately when module is imported
setup_python_path()


@pytest.fixture
def sample_raw_order():
    """Sample upstream order record as returned by the order history API."""
    return {
        "code": "x7kq-p9nd",
        "vendor": {"name": "Kacchi Bhai"},
        "total_value": "520.00",
        "subtotal": 450,
        "delivery_fee": 40,
        "service_fee_total": 10,
        "voucher": {"value": 30},
        "current_status": {"message": "Delivered"},
        "ordered_at": {"date": "2024-03-08T13:15:00+06:00"},
        "order_products": [
            {"name": "Kacchi Biryani", "quantity": 1, "total_price": 380},
            {"name": "Borhani", "quantity": 2, "total_price": 35},
        ],
        "payment_type_code": "bkash_wallet",
    }
