"""
Tabular views of an order collection.

OrderFrames turns validated Order models into two pandas DataFrames that every
analyzer reads: one row per order (with local calendar fields already derived)
and one row per item line.
"""

from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd
from libs.analytics_shared.logging import get_logger

from .constants import DAY_NAMES
from .exceptions import InvalidOrderDataError
from .models import Order

logger = get_logger(__name__)

ORDER_COLUMNS = [
    "seq",
    "order_id",
    "restaurant_name",
    "total_value",
    "subtotal",
    "delivery_fee",
    "service_fee",
    "voucher_discount",
    "payment_method",
    "timestamp",
    "quantity",
]
ITEM_COLUMNS = ["seq", "name", "quantity", "price", "line_total"]


def parse_order_timestamp(order: Order, timezone: str) -> pd.Timestamp:
    """
    Parse an order's ISO-8601 date into the configured timezone.

    Naive timestamps are taken as already local; aware ones are converted.

    Raises:
        InvalidOrderDataError: if the value is empty or cannot be parsed
    """
    try:
        ts = pd.Timestamp(order.date)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidOrderDataError(
            order.id, "date", order.date, "is not a valid ISO-8601 timestamp"
        ) from e

    if pd.isna(ts):
        raise InvalidOrderDataError(order.id, "date", order.date, "is empty")

    if ts.tzinfo is None:
        return ts.tz_localize(timezone, ambiguous=False, nonexistent="shift_forward")
    return ts.tz_convert(timezone)


@dataclass(frozen=True)
class OrderFrames:
    """Order-level and item-level DataFrames for one analysis run."""

    orders: pd.DataFrame
    items: pd.DataFrame

    @classmethod
    def from_orders(cls, orders: Sequence[Order], timezone: str) -> "OrderFrames":
        order_rows: List[dict] = []
        item_rows: List[dict] = []

        for seq, order in enumerate(orders):
            timestamp = parse_order_timestamp(order, timezone)
            order_rows.append(
                {
                    "seq": seq,
                    "order_id": order.id,
                    "restaurant_name": order.restaurant_name,
                    "total_value": order.total_value,
                    "subtotal": order.subtotal,
                    "delivery_fee": order.delivery_fee,
                    "service_fee": order.service_fee,
                    "voucher_discount": order.voucher_discount,
                    "payment_method": order.payment_method,
                    "timestamp": timestamp,
                    "quantity": sum(item.quantity for item in order.items),
                }
            )
            for item in order.items:
                item_rows.append(
                    {
                        "seq": seq,
                        "name": item.name.lower().strip(),
                        "quantity": item.quantity,
                        "price": item.price,
                        "line_total": item.price * item.quantity,
                    }
                )

        order_df = pd.DataFrame(order_rows, columns=ORDER_COLUMNS)
        order_df = _add_calendar_fields(order_df, timezone)

        item_df = pd.DataFrame(item_rows, columns=ITEM_COLUMNS)
        item_df["name"] = item_df["name"].astype(object)
        item_df["month"] = item_df["seq"].map(order_df.set_index("seq")["month"])

        logger.debug(f"Built frames: {len(order_df)} orders, {len(item_df)} item lines")
        return cls(orders=order_df, items=item_df)

    def chronological(self) -> "OrderFrames":
        """Orders sorted ascending by instant; ties keep their input order."""
        ordered = self.orders.sort_values("timestamp", kind="stable").reset_index(
            drop=True
        )
        return OrderFrames(orders=ordered, items=self.items)

    def __len__(self) -> int:
        return len(self.orders)


def _add_calendar_fields(df: pd.DataFrame, timezone: str) -> pd.DataFrame:
    if df.empty:
        for column in ("month", "quarter", "hour", "weekday", "day_name"):
            df[column] = pd.Series(dtype=object)
        df["is_weekend"] = pd.Series(dtype=bool)
        return df

    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True).dt.tz_convert(timezone)
    local = df["timestamp"].dt
    # Zero-padded so years before 1000 still give YYYY-MM and YYYY-Q# keys
    year = local.year.map("{:04d}".format)
    df["month"] = year + "-" + local.month.map("{:02d}".format)
    df["quarter"] = year + "-Q" + ((local.month - 1) // 3 + 1).astype(str)
    df["hour"] = local.hour.astype(int)
    # pandas dayofweek is Monday=0; shift to Sunday=0 to index DAY_NAMES
    df["weekday"] = ((local.dayofweek + 1) % 7).astype(int)
    df["day_name"] = df["weekday"].map(lambda i: DAY_NAMES[i])
    df["is_weekend"] = local.dayofweek >= 5
    return df
