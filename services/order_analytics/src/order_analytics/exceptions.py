"""Domain exceptions raised by the analytics engine."""

from typing import Any, Optional


class InvalidOrderDataError(ValueError):
    """
    Raised when an order carries data the engine refuses to guess about.

    Every time-based facet depends on genuine chronology, so an order whose
    timestamp cannot be parsed fails the whole analysis instead of being
    coerced to a default.
    """

    def __init__(
        self,
        order_id: str,
        field: str,
        value: Optional[Any] = None,
        reason: str = "is invalid",
    ):
        self.order_id = order_id
        self.field = field
        self.value = value
        message = f"Order '{order_id}' {field} {reason}"
        if value is not None:
            message += f": {value!r}"
        super().__init__(message)
