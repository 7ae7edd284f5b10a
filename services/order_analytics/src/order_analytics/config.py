"""Order analytics service configuration."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from libs.analytics_shared.config import BaseServiceConfig
from pydantic import AliasChoices, Field, field_validator


class AnalyticsConfig(BaseServiceConfig):
    """Analytics service specific configuration."""

    # Service settings
    port: int = Field(8003, description="HTTP port the service listens on")

    # Calendar settings - hour, weekday, month and quarter are derived in this zone
    timezone: str = Field(
        "UTC",
        validation_alias=AliasChoices("ANALYTICS_TIMEZONE", "timezone"),
        description="IANA timezone that defines an order's local calendar fields",
    )

    # Presentation settings used by insight narratives
    currency_symbol: str = Field("Tk", description="Currency symbol for narratives")
    currency_code: str = Field("BDT", description="ISO currency code")

    # Request guard for the HTTP surface
    max_orders: int = Field(
        5000,
        ge=1,
        validation_alias=AliasChoices("ANALYTICS_MAX_ORDERS", "max_orders"),
        description="Maximum number of orders accepted per analytics request",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject unknown zone names up front instead of at first analysis."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone '{v}'") from e
        return v


# Singleton instance
config = AnalyticsConfig()
