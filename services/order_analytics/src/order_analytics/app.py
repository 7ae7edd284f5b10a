# order-analytics/app.py
from typing import List

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from libs.analytics_shared.errors import service_error, validation_error
from libs.analytics_shared.health import format_health_response, run_health_checks
from libs.analytics_shared.logging import get_logger
from libs.analytics_shared.middleware import CorrelationIdMiddleware, MetricsMiddleware
from libs.analytics_shared.models import HealthResponse

from .analytics_service import AnalyticsService
from .config import config
from .exceptions import InvalidOrderDataError
from .models import AnalyzeRequest, AnalyzeResponse, Order, RawAnalyzeRequest
from .normalizer import normalize_orders

logger = get_logger(__name__, config.log_level)


app = FastAPI(
    title="Order Analytics Service",
    description="Behavioural analytics over a user's food-delivery order history",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware, exclude_paths=["/health"])
app.add_middleware(CorrelationIdMiddleware)


def get_analytics_service() -> AnalyticsService:
    """
    Dependency provider for AnalyticsService.
    In tests, this can be overridden to provide a differently configured service.
    """
    return AnalyticsService(config)


def _check_size(count: int):
    if count > config.max_orders:
        raise validation_error(
            f"Too many orders: {count} exceeds the limit of {config.max_orders}",
            field="orders",
        )


def _run_analysis(service: AnalyticsService, orders: List[Order]) -> AnalyzeResponse:
    try:
        analytics = service.analyze(orders)
    except InvalidOrderDataError as e:
        logger.warning(f"Invalid order data: {e}")
        raise validation_error(str(e), field=e.field, value=e.value)
    except Exception as e:
        logger.error("Error computing analytics", exc_info=e)
        raise service_error(str(e))

    return AnalyzeResponse(
        analytics=analytics,
        order_count=len(orders),
        valid_order_count=len(service.filter_valid(orders)),
    )


@app.get("/health", response_model=HealthResponse, tags=["analytics"])
async def health(service: AnalyticsService = Depends(get_analytics_service)):
    """
    Service health check endpoint.
    Reports the configured timezone and currency, and whether an empty
    history analyzes cleanly.
    """
    checks = run_health_checks({"engine": lambda: service.analyze([]) is not None})
    return format_health_response(
        details={
            "timezone": service.config.timezone,
            "currency_code": service.config.currency_code,
        },
        version=app.version,
        checks=checks,
    )


@app.post(
    "/analytics",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    tags=["analytics"],
)
async def analyze_orders(
    request: AnalyzeRequest,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """
    Compute the full analytics record for a list of normalized orders.

    Cancelled and failed orders are dropped before analysis; if none remain
    the canonical empty record is returned.

    Args:
        request: AnalyzeRequest with the orders to analyze
        service: AnalyticsService dependency

    Returns:
        AnalyzeResponse with the analytics and order counts
    """
    _check_size(len(request.orders))
    return _run_analysis(service, request.orders)


@app.post(
    "/analytics/raw",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    tags=["analytics"],
)
async def analyze_raw_orders(
    request: RawAnalyzeRequest,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """
    Normalize raw upstream order records, then analyze them.

    Args:
        request: RawAnalyzeRequest with upstream order records
        service: AnalyticsService dependency

    Returns:
        AnalyzeResponse with the analytics and order counts
    """
    _check_size(len(request.orders))
    try:
        orders = normalize_orders(request.orders)
    except InvalidOrderDataError as e:
        raise validation_error(str(e), field=e.field, value=e.value)
    except ValueError as e:
        # pydantic ValidationError from Order construction
        raise validation_error(str(e), field="orders")
    return _run_analysis(service, orders)
