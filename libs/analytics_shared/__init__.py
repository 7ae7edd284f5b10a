"""
Shared utilities for the order-analytics project.

This package provides common logging, metrics, configuration, error
helpers, middleware and models used across services.
"""

# Configuration
from .config import BaseServiceConfig

# Error helpers
from .errors import service_error, validation_error

# Health check
from .health import format_health_response, run_health_checks

# Logging
from .logging import get_logger

# Metrics
from .metrics import Metrics

# Middleware
from .middleware import CorrelationIdMiddleware, MetricsMiddleware

# Models
from .models import ErrorResponse, HealthResponse, HealthStatus

__all__ = [
    # Configuration
    "BaseServiceConfig",
    # Errors
    "validation_error",
    "service_error",
    # Health
    "format_health_response",
    "run_health_checks",
    # Logging
    "get_logger",
    # Metrics
    "Metrics",
    # Middleware
    "CorrelationIdMiddleware",
    "MetricsMiddleware",
    # Models
    "ErrorResponse",
    "HealthResponse",
    "HealthStatus",
]
