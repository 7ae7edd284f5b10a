# libs/analytics_shared/health.py
"""
Health check utilities for all services.
"""

from typing import Any, Callable, Dict, Optional

from .logging import get_logger
from .models import HealthResponse, HealthStatus

logger = get_logger(__name__)


def run_health_checks(checks: Dict[str, Callable[[], Any]]) -> Dict[str, str]:
    """
    Run named probe callables and report "ok" or the failure message for each.

    A probe fails when it raises or returns a falsy value.
    """
    results: Dict[str, str] = {}
    for name, probe in checks.items():
        try:
            results[name] = "ok" if probe() else "failed"
        except Exception as e:
            logger.warning(f"Health check '{name}' failed: {e}")
            results[name] = f"error: {e}"
    return results


def format_health_response(
    details: Dict[str, Any],
    version: str,
    checks: Optional[Dict[str, str]] = None,
) -> HealthResponse:
    """
    Create a standardized health response.

    Args:
        details: Service-specific health details
        version: Service version
        checks: Optional probe results from run_health_checks; any non-"ok"
            result degrades the status to ERROR

    Returns:
        Formatted health response
    """
    status = HealthStatus.OK
    if checks:
        details = {**details, "checks": checks}
        if any(result != "ok" for result in checks.values()):
            status = HealthStatus.ERROR
    return HealthResponse(status=status, details=details, version=version)
