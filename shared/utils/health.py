"""
Health check utilities for the Health Headlines service.
Provides health monitoring and status reporting.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import httpx

from shared.app_logging.logger import get_logger
from shared.config.settings import Settings, get_settings
from shared.schemas.feed_state import FeedState

logger = get_logger(__name__)


class HealthStatus(Enum):
    """Health status enumeration."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"


@dataclass
class HealthCheck:
    """Individual health check result."""

    name: str
    status: HealthStatus
    message: str
    response_time_ms: Optional[float] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)


class HealthChecker:
    """Health checker for a service."""

    def __init__(self, service_name: str, settings: Optional[Settings] = None):
        self.service_name = service_name
        self.logger = get_logger(f"{service_name}.health")
        self.checks: List[Callable[[], HealthCheck]] = []
        self.settings = settings or get_settings()

    def add_check(self, check_func: Callable[[], HealthCheck]):
        """Add a health check function."""
        self.checks.append(check_func)

    def check_http_endpoint(self, url: str, name: str = "http_endpoint") -> HealthCheck:
        """Check HTTP endpoint connectivity."""
        start_time = datetime.now()
        try:
            with httpx.Client(timeout=self.settings.feed.http_timeout) as client:
                response = client.get(url)
                response.raise_for_status()

            response_time = (datetime.now() - start_time).total_seconds() * 1000
            return HealthCheck(
                name=name,
                status=HealthStatus.HEALTHY,
                message=f"HTTP endpoint {url} is accessible",
                response_time_ms=response_time,
            )
        except httpx.HTTPError as e:
            response_time = (datetime.now() - start_time).total_seconds() * 1000
            return HealthCheck(
                name=name,
                status=HealthStatus.UNHEALTHY,
                message=f"HTTP endpoint {url} failed: {str(e)}",
                response_time_ms=response_time,
            )

    def check_feed_state(self, get_state: Callable[[], FeedState]) -> HealthCheck:
        """Map the last published feed state onto a health status."""
        state = get_state()
        if state.kind == "data":
            return HealthCheck(
                name="feed_state",
                status=HealthStatus.HEALTHY,
                message=f"Serving {len(state.articles)} articles",
                details={"kind": state.kind, "articles": len(state.articles)},
            )
        if state.kind == "loading":
            return HealthCheck(
                name="feed_state",
                status=HealthStatus.DEGRADED,
                message="Feed is loading",
                details={"kind": state.kind},
            )
        return HealthCheck(
            name="feed_state",
            status=HealthStatus.UNHEALTHY,
            message=state.message,
            details={"kind": state.kind, "error_type": state.error_type},
        )

    def run_all_checks(self) -> Dict[str, Any]:
        """Run all registered health checks."""
        results = []
        overall_status = HealthStatus.HEALTHY

        for check_func in self.checks:
            try:
                result = check_func()
            except Exception as e:
                self.logger.exception("Health check raised")
                result = HealthCheck(
                    name=getattr(check_func, "__name__", "check"),
                    status=HealthStatus.UNHEALTHY,
                    message=f"Health check failed with exception: {str(e)}",
                )
            results.append(result)

            if result.status == HealthStatus.UNHEALTHY:
                overall_status = HealthStatus.UNHEALTHY
            elif (
                result.status == HealthStatus.DEGRADED
                and overall_status == HealthStatus.HEALTHY
            ):
                overall_status = HealthStatus.DEGRADED

        return {
            "service": self.service_name,
            "status": overall_status.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": [
                {
                    "name": check.name,
                    "status": check.status.value,
                    "message": check.message,
                    "response_time_ms": check.response_time_ms,
                    "details": check.details,
                    "timestamp": check.timestamp.isoformat(),
                }
                for check in results
            ],
        }


def create_headlines_health_checker(
    get_state: Callable[[], FeedState],
    settings: Optional[Settings] = None,
    check_endpoint: bool = True,
) -> HealthChecker:
    """Create health checker for the headlines service."""
    checker = HealthChecker("headlines", settings)
    checker.add_check(lambda: checker.check_feed_state(get_state))
    if check_endpoint:
        feed_url = checker.settings.feed.feed_url
        checker.add_check(lambda: checker.check_http_endpoint(feed_url, "feed_endpoint"))
    return checker
