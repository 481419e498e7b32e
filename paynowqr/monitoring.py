"""Prometheus metrics for the HTTP surface and payload generation."""
from __future__ import annotations

from typing import Final

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from prometheus_client.context_managers import Timer

NAMESPACE: Final = "paynowqr"

_REQUESTS: Final = Counter(
    "requests_total",
    "HTTP requests by route and status",
    labelnames=("method", "route", "status"),
    namespace=NAMESPACE,
    subsystem="http",
)
_REQUEST_SECONDS: Final = Histogram(
    "request_duration_seconds",
    "HTTP request latency",
    labelnames=("method", "route"),
    namespace=NAMESPACE,
    subsystem="http",
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1),
)
_ERRORS: Final = Counter(
    "service_errors_total",
    "Rejected requests by error code",
    labelnames=("code", "route"),
    namespace=NAMESPACE,
)
_ENCODED: Final = Counter(
    "payloads_encoded_total",
    "PayNow payloads encoded",
    labelnames=("proxy_type", "editable"),
    namespace=NAMESPACE,
)
_STAGE_SECONDS: Final = Histogram(
    "generation_stage_seconds",
    "Time spent encoding and rendering a QR",
    labelnames=("stage",),
    namespace=NAMESPACE,
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1),
)
_RENDER_FAILURES: Final = Counter(
    "render_failures_total",
    "QR renders that failed after a successful encode",
    namespace=NAMESPACE,
)


def observe_request(method: str, route: str, status_code: int, duration_ms: float) -> None:
    _REQUESTS.labels(method=method, route=route, status=str(status_code)).inc()
    _REQUEST_SECONDS.labels(method=method, route=route).observe(duration_ms / 1000)


def record_service_error(code: str, route: str) -> None:
    _ERRORS.labels(code=code, route=route).inc()


def record_payload_encoded(proxy_type: str, editable: bool) -> None:
    _ENCODED.labels(proxy_type=proxy_type, editable="true" if editable else "false").inc()


def record_render_failure() -> None:
    _RENDER_FAILURES.inc()


def time_stage(stage: str) -> Timer:
    """Context manager timing one generation stage (``encode`` or ``render``)."""

    return _STAGE_SECONDS.labels(stage=stage).time()


def metrics_payload() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
