# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, Response, g, request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_LATENCY = Histogram(
    "tracker_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "tracker_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
AUTH_EVENTS = Counter(
    "tracker_auth_events_total",
    "Sign-up and sign-in outcomes",
    labelnames=("operation", "outcome"),
)


def record_auth_event(operation: str, outcome: str) -> None:
    AUTH_EVENTS.labels(operation=operation, outcome=outcome).inc()


def metrics_response() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)


def bind_metrics(app: Flask) -> None:
    @app.before_request
    def _start_metrics_timer() -> None:
        g._metrics_t0 = time.perf_counter()

    @app.after_request
    def _observe(resp):
        # Unmatched routes share one label to keep cardinality bounded.
        endpoint = request.endpoint or "unknown"
        duration = time.perf_counter() - getattr(g, "_metrics_t0", time.perf_counter())
        REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
        REQUEST_COUNTER.labels(endpoint=endpoint, status=str(resp.status_code)).inc()
        return resp

    app.add_url_rule("/metrics", endpoint="metrics", view_func=metrics_response, methods=["GET"])


__all__ = [
    "AUTH_EVENTS",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "bind_metrics",
    "metrics_response",
    "record_auth_event",
]
