"""Prometheus metrics definitions for Mealwheel."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "mealwheel_http_requests_total",
    "Total number of HTTP requests processed by the Mealwheel API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "mealwheel_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Mealwheel API",
    ["method", "path"],
)

GROCERY_LIST_BUILDS = Counter(
    "mealwheel_grocery_list_builds_total",
    "Number of grocery list aggregations by outcome",
    ["outcome"],
)

GROCERY_LIST_ROWS = Histogram(
    "mealwheel_grocery_list_rows",
    "Number of aggregated rows per grocery list build",
    buckets=(0, 5, 10, 25, 50, 100, 250),
)

GROCERY_CHECKS = Counter(
    "mealwheel_grocery_check_mutations_total",
    "Grocery check-state mutations by action",
    ["action"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "GROCERY_LIST_BUILDS",
    "GROCERY_LIST_ROWS",
    "GROCERY_CHECKS",
]
