"""Prometheus metrics for monitoring registry views, reward tiers, and upstream lookups"""

from prometheus_client import Counter, Histogram

# Registry metrics
registry_view_counter = Counter(
    "babylist_registry_views_total",
    "Registry views served",
    ["view"],  # guest | owner | account
)

reward_tier_counter = Counter(
    "babylist_reward_tier_total",
    "Reward tier of served registries",
    ["tier"],  # none | tier5 | tier10
)

# Upstream metrics
upstream_latency_histogram = Histogram(
    "upstream_latency_seconds",
    "External service response time",
    ["service"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

lookup_failures_counter = Counter(
    "lookup_failures_total",
    "Failed external lookups",
    ["collaborator"],  # list_service | catalog | recommendation | loyalty | reservation | store
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_registry_view(view: str, tier: str) -> None:
    """Record a served registry view and the reward tier it showed"""
    registry_view_counter.labels(view=view).inc()
    reward_tier_counter.labels(tier=tier).inc()
