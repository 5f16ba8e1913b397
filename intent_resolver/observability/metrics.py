"""Prometheus metrics for the intent resolver."""

from prometheus_client import Counter, Histogram

# Dispatch metrics
RESOLUTIONS = Counter(
    "intent_resolver_resolutions_total",
    "Total number of resolved messages",
    labelnames=["intent", "outcome"],
)

# Profile store metrics
GATEWAY_LATENCY = Histogram(
    "intent_resolver_gateway_latency_seconds",
    "Latency of profile store REST calls in seconds",
    labelnames=["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

GATEWAY_ERRORS = Counter(
    "intent_resolver_gateway_errors_total",
    "Profile store calls that failed or returned an unexpected shape",
    labelnames=["operation"],
)

# Account linking metrics
LINKING_CODE_COLLISIONS = Counter(
    "intent_resolver_linking_code_collisions_total",
    "Linking codes rejected by the store because they were still active",
)

LINKING_OUTCOMES = Counter(
    "intent_resolver_linking_outcomes_total",
    "Final state of account linking verifications",
    labelnames=["outcome"],
)
