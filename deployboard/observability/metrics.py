"""Prometheus metrics definitions."""

from prometheus_client import Counter, Histogram

# Search metrics
SEARCHES = Counter(
    "deployboard_searches_total",
    "Total number of deploy searches",
    ["project_id"],
)

SEARCH_LATENCY = Histogram(
    "deployboard_search_latency_seconds",
    "Deploy search latency in seconds",
    ["project_id"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Candidate metrics
CANDIDATES_FOUND = Counter(
    "deployboard_candidates_total",
    "Total number of deploy candidates resolved",
    ["state"],
)

DUPLICATES_DROPPED = Counter(
    "deployboard_duplicates_dropped_total",
    "Total number of candidates dropped as duplicates of a fresher deploy",
)
