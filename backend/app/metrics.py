"""Prometheus metrics for monitoring.

Tracks request latency, GitHub API usage and analysis outcomes.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram, Info

# Application info
APP_INFO = Info("stacklens_app", "Stack Lens application info")

# HTTP metrics
HTTP_REQUESTS_TOTAL = Counter(
    "stacklens_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "stacklens_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# GitHub API metrics
GITHUB_API_CALLS = Counter(
    "stacklens_github_api_calls_total",
    "Total GitHub API calls",
    ["endpoint", "status"],
)

GITHUB_API_DURATION = Histogram(
    "stacklens_github_api_duration_seconds",
    "GitHub API call duration",
    ["endpoint"],
)

GITHUB_INFLIGHT_DEDUPED = Counter(
    "stacklens_github_inflight_deduped_total",
    "GitHub requests served by an identical in-flight request",
)

# Analysis metrics
ANALYSIS_DURATION = Histogram(
    "stacklens_analysis_duration_seconds",
    "Skill analysis duration",
)

EXPERIENCE_LEVELS_ASSIGNED = Counter(
    "stacklens_experience_levels_assigned_total",
    "Experience levels assigned",
    ["level"],
)

ARCHETYPES_DETECTED = Counter(
    "stacklens_archetypes_detected_total",
    "Stack archetypes detected",
    ["archetype"],
)
