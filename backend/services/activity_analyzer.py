"""Activity Analyzer.

Derives update cadence from repository timestamps: recency counts,
median gap between consecutive updates, longest quiet streak and a
bounded velocity score.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from services.dates import days_between, days_since, round_half_up
from services.models import ActivityMetrics, RepositorySummary

DEFAULT_MEDIAN_INTERVAL = 90
VELOCITY_MIN = 5
VELOCITY_MAX = 100
MAX_QUIET_PENALTY = 30


def median(values: Sequence[int]) -> int:
    """Middle value; even-length input rounds the mean of the two middles."""
    if not values:
        return 0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return round_half_up((ordered[mid - 1] + ordered[mid]) / 2)


def velocity_score(
    active_last_30_days: int,
    active_last_90_days: int,
    recent_pushes: int,
    longest_quiet_streak: int,
) -> int:
    base = active_last_30_days * 12 + active_last_90_days * 6 + recent_pushes * 16
    penalty = max(0, min(MAX_QUIET_PENALTY, (longest_quiet_streak // 30) * 8))
    return max(VELOCITY_MIN, min(VELOCITY_MAX, base - penalty))


def calculate_activity_metrics(
    repos: Sequence[RepositorySummary],
    now: datetime,
) -> ActivityMetrics:
    if not repos:
        return ActivityMetrics(median_update_interval=DEFAULT_MEDIAN_INTERVAL)

    by_update = sorted(repos, key=lambda r: r.updated_at, reverse=True)
    gaps = [
        abs(days_between(current.updated_at, following.updated_at))
        for current, following in zip(by_update, by_update[1:])
    ]
    ages = [days_since(r.updated_at, now) for r in by_update]
    latest_age = ages[0]

    recent_pushes = sum(1 for age in ages if age <= 14)
    active_30 = sum(1 for age in ages if age <= 30)
    active_90 = sum(1 for age in ages if age <= 90)

    median_interval = median(gaps) if gaps else latest_age
    # the time since the latest update is itself a quiet stretch
    quiet_streak = max([*gaps, latest_age])

    return ActivityMetrics(
        recent_pushes=recent_pushes,
        active_last_30_days=active_30,
        active_last_90_days=active_90,
        median_update_interval=median_interval,
        longest_quiet_streak=quiet_streak,
        velocity_score=velocity_score(active_30, active_90, recent_pushes, quiet_streak),
    )
