"""Timeline Builder.

Narrates an account's history as year-ordered milestones: joining,
first repository, adoption of each top language and the latest launch.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from services.dates import days_since, round_half_up
from services.models import Account, RepositorySummary, SkillAnalysis, TimelineEvent

ADOPTION_LANGUAGE_LIMIT = 3


def time_since(moment: datetime, now: datetime) -> str:
    """Humanised age such as "3 days", "2 wks", "5 mo" or "2 yrs"."""
    days = days_since(moment, now)
    if days <= 1:
        return "1 day"
    if days < 7:
        return f"{days} days"
    weeks = round_half_up(days / 7)
    if weeks < 5:
        return f"{weeks} wks"
    months = round_half_up(days / 30)
    if months < 12:
        return f"{months} mo"
    years = round_half_up(days / 365)
    return f"{years} yr{'s' if years > 1 else ''}"


def _uses_language(repo: RepositorySummary, language: str) -> bool:
    wanted = language.lower()
    if (repo.language or "").lower() == wanted:
        return True
    return any(name.lower() == wanted for name in repo.languages)


def build_timeline(
    account: Account,
    repos: Sequence[RepositorySummary],
    skill_analysis: SkillAnalysis,
    now: datetime,
) -> list[TimelineEvent]:
    events = [
        TimelineEvent(
            year=account.created_at.year,
            title="Joined GitHub",
            description=(
                f"Account created • {skill_analysis.total_projects} "
                "public repositories analysed"
            ),
        )
    ]
    if not repos:
        return events

    by_creation = sorted(repos, key=lambda r: r.created_at)
    first = by_creation[0]
    events.append(
        TimelineEvent(
            year=first.created_at.year,
            title=f"First repository • {first.name}",
            description=first.description or "Initial project committed to GitHub",
        )
    )

    for share in skill_analysis.top_languages[:ADOPTION_LANGUAGE_LIMIT]:
        match = next((r for r in by_creation if _uses_language(r, share.language)), None)
        if match is None:
            continue
        events.append(
            TimelineEvent(
                year=match.created_at.year,
                title=f"{share.language} adoption",
                description=f"{match.name} introduced {share.language} into the portfolio",
            )
        )

    latest = max(repos, key=lambda r: r.updated_at)
    events.append(
        TimelineEvent(
            year=latest.updated_at.year,
            title="Latest launch",
            description=f"{latest.name} updated {time_since(latest.updated_at, now)} ago",
        )
    )

    events.sort(key=lambda event: event.year)
    seen: set[tuple[int, str]] = set()
    timeline: list[TimelineEvent] = []
    for event in events:
        key = (event.year, event.title)
        if key in seen:
            continue
        seen.add(key)
        timeline.append(event)
    return timeline
