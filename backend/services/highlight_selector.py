"""Highlight Selector.

Picks a small spotlight set of repositories: the most starred, a recent
standout, one aligned with the core stack, then popular fill-ins.
"""

from __future__ import annotations

from collections.abc import Sequence

from services.models import HighlightReason, RepositoryHighlight, RepositorySummary

MAX_FILL = 3
RECENT_MIN_STARS = 5


def _matches_language(repo: RepositorySummary, languages: Sequence[str]) -> bool:
    repo_languages = [(repo.language or "").lower(), *(name.lower() for name in repo.languages)]
    return any(language.lower() in repo_languages for language in languages)


def _to_highlight(repo: RepositorySummary, reason: HighlightReason) -> RepositoryHighlight:
    return RepositoryHighlight(
        name=repo.name,
        description=repo.description,
        stars=repo.stars,
        forks=repo.forks,
        primary_language=repo.language,
        last_updated=repo.updated_at,
        created_at=repo.created_at,
        topics=list(repo.topics),
        url=repo.url,
        reason=reason,
    )


def select_highlights(
    repos: Sequence[RepositorySummary],
    priority_languages: Sequence[str],
) -> list[RepositoryHighlight]:
    if not repos:
        return []

    highlights: list[RepositoryHighlight] = []
    seen: set[str] = set()

    def add(repo: RepositorySummary | None, reason: HighlightReason) -> None:
        if repo is None or repo.name in seen:
            return
        highlights.append(_to_highlight(repo, reason))
        seen.add(repo.name)

    by_stars = sorted(repos, key=lambda r: r.stars, reverse=True)
    by_recency = sorted(repos, key=lambda r: r.updated_at, reverse=True)

    add(by_stars[0], HighlightReason.TOP_STARRED)

    recent = next((r for r in by_recency if r.stars >= RECENT_MIN_STARS), by_recency[0])
    add(recent, HighlightReason.RECENT)

    aligned = next((r for r in by_stars if _matches_language(r, priority_languages)), None)
    add(aligned, HighlightReason.CORE_STACK)

    target = min(MAX_FILL, len(repos))
    for repo in by_stars:
        if len(highlights) >= target:
            break
        add(repo, HighlightReason.POPULAR)

    return highlights
