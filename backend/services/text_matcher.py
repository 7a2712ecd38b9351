"""Keyword detection over repository free text.

Matching is plain substring containment on the case-folded haystack, so
partial words match too ("ci" hits "circleci" and "social"). Downstream
counts rely on that looseness.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from services.models import RepositorySummary


def build_haystack(repo: RepositorySummary) -> str:
    """Join topics, description and name into one lowercase string."""
    return " ".join([*repo.topics, repo.description or "", repo.name]).lower()


def contains_any(haystack: str, keywords: Iterable[str]) -> bool:
    return any(keyword in haystack for keyword in keywords)


def detect(haystack: str, lexicon: Mapping[str, Iterable[str]]) -> list[str]:
    """Return lexicon entries with at least one alias in the haystack.

    Results keep the lexicon's order.
    """
    return [name for name, aliases in lexicon.items() if contains_any(haystack, aliases)]
