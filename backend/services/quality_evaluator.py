"""Quality Evaluator.

Rates testing, automation and documentation maturity from keyword hit
ratios across repositories, and labels release cadence from the median
update interval.
"""

from __future__ import annotations

from collections.abc import Sequence

from services.lexicon import AUTOMATION_KEYWORDS, DOCUMENTATION_KEYWORDS, TESTING_KEYWORDS
from services.models import (
    ActivityMetrics,
    AutomationLevel,
    CoverageLevel,
    DocumentationLevel,
    QualitySignals,
    ReleaseCadence,
    RepositorySummary,
)
from services.text_matcher import build_haystack, contains_any

LONG_DESCRIPTION_CHARS = 80

NO_REPOSITORIES_NOTE = "No public repositories available for analysis."
SPARSE_TESTING_NOTE = "Testing references are minimal across public repositories."
NO_AUTOMATION_NOTE = "No CI/CD or workflow keywords detected; consider adding automation."
SPARSE_DOCS_NOTE = "Documentation signals are limited; enrich READMEs and guides."
RECENT_PUSHES_NOTE = "Multiple repositories updated in the last two weeks."
HIGH_VELOCITY_NOTE = "Development cadence is consistently high."

CADENCE_BANDS = (
    (14, ReleaseCadence.WEEKLY),
    (30, ReleaseCadence.BIWEEKLY),
    (60, ReleaseCadence.MONTHLY),
    (120, ReleaseCadence.QUARTERLY),
)


def cadence_from_interval(interval: int) -> ReleaseCadence:
    for maximum, cadence in CADENCE_BANDS:
        if interval <= maximum:
            return cadence
    return ReleaseCadence.AD_HOC


def _testing_level(ratio: float) -> CoverageLevel:
    if ratio >= 0.35:
        return CoverageLevel.STRONG
    if ratio >= 0.18:
        return CoverageLevel.MODERATE
    return CoverageLevel.SPARSE


def _automation_level(ratio: float) -> AutomationLevel:
    if ratio >= 0.30:
        return AutomationLevel.ADVANCED
    if ratio >= 0.15:
        return AutomationLevel.BASIC
    return AutomationLevel.NONE


def _documentation_level(ratio: float) -> DocumentationLevel:
    if ratio >= 0.45:
        return DocumentationLevel.COMPREHENSIVE
    if ratio >= 0.20:
        return DocumentationLevel.MODERATE
    return DocumentationLevel.SPARSE


def evaluate_quality_signals(
    repos: Sequence[RepositorySummary],
    activity: ActivityMetrics,
) -> QualitySignals:
    if not repos:
        return QualitySignals(
            testing=CoverageLevel.SPARSE,
            automation=AutomationLevel.NONE,
            documentation=DocumentationLevel.SPARSE,
            release_cadence=ReleaseCadence.AD_HOC,
            notes=[NO_REPOSITORIES_NOTE],
        )

    testing_hits = 0
    automation_hits = 0
    documentation_hits = 0

    for repo in repos:
        text = build_haystack(repo)
        if contains_any(text, TESTING_KEYWORDS):
            testing_hits += 1
        if contains_any(text, AUTOMATION_KEYWORDS):
            automation_hits += 1
        long_description = len(repo.description or "") > LONG_DESCRIPTION_CHARS
        if long_description or contains_any(text, DOCUMENTATION_KEYWORDS):
            documentation_hits += 1

    total = len(repos)
    testing = _testing_level(testing_hits / total)
    automation = _automation_level(automation_hits / total)
    documentation = _documentation_level(documentation_hits / total)

    notes: list[str] = []
    if testing is CoverageLevel.SPARSE:
        notes.append(SPARSE_TESTING_NOTE)
    if automation is AutomationLevel.NONE:
        notes.append(NO_AUTOMATION_NOTE)
    if documentation is DocumentationLevel.SPARSE:
        notes.append(SPARSE_DOCS_NOTE)
    if activity.recent_pushes >= 5:
        notes.append(RECENT_PUSHES_NOTE)
    if activity.velocity_score >= 70:
        notes.append(HIGH_VELOCITY_NOTE)

    return QualitySignals(
        testing=testing,
        automation=automation,
        documentation=documentation,
        release_cadence=cadence_from_interval(activity.median_update_interval),
        notes=notes,
    )
