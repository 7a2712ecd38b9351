"""Skill Analysis Engine.

Builds the full skill report for one GitHub account from an already
fetched snapshot (account, repositories, optional contribution stats):

- Skills: languages, frameworks, tools, archetypes, stack depth, level
- Highlights: spotlight repositories aligned with the top languages
- Activity: update cadence and velocity
- Quality: testing / automation / documentation signals
- Opportunities and forecast
- Timeline

The engine does no I/O. Every recency window is measured from one ``now``
so identical inputs give identical reports.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from app.logging_config import get_logger
from app.metrics import ANALYSIS_DURATION, ARCHETYPES_DETECTED, EXPERIENCE_LEVELS_ASSIGNED
from services.activity_analyzer import calculate_activity_metrics
from services.dates import utc_now
from services.forecast_engine import predict_future
from services.highlight_selector import select_highlights
from services.models import (
    Account,
    AnalysisResult,
    ContributionStats,
    RepositorySummary,
    ensure_utc,
)
from services.opportunity_engine import identify_opportunities
from services.quality_evaluator import evaluate_quality_signals
from services.skill_aggregator import SkillAggregator
from services.timeline_builder import build_timeline

logger = get_logger(__name__)


class SkillAnalyzer:
    """Skill report engine."""

    def __init__(self) -> None:
        self.aggregator = SkillAggregator()

    @ANALYSIS_DURATION.time()
    def analyze(
        self,
        account: Account,
        repositories: Sequence[RepositorySummary],
        contributions: ContributionStats | None = None,
        now: datetime | None = None,
    ) -> AnalysisResult:
        """Analyze an account snapshot.

        Args:
            account: Account record from GitHubService
            repositories: Repository summaries, language maps included
            contributions: Optional pull request / issue stats
            now: Reference instant for recency windows (defaults to UTC now)

        Returns:
            The assembled AnalysisResult
        """
        now = ensure_utc(now) if now is not None else utc_now()
        repos = list(repositories)

        skill_analysis = self.aggregator.aggregate(account, repos, now)
        highlights = select_highlights(
            repos, [share.language for share in skill_analysis.top_languages]
        )
        activity = calculate_activity_metrics(repos, now)
        quality = evaluate_quality_signals(repos, activity)
        opportunities = identify_opportunities(skill_analysis, quality, activity)
        future_prediction = predict_future(skill_analysis, quality, activity)
        timeline = build_timeline(account, repos, skill_analysis, now)

        EXPERIENCE_LEVELS_ASSIGNED.labels(level=skill_analysis.experience_level.value).inc()
        for name in skill_analysis.tech_stack.archetypes:
            ARCHETYPES_DETECTED.labels(archetype=name).inc()

        logger.info(
            "analysis_completed",
            repositories=len(repos),
            experience_level=skill_analysis.experience_level.value,
            velocity_score=activity.velocity_score,
            highlights=len(highlights),
        )

        return AnalysisResult(
            account=account,
            skill_analysis=skill_analysis,
            opportunities=opportunities,
            future_prediction=future_prediction,
            highlights=highlights,
            activity=activity,
            quality=quality,
            timeline=timeline,
            contributions=contributions,
        )
