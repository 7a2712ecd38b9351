"""Profile analysis endpoint.

GET /api/v1/public/analyze/{username} - Analyze a GitHub profile
GET /api/v1/public/analyze/{username}?compare=other - ... side by side with another
"""

from __future__ import annotations

import asyncio
import re
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from app.config import get_settings
from app.dependencies import get_github_service, get_skill_analyzer
from app.exceptions import StackLensError, ValidationError
from app.logging_config import get_logger
from services.dates import utc_now
from services.github_service import GitHubService
from services.models import AnalysisResult
from services.skill_analyzer import SkillAnalyzer

logger = get_logger(__name__)
router = APIRouter()

HANDLE_PATTERN = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$")
MAX_HANDLE_LENGTH = 39
DUPLICATE_COMPARISON_MESSAGE = (
    "Comparison target duplicates the primary username. Choose a different handle."
)


class AnalyzeMeta(BaseModel):
    request_id: str
    analyzed_at: datetime
    language_fetch_depth: int


class AnalyzeResponse(BaseModel):
    """Profile analysis response."""

    analysis: AnalysisResult
    comparison: AnalysisResult | None = None
    comparison_error: str | None = None
    meta: AnalyzeMeta


def validate_handle(value: str, field: str) -> str:
    """Check a GitHub handle and return it stripped."""
    handle = value.strip()
    if not 1 <= len(handle) <= MAX_HANDLE_LENGTH or not HANDLE_PATTERN.match(handle):
        raise ValidationError(
            "Invalid GitHub username",
            details={"field": field, "max_length": MAX_HANDLE_LENGTH},
        )
    return handle


async def _run_analysis(
    github: GitHubService,
    analyzer: SkillAnalyzer,
    username: str,
    now: datetime,
) -> AnalysisResult:
    snapshot = await github.fetch_snapshot(username)
    return analyzer.analyze(
        snapshot.account,
        snapshot.repositories,
        snapshot.contributions,
        now=now,
    )


async def _run_comparison(
    github: GitHubService,
    analyzer: SkillAnalyzer,
    username: str,
    now: datetime,
) -> tuple[AnalysisResult | None, str | None]:
    """Comparison failures are reported, never raised."""
    try:
        return await _run_analysis(github, analyzer, username, now), None
    except StackLensError as exc:
        logger.warning("comparison_failed", error_code=exc.code)
        return None, f"Comparison failed for {username}: {exc.message}"


@router.get("/analyze/{username}", response_model=AnalyzeResponse)
async def analyze_profile(
    request: Request,
    username: str,
    compare: str | None = None,
    github: GitHubService = Depends(get_github_service),
    analyzer: SkillAnalyzer = Depends(get_skill_analyzer),
) -> AnalyzeResponse:
    """Analyze a GitHub profile and return the skill report.

    Fetches the public profile, repositories and recent events, then runs
    the skill analysis engine. With ``compare`` the second profile is
    fetched concurrently; its failure is reported in ``comparison_error``
    and does not fail the primary analysis.
    """
    settings = get_settings()
    username = validate_handle(username, "username")
    other = validate_handle(compare, "compare") if compare and compare.strip() else None
    now = utc_now()

    comparison: AnalysisResult | None = None
    comparison_error: str | None = None

    if other is None:
        analysis = await _run_analysis(github, analyzer, username, now)
    elif other.lower() == username.lower():
        analysis = await _run_analysis(github, analyzer, username, now)
        comparison_error = DUPLICATE_COMPARISON_MESSAGE
    else:
        analysis, (comparison, comparison_error) = await asyncio.gather(
            _run_analysis(github, analyzer, username, now),
            _run_comparison(github, analyzer, other, now),
        )

    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    logger.info(
        "profile_analyzed",
        compared=comparison is not None,
        comparison_failed=comparison_error is not None,
    )
    return AnalyzeResponse(
        analysis=analysis,
        comparison=comparison,
        comparison_error=comparison_error,
        meta=AnalyzeMeta(
            request_id=request_id,
            analyzed_at=now,
            language_fetch_depth=settings.github_language_fetch_depth,
        ),
    )
