"""Application-level dependencies.

Provides the shared GitHub client and the analysis engine as FastAPI
dependencies for injection into route handlers.
"""

from __future__ import annotations

from typing import Optional

from app.logging_config import get_logger
from services.github_service import GitHubService
from services.skill_analyzer import SkillAnalyzer

logger = get_logger(__name__)

# Shared across requests so in-flight de-duplication and the anonymous
# quota see every call
_github_service: Optional[GitHubService] = None
_skill_analyzer = SkillAnalyzer()


async def init_github_service() -> None:
    """Create the shared GitHub service."""
    global _github_service
    _github_service = GitHubService()
    logger.info("github_service_ready", authenticated=_github_service.has_token)


async def close_github_service() -> None:
    """Close the shared GitHub HTTP client."""
    global _github_service
    if _github_service:
        await _github_service.aclose()
        _github_service = None


def get_github_service() -> GitHubService:
    """Get the GitHub service as a FastAPI dependency."""
    if _github_service is None:
        raise RuntimeError("GitHub service not initialized. Call init_github_service() first.")
    return _github_service


def get_skill_analyzer() -> SkillAnalyzer:
    return _skill_analyzer
