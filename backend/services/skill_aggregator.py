"""Skill Aggregator.

Turns raw repository metadata into a skill profile:
- Language distribution from summed language bytes
- Framework and tool detection from repo text (topics, description, name)
- Stack archetype matching (MERN, Django Stack, ...) with fuzzy containment
- Core / supporting / emerging stack depth tiers
- Experience level from account age, volume, activity and stars

Everything here is deterministic given the injected ``now``.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import datetime

from app.logging_config import get_logger
from services.dates import months_before, years_since
from services.lexicon import FRAMEWORK_KEYWORDS, STACK_PATTERNS, TOOL_KEYWORDS, TRACKED_TOOLS
from services.models import (
    Account,
    ExperienceLevel,
    LanguageShare,
    RepositorySummary,
    SkillAnalysis,
    StackDepth,
    TechStack,
)
from services.text_matcher import build_haystack, detect

logger = get_logger(__name__)

TOP_LANGUAGE_LIMIT = 10
ARCHETYPE_LANGUAGE_LIMIT = 5  # top languages that take part in archetype matching
MAX_ARCHETYPES = 4
CORE_SEED_LIMIT = 4
RECENT_WINDOW_MONTHS = 12
ACTIVE_WINDOW_MONTHS = 6

# (minimum, points) bands, checked top-down
ACCOUNT_AGE_BANDS = ((7, 4), (5, 3), (3, 2), (1, 1))
PROJECT_COUNT_BANDS = ((100, 4), (50, 3), (20, 2), (10, 1))
ACTIVE_PROJECT_BANDS = ((20, 3), (10, 2), (5, 1))
AVERAGE_STAR_BANDS = ((100, 4), (50, 3), (20, 2), (5, 1))

EXPERIENCE_THRESHOLDS = (
    (12, ExperienceLevel.EXPERT),
    (9, ExperienceLevel.ADVANCED),
    (6, ExperienceLevel.INTERMEDIATE),
)


def _band(value: float, bands: Sequence[tuple[float, int]]) -> int:
    for minimum, points in bands:
        if value >= minimum:
            return points
    return 0


def determine_experience_level(
    account_age: float,
    total_projects: int,
    active_projects: int,
    avg_stars: float,
) -> ExperienceLevel:
    """Classify experience from four additive point bands."""
    score = (
        _band(account_age, ACCOUNT_AGE_BANDS)
        + _band(total_projects, PROJECT_COUNT_BANDS)
        + _band(active_projects, ACTIVE_PROJECT_BANDS)
        + _band(avg_stars, AVERAGE_STAR_BANDS)
    )
    for minimum, level in EXPERIENCE_THRESHOLDS:
        if score >= minimum:
            return level
    return ExperienceLevel.BEGINNER


def language_distribution(repos: Sequence[RepositorySummary]) -> list[LanguageShare]:
    """Percentage of total bytes per language, top 10, ties in encounter order."""
    totals: dict[str, int] = {}
    for repo in repos:
        for language, size in repo.languages.items():
            totals[language] = totals.get(language, 0) + size

    total_bytes = sum(totals.values())
    if total_bytes <= 0:
        return []

    shares = [
        LanguageShare(language=language, percentage=size / total_bytes * 100)
        for language, size in totals.items()
    ]
    shares.sort(key=lambda share: share.percentage, reverse=True)
    return shares[:TOP_LANGUAGE_LIMIT]


def _component_present(component: str, detected_lower: Sequence[str]) -> bool:
    """Symmetric containment: "Node" matches "node.js + x" and "R" matches "react"."""
    needle = component.lower()
    return any(needle in tech or tech in needle for tech in detected_lower)


def detect_archetypes(detected: Collection[str]) -> list[str]:
    """Match stack patterns and composite rules against detected technologies."""
    stacks: list[str] = []
    detected_lower = [tech.lower() for tech in detected]

    for stack_name, components in STACK_PATTERNS.items():
        present = sum(1 for comp in components if _component_present(comp, detected_lower))
        threshold = 3 if len(components) >= 4 else 2
        if present >= threshold:
            stacks.append(stack_name)

    # Frontend stacks
    if "React" in detected:
        if "Vite" in detected:
            stacks.append("React + Vite")
        elif "Next.js" in detected:
            stacks.append("Next.js")
    if "Vue" in detected and "Vite" in detected:
        stacks.append("Vue + Vite")
    if "Angular" in detected:
        stacks.append("Angular")

    # Backend stacks
    if "Node" in detected or "Express" in detected:
        if "TypeScript" in detected:
            stacks.append("Node.js + TypeScript")
        else:
            stacks.append("Node.js + Express")
    if "Django" in detected:
        stacks.append("Django")
    if "Spring" in detected:
        stacks.append("Spring Boot")

    # Full-stack combinations
    has_react = "React" in detected or "Next.js" in detected
    has_node = "Node" in detected or "Express" in detected
    if has_react and has_node and "MERN" not in stacks and "PERN" not in stacks:
        if "MongoDB" in detected:
            stacks.append("MERN Stack")
        elif "PostgreSQL" in detected:
            stacks.append("PERN Stack")

    return stacks[:MAX_ARCHETYPES]


def derive_stack_depth(
    tech_stack: TechStack,
    repos: Sequence[RepositorySummary],
    now: datetime,
) -> StackDepth:
    """Split technologies into disjoint core / supporting / emerging tiers."""
    # dicts used as insertion-ordered sets
    core: dict[str, None] = dict.fromkeys(tech_stack.primary[:CORE_SEED_LIMIT])
    supporting: dict[str, None] = {}
    emerging: dict[str, None] = {}

    usage: dict[str, int] = {}
    recent: dict[str, None] = {}
    cutoff = months_before(now, RECENT_WINDOW_MONTHS)

    for repo in repos:
        for framework in detect(build_haystack(repo), FRAMEWORK_KEYWORDS):
            usage[framework] = usage.get(framework, 0) + 1
            if repo.updated_at >= cutoff:
                recent[framework] = None

    for framework, count in usage.items():
        if count >= 2:
            core[framework] = None
        else:
            supporting[framework] = None

    for item in [*tech_stack.secondary, *tech_stack.tools]:
        if item not in core:
            supporting[item] = None

    for framework in recent:
        if framework not in core and framework not in supporting:
            emerging[framework] = None

    for repo in repos:
        touched_recently = repo.updated_at >= cutoff or repo.created_at >= cutoff
        if not touched_recently or not repo.language:
            continue
        if repo.language not in core and repo.language not in supporting:
            emerging[repo.language] = None

    return StackDepth(
        core=list(core),
        supporting=[item for item in supporting if item not in core],
        emerging=list(emerging),
    )


class SkillAggregator:
    """Builds the SkillAnalysis section of a report."""

    def aggregate(
        self,
        account: Account,
        repos: Sequence[RepositorySummary],
        now: datetime,
    ) -> SkillAnalysis:
        frameworks: dict[str, None] = {}
        tools: dict[str, None] = {}
        detected: dict[str, None] = {}

        for repo in repos:
            haystack = build_haystack(repo)
            for framework in detect(haystack, FRAMEWORK_KEYWORDS):
                frameworks[framework] = None
                detected[framework] = None
            for tool in detect(haystack, TOOL_KEYWORDS):
                tools[tool] = None
                if tool in TRACKED_TOOLS:
                    detected[tool] = None

        top_languages = language_distribution(repos)
        for share in top_languages[:ARCHETYPE_LANGUAGE_LIMIT]:
            detected[share.language] = None

        archetypes = detect_archetypes(detected)
        ranked = [share.language for share in top_languages]

        tech_stack = TechStack(
            primary=archetypes if archetypes else ranked[:3],
            secondary=ranked[3:6],
            frameworks=list(frameworks),
            tools=list(tools),
            archetypes=archetypes,
        )
        stack_depth = derive_stack_depth(tech_stack, repos, now)

        account_age = years_since(account.created_at, now)
        total_projects = len(repos)
        active_cutoff = months_before(now, ACTIVE_WINDOW_MONTHS)
        active_projects = sum(1 for r in repos if r.updated_at > active_cutoff)
        avg_stars = sum(r.stars for r in repos) / total_projects if total_projects else 0.0

        experience_level = determine_experience_level(
            account_age, total_projects, active_projects, avg_stars
        )

        logger.debug(
            "skills_aggregated",
            languages=len(top_languages),
            frameworks=len(frameworks),
            archetypes=archetypes,
            experience_level=experience_level.value,
        )

        return SkillAnalysis(
            tech_stack=tech_stack,
            top_languages=top_languages,
            experience_level=experience_level,
            total_projects=total_projects,
            active_projects=active_projects,
            account_age=account_age,
            stack_depth=stack_depth,
        )
