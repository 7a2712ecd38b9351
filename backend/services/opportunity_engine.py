"""Opportunity Engine.

Matches the detected stack to job roles and industries, and produces
recommendations and next actions from experience level plus quality and
activity gaps.
"""

from __future__ import annotations

from collections.abc import Iterable

from services.lexicon import ROLE_SKILLS
from services.models import (
    ActivityMetrics,
    AutomationLevel,
    CoverageLevel,
    DocumentationLevel,
    ExperienceLevel,
    Opportunities,
    QualitySignals,
    SkillAnalysis,
)

MIN_ROLE_MATCHES = 2

_JUNIOR_GUIDANCE = (
    (
        "Expand project variety to demonstrate breadth and foundational skills.",
        "Join collaborative open-source repositories to grow teamwork experience.",
    ),
    "Ship a small production-ready project end-to-end this month.",
)
_MID_GUIDANCE = (
    (
        "Deepen expertise in flagship stack components through advanced builds.",
        "Take on architectural responsibilities in collaborative projects.",
    ),
    "Document design decisions and publish a technical case study.",
)
_SENIOR_GUIDANCE = (
    (
        "Share expertise via mentorship, talks, or open-source leadership.",
        "Lean into architecture and scaling concerns across flagship repos.",
    ),
    "Formalize long-term roadmap for your most active repositories.",
)

GUIDANCE_BY_LEVEL: dict[ExperienceLevel, tuple[tuple[str, ...], str]] = {
    ExperienceLevel.BEGINNER: _JUNIOR_GUIDANCE,
    ExperienceLevel.INTERMEDIATE: _MID_GUIDANCE,
    ExperienceLevel.ADVANCED: _SENIOR_GUIDANCE,
    ExperienceLevel.EXPERT: _SENIOR_GUIDANCE,
}

# (technologies, checked stack section, industries added)
INDUSTRY_RULES: tuple[tuple[frozenset[str], str, tuple[str, ...]], ...] = (
    (frozenset({"React", "Angular", "Vue"}), "frameworks", ("Web Development", "SaaS")),
    (frozenset({"TensorFlow", "PyTorch"}), "frameworks", ("AI/ML", "Data Science")),
    (
        frozenset({"Docker", "Kubernetes", "AWS", "Azure", "GCP"}),
        "tools",
        ("Cloud Computing", "DevOps"),
    ),
    (frozenset({"Swift", "Kotlin", "Dart"}), "primary", ("Mobile Apps",)),
    (
        frozenset({"Django", "Flask", "Express", "Spring"}),
        "frameworks",
        ("Backend Services", "API Development"),
    ),
)


def dedupe(values: Iterable[str]) -> list[str]:
    """Drop repeats, keeping first-occurrence order."""
    return list(dict.fromkeys(values))


def _skill_satisfied(
    skill: str, primary: list[str], frameworks: list[str], tools: list[str]
) -> bool:
    if skill in primary or skill in frameworks or skill in tools:
        return True
    skill_lower = skill.lower()
    return any(p.lower() in skill_lower for p in primary)


def identify_opportunities(
    skill_analysis: SkillAnalysis,
    quality: QualitySignals,
    activity: ActivityMetrics,
) -> Opportunities:
    stack = skill_analysis.tech_stack
    job_roles: list[str] = []
    industries: list[str] = []

    for role, required in ROLE_SKILLS.items():
        matches = sum(
            1
            for skill in required
            if _skill_satisfied(skill, stack.primary, stack.frameworks, stack.tools)
        )
        if matches >= MIN_ROLE_MATCHES:
            job_roles.append(role)

    for technologies, section, labels in INDUSTRY_RULES:
        if technologies.intersection(getattr(stack, section)):
            industries.extend(labels)

    level_recommendations, level_action = GUIDANCE_BY_LEVEL[skill_analysis.experience_level]
    recommendations = list(level_recommendations)
    next_actions = [level_action]

    if skill_analysis.active_projects < 3:
        next_actions.append("Increase public project cadence to highlight ongoing maintenance.")
    if quality.testing is CoverageLevel.SPARSE:
        next_actions.append("Introduce automated test coverage on highlighted repositories.")
    if quality.automation is AutomationLevel.NONE:
        next_actions.append("Set up a CI/CD workflow (GitHub Actions, CircleCI, or similar).")
    if quality.documentation is DocumentationLevel.SPARSE:
        next_actions.append("Upgrade README and docs with architecture notes and usage guides.")
    if activity.velocity_score < 40:
        next_actions.append("Plan bi-weekly release checkpoints to increase visible momentum.")

    return Opportunities(
        job_roles=dedupe(job_roles),
        industries=dedupe(industries),
        recommendations=dedupe(recommendations),
        next_actions=dedupe(next_actions),
    )
