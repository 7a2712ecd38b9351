"""Forecast Engine.

Projects growth areas, skills to learn, a career ladder and a market
demand label from the current stack, quality and activity.
"""

from __future__ import annotations

from services.models import (
    ActivityMetrics,
    AutomationLevel,
    ExperienceLevel,
    FuturePrediction,
    MarketDemand,
    QualitySignals,
    SkillAnalysis,
)
from services.opportunity_engine import dedupe

FALLBACK_GROWTH_AREAS = ("Cloud Computing", "DevOps", "Automation")
UNIVERSAL_SKILLS = ("System Design", "Cloud Architecture", "Security Best Practices")

_JUNIOR_LADDER = (
    "Junior Developer (0-2 years)",
    "Mid-level Developer (2-4 years)",
    "Senior Developer (4-7 years)",
)
_MID_LADDER = (
    "Senior Developer (current)",
    "Tech Lead / Staff Engineer (2-3 years)",
    "Principal Engineer / Architect (5+ years)",
)
_SENIOR_LADDER = (
    "Tech Lead / Staff Engineer (current)",
    "Principal Engineer (2-3 years)",
    "Distinguished Engineer / CTO (5+ years)",
)

CAREER_LADDERS: dict[ExperienceLevel, tuple[str, ...]] = {
    ExperienceLevel.BEGINNER: _JUNIOR_LADDER,
    ExperienceLevel.INTERMEDIATE: _MID_LADDER,
    ExperienceLevel.ADVANCED: _SENIOR_LADDER,
    ExperienceLevel.EXPERT: _SENIOR_LADDER,
}


def _raise_to_high(demand: MarketDemand) -> MarketDemand:
    return demand if demand is MarketDemand.VERY_HIGH else MarketDemand.HIGH


def predict_future(
    skill_analysis: SkillAnalysis,
    quality: QualitySignals,
    activity: ActivityMetrics,
) -> FuturePrediction:
    stack = skill_analysis.tech_stack
    growth_areas: list[str] = []
    skills_to_learn: list[str] = []

    demand = MarketDemand.MEDIUM
    if activity.velocity_score >= 70 or quality.automation is AutomationLevel.ADVANCED:
        demand = MarketDemand.VERY_HIGH
    elif activity.velocity_score >= 50:
        demand = MarketDemand.HIGH

    if "JavaScript" in stack.primary or "TypeScript" in stack.primary:
        growth_areas += ["Web3 and Blockchain Development", "Progressive Web Apps"]
        skills_to_learn += ["WebAssembly", "GraphQL", "TypeScript (if not already)"]

    if "Python" in stack.primary:
        growth_areas += ["AI and Machine Learning", "Data Engineering"]
        skills_to_learn += ["TensorFlow/PyTorch", "Apache Spark", "MLOps"]
        demand = _raise_to_high(demand)

    if "Docker" in stack.tools or "Kubernetes" in stack.tools:
        growth_areas += ["Cloud Native Development", "Platform Engineering"]
        skills_to_learn += ["Service Mesh (Istio)", "GitOps (ArgoCD)", "eBPF"]
        demand = MarketDemand.VERY_HIGH

    if any(f in ("React", "Vue", "Angular") for f in stack.frameworks):
        growth_areas.append("Frontend Architecture")
        skills_to_learn += ["Micro-frontends", "Server Components", "Edge Computing"]
        demand = _raise_to_high(demand)

    if not growth_areas:
        growth_areas += FALLBACK_GROWTH_AREAS

    skills_to_learn += UNIVERSAL_SKILLS

    return FuturePrediction(
        growth_areas=dedupe(growth_areas),
        skills_to_learn=dedupe(skills_to_learn),
        career_path=list(CAREER_LADDERS[skill_analysis.experience_level]),
        market_demand=demand,
    )
