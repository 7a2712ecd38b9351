"""Data model for the skill analysis engine.

Input snapshots (Account, RepositorySummary, ContributionStats) are frozen
pydantic models built by GitHubService. Output models are assembled once
per analysis and never mutated afterwards.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


def ensure_utc(value: datetime) -> datetime:
    """Normalise to UTC; naive datetimes are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# --- Closed label sets ---


class ExperienceLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class CoverageLevel(str, Enum):
    STRONG = "Strong"
    MODERATE = "Moderate"
    SPARSE = "Sparse"


class AutomationLevel(str, Enum):
    ADVANCED = "Advanced"
    BASIC = "Basic"
    NONE = "None"


class DocumentationLevel(str, Enum):
    COMPREHENSIVE = "Comprehensive"
    MODERATE = "Moderate"
    SPARSE = "Sparse"


class ReleaseCadence(str, Enum):
    WEEKLY = "Weekly"
    BIWEEKLY = "Biweekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    AD_HOC = "Ad-hoc"


class MarketDemand(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class PullRequestState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class HighlightReason(str, Enum):
    TOP_STARRED = "Top starred"
    RECENT = "Recent"
    CORE_STACK = "Core stack"
    POPULAR = "Popular"


# --- Inputs ---


class Account(BaseModel):
    """Public GitHub account snapshot."""

    model_config = ConfigDict(frozen=True)

    login: str
    name: str | None = None
    bio: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime
    avatar_url: str = ""
    html_url: str = ""

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class RepositorySummary(BaseModel):
    """Repository metadata plus its language-byte map."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    language: str | None = None
    stars: int = 0
    forks: int = 0
    created_at: datetime
    updated_at: datetime
    topics: list[str] = Field(default_factory=list)
    url: str = ""
    languages: dict[str, int] = Field(default_factory=dict)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_validator("topics", mode="before")
    @classmethod
    def _topics_default(cls, v):
        return v if v is not None else []

    @field_validator("languages", mode="before")
    @classmethod
    def _languages_default(cls, v):
        return v if v is not None else {}


class PullRequestRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    repo: str
    title: str
    state: PullRequestState
    url: str
    created_at: str


class ContributionStats(BaseModel):
    """Pull request and issue counts derived from the recent events feed."""

    model_config = ConfigDict(frozen=True)

    total_prs: int = 0
    merged_prs: int = 0
    open_prs: int = 0
    total_issues: int = 0
    closed_issues: int = 0
    recent_prs: list[PullRequestRecord] = Field(default_factory=list, max_length=5)


# --- Outputs ---


class LanguageShare(BaseModel):
    language: str
    percentage: float


class TechStack(BaseModel):
    primary: list[str] = Field(default_factory=list)
    secondary: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    archetypes: list[str] = Field(default_factory=list)


class StackDepth(BaseModel):
    core: list[str] = Field(default_factory=list)
    supporting: list[str] = Field(default_factory=list)
    emerging: list[str] = Field(default_factory=list)


class SkillAnalysis(BaseModel):
    tech_stack: TechStack
    top_languages: list[LanguageShare] = Field(default_factory=list)
    experience_level: ExperienceLevel
    total_projects: int = 0
    active_projects: int = 0
    account_age: float = 0.0
    stack_depth: StackDepth


class ActivityMetrics(BaseModel):
    recent_pushes: int = 0
    active_last_30_days: int = 0
    active_last_90_days: int = 0
    median_update_interval: int = 90
    longest_quiet_streak: int = 0
    velocity_score: int = 0


class QualitySignals(BaseModel):
    testing: CoverageLevel
    automation: AutomationLevel
    documentation: DocumentationLevel
    release_cadence: ReleaseCadence
    notes: list[str] = Field(default_factory=list)


class Opportunities(BaseModel):
    job_roles: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    next_actions: list[str] = Field(default_factory=list)


class FuturePrediction(BaseModel):
    growth_areas: list[str] = Field(default_factory=list)
    skills_to_learn: list[str] = Field(default_factory=list)
    career_path: list[str] = Field(default_factory=list)
    market_demand: MarketDemand = MarketDemand.MEDIUM


class RepositoryHighlight(BaseModel):
    name: str
    description: str | None = None
    stars: int = 0
    forks: int = 0
    primary_language: str | None = None
    last_updated: datetime
    created_at: datetime
    topics: list[str] = Field(default_factory=list)
    url: str = ""
    reason: HighlightReason


class TimelineEvent(BaseModel):
    year: int
    title: str
    description: str


class AnalysisResult(BaseModel):
    """Complete skill report for one account."""

    account: Account
    skill_analysis: SkillAnalysis
    opportunities: Opportunities
    future_prediction: FuturePrediction
    highlights: list[RepositoryHighlight] = Field(default_factory=list)
    activity: ActivityMetrics
    quality: QualitySignals
    timeline: list[TimelineEvent] = Field(default_factory=list)
    contributions: ContributionStats | None = None
