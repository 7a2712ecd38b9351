"""Tests for the skill analysis engine."""

from datetime import UTC, datetime, timedelta

import pytest

from services.models import (
    ContributionStats,
    CoverageLevel,
    ExperienceLevel,
    ReleaseCadence,
)
from services.skill_analyzer import SkillAnalyzer


class TestSkillAnalyzer:
    """Test suite for SkillAnalyzer.analyze."""

    def setup_method(self):
        self.analyzer = SkillAnalyzer()

    def _portfolio(self, repo_factory):
        return (
            repo_factory(
                "shop-api",
                description="Express and MongoDB backend with jest tests",
                topics=["nodejs", "express", "mongodb", "github-actions"],
                language="JavaScript",
                languages={"JavaScript": 7000, "Shell": 300},
                stars=42,
                updated_days_ago=3,
            ),
            repo_factory(
                "shop-web",
                description="React storefront",
                topics=["react", "vite", "tailwind"],
                language="TypeScript",
                languages={"TypeScript": 9000, "CSS": 1200},
                stars=12,
                updated_days_ago=9,
            ),
            repo_factory(
                "ml-notebooks",
                topics=["pytorch"],
                language="Python",
                languages={"Python": 4000, "Jupyter Notebook": 2500},
                stars=3,
                updated_days_ago=140,
                created_days_ago=700,
            ),
            repo_factory(
                "dotfiles",
                language="Shell",
                languages={"Shell": 800},
                updated_days_ago=420,
                created_days_ago=2000,
            ),
        )

    def test_empty_repositories(self, account_factory, now):
        """An account without repositories still gets a complete report."""
        result = self.analyzer.analyze(account_factory(), [], now=now)

        assert result.activity.velocity_score == 0
        assert result.activity.median_update_interval == 90
        assert result.quality.testing is CoverageLevel.SPARSE
        assert result.quality.release_cadence is ReleaseCadence.AD_HOC
        assert result.highlights == []
        assert [e.title for e in result.timeline] == ["Joined GitHub"]
        assert result.skill_analysis.top_languages == []
        assert result.contributions is None

    def test_python_django_scenario(self, account_factory, repo_factory, now):
        """Five Python repos with one django-tagged star repo."""
        account = account_factory(created_at=datetime(2016, 1, 1, tzinfo=UTC))
        repos = [
            repo_factory(
                f"service-{i}",
                language="Python",
                languages={"Python": 2048},
                updated_days_ago=i + 1,
                **({"topics": ["django"], "stars": 60} if i == 0 else {}),
            )
            for i in range(5)
        ]

        result = self.analyzer.analyze(account, repos, now=now)

        assert "Django Stack" in result.skill_analysis.tech_stack.primary
        assert result.skill_analysis.experience_level is ExperienceLevel.INTERMEDIATE
        assert result.activity.velocity_score >= 16
        assert result.highlights[0].name == "service-0"

    def test_invariants(self, account_factory, repo_factory, now):
        result = self.analyzer.analyze(account_factory(), self._portfolio(repo_factory), now=now)
        skills = result.skill_analysis

        total = sum(share.percentage for share in skills.top_languages)
        assert total == pytest.approx(100.0, abs=0.01)

        depth = skills.stack_depth
        core, supporting, emerging = map(set, (depth.core, depth.supporting, depth.emerging))
        assert not core & supporting
        assert not core & emerging
        assert not supporting & emerging

        names = [h.name for h in result.highlights]
        assert len(names) == len(set(names))
        assert len(names) <= 3

        assert 5 <= result.activity.velocity_score <= 100
        assert len({(e.year, e.title) for e in result.timeline}) == len(result.timeline)

    def test_portfolio_report(self, account_factory, repo_factory, now):
        result = self.analyzer.analyze(account_factory(), self._portfolio(repo_factory), now=now)
        stack = result.skill_analysis.tech_stack

        # four pattern matches fill the archetype cap before composites
        assert stack.archetypes == ["MERN", "MEAN", "MEVN", "PERN"]
        assert stack.primary == stack.archetypes
        assert "PyTorch" in stack.frameworks
        assert "CI/CD" in stack.tools
        assert result.skill_analysis.top_languages[0].language == "TypeScript"
        assert "Web Development" in result.opportunities.industries
        assert "AI/ML" in result.opportunities.industries
        assert result.highlights[0].name == "shop-api"

    def test_idempotent(self, account_factory, repo_factory, now):
        """Identical inputs give byte-identical output."""
        account = account_factory()
        repos = self._portfolio(repo_factory)

        first = self.analyzer.analyze(account, repos, now=now)
        second = self.analyzer.analyze(account, repos, now=now)

        assert first.model_dump_json() == second.model_dump_json()

    def test_inputs_not_mutated(self, account_factory, repo_factory, now):
        repos = list(self._portfolio(repo_factory))
        snapshot = [repo.model_dump() for repo in repos]

        self.analyzer.analyze(account_factory(), repos, now=now)

        assert [repo.model_dump() for repo in repos] == snapshot
        assert [repo.name for repo in repos] == ["shop-api", "shop-web", "ml-notebooks", "dotfiles"]

    def test_contributions_pass_through(self, account_factory, repo_factory, now):
        stats = ContributionStats(total_prs=4, merged_prs=2, open_prs=1)
        result = self.analyzer.analyze(
            account_factory(), [repo_factory("a")], contributions=stats, now=now
        )
        assert result.contributions == stats

    def test_naive_now_is_utc(self, account_factory, repo_factory, now):
        """A naive reference instant is read as UTC."""
        repos = [repo_factory("a", updated_days_ago=3)]
        aware = self.analyzer.analyze(account_factory(), repos, now=now)
        naive = self.analyzer.analyze(account_factory(), repos, now=now.replace(tzinfo=None))
        assert aware.activity == naive.activity

    def test_recency_follows_injected_now(self, account_factory, repo_factory, now):
        repos = [repo_factory("a", updated_days_ago=3)]
        later = self.analyzer.analyze(account_factory(), repos, now=now + timedelta(days=100))
        assert later.activity.recent_pushes == 0
        assert later.activity.longest_quiet_streak == 103
