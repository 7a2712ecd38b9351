"""Tests for the highlight selector."""

from services.highlight_selector import select_highlights
from services.models import HighlightReason


class TestSelectHighlights:
    """Test suite for select_highlights."""

    def test_empty(self):
        assert select_highlights([], ["Python"]) == []

    def test_top_recent_and_core(self, repo_factory):
        """One highlight per rule, in rule order."""
        repos = [
            repo_factory("star", stars=50, updated_days_ago=100),
            repo_factory("fresh", stars=10, updated_days_ago=2),
            repo_factory("rusty", stars=0, language="Rust", updated_days_ago=1),
            repo_factory("gopher", stars=20, language="Go", updated_days_ago=30),
        ]
        highlights = select_highlights(repos, ["Rust"])

        assert [(h.name, h.reason) for h in highlights] == [
            ("star", HighlightReason.TOP_STARRED),
            ("fresh", HighlightReason.RECENT),
            ("rusty", HighlightReason.CORE_STACK),
        ]
        assert highlights[0].last_updated == repos[0].updated_at
        assert highlights[2].primary_language == "Rust"

    def test_popular_fill(self, repo_factory):
        """Overlapping picks are skipped and the rest is filled by stars."""
        repos = [
            repo_factory("s30", stars=30, updated_days_ago=1),
            repo_factory("s20", stars=20, updated_days_ago=5),
            repo_factory("s10", stars=10, updated_days_ago=6),
            repo_factory("s5", stars=5, updated_days_ago=7),
            repo_factory("s1", stars=1, updated_days_ago=8),
        ]
        highlights = select_highlights(repos, [])

        assert [(h.name, h.reason) for h in highlights] == [
            ("s30", HighlightReason.TOP_STARRED),
            ("s20", HighlightReason.POPULAR),
            ("s10", HighlightReason.POPULAR),
        ]

    def test_recent_falls_back_to_most_recent(self, repo_factory):
        """Without a recent repo of 5+ stars, the most recent one is used."""
        repos = [
            repo_factory("old-star", stars=3, updated_days_ago=300),
            repo_factory("newest", stars=0, updated_days_ago=1),
        ]
        highlights = select_highlights(repos, [])
        assert [(h.name, h.reason) for h in highlights] == [
            ("old-star", HighlightReason.TOP_STARRED),
            ("newest", HighlightReason.RECENT),
        ]

    def test_single_repository(self, repo_factory):
        highlights = select_highlights([repo_factory("only")], ["Python"])
        assert len(highlights) == 1
        assert highlights[0].reason is HighlightReason.TOP_STARRED

    def test_language_map_match_is_case_insensitive(self, repo_factory):
        repos = [
            repo_factory("a", stars=9, updated_days_ago=1),
            repo_factory("b", stars=1, languages={"rust": 5}, updated_days_ago=50),
            repo_factory("c", stars=3, updated_days_ago=60),
        ]
        highlights = select_highlights(repos, ["Rust"])
        assert ("b", HighlightReason.CORE_STACK) in [(h.name, h.reason) for h in highlights]

    def test_names_unique_and_bounded(self, repo_factory):
        repos = [repo_factory(f"r{i}", stars=i, updated_days_ago=i) for i in range(8)]
        highlights = select_highlights(repos, ["Python"])
        names = [h.name for h in highlights]
        assert len(names) == len(set(names))
        assert len(highlights) <= 3
