"""Tests for the activity analyzer."""

from services.activity_analyzer import calculate_activity_metrics, median, velocity_score
from services.models import ActivityMetrics


class TestMedian:
    """Test suite for median."""

    def test_odd_length(self):
        assert median([3, 1, 2]) == 2

    def test_even_length_rounds_half_up(self):
        assert median([1, 2, 3, 4]) == 3

    def test_single_value(self):
        assert median([5]) == 5


class TestVelocityScore:
    """Test suite for velocity_score."""

    def test_clamped_to_upper_bound(self):
        assert velocity_score(10, 10, 10, 0) == 100

    def test_clamped_to_lower_bound(self):
        """Heavy quiet penalty never drops below 5."""
        assert velocity_score(0, 0, 0, 400) == 5

    def test_quiet_penalty_capped(self):
        """Penalty is 8 per 30 quiet days, at most 30."""
        assert velocity_score(10, 0, 0, 365) == 90
        assert velocity_score(5, 0, 0, 59) == 52


class TestCalculateActivityMetrics:
    """Test suite for calculate_activity_metrics."""

    def test_empty_repositories(self, now):
        """No repositories yields the default metrics with a 90-day interval."""
        metrics = calculate_activity_metrics([], now)
        assert metrics == ActivityMetrics()
        assert metrics.median_update_interval == 90
        assert metrics.velocity_score == 0

    def test_two_repositories_ninety_days_apart(self, repo_factory, now):
        """Updates 10 and 100 days ago give one 90-day gap."""
        repos = [
            repo_factory("old", updated_days_ago=100),
            repo_factory("new", updated_days_ago=10),
        ]
        metrics = calculate_activity_metrics(repos, now)

        assert metrics.median_update_interval == 90
        assert metrics.longest_quiet_streak == 90
        assert metrics.recent_pushes == 1
        assert metrics.active_last_30_days == 1
        assert metrics.active_last_90_days == 1
        # 12 + 6 + 16 minus 3 * 8
        assert metrics.velocity_score == 10

    def test_single_repository_uses_its_age(self, repo_factory, now):
        metrics = calculate_activity_metrics([repo_factory("solo", updated_days_ago=20)], now)
        assert metrics.median_update_interval == 20
        assert metrics.longest_quiet_streak == 20

    def test_quiet_streak_includes_time_since_latest(self, repo_factory, now):
        """A long silence after the last update counts as a quiet streak."""
        repos = [
            repo_factory("a", updated_days_ago=200),
            repo_factory("b", updated_days_ago=205),
        ]
        metrics = calculate_activity_metrics(repos, now)
        assert metrics.median_update_interval == 5
        assert metrics.longest_quiet_streak == 200
        assert metrics.velocity_score == 5

    def test_counts_and_median(self, repo_factory, now):
        repos = [
            repo_factory("c", updated_days_ago=40),
            repo_factory("a", updated_days_ago=1),
            repo_factory("b", updated_days_ago=3),
        ]
        metrics = calculate_activity_metrics(repos, now)

        assert metrics.recent_pushes == 2
        assert metrics.active_last_30_days == 2
        assert metrics.active_last_90_days == 3
        # gaps 2 and 37
        assert metrics.median_update_interval == 20
        assert metrics.longest_quiet_streak == 37
        assert metrics.velocity_score == 66

    def test_velocity_bounds_for_non_empty_input(self, repo_factory, now):
        busy = [repo_factory(f"r{i}", updated_days_ago=i) for i in range(12)]
        idle = [repo_factory("idle", updated_days_ago=2000)]
        assert calculate_activity_metrics(busy, now).velocity_score == 100
        assert calculate_activity_metrics(idle, now).velocity_score == 5
