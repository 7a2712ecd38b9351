"""Shared test fixtures for Stack Lens backend."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from app.config import Environment, Settings
from app.main import create_app
from services.models import Account, RepositorySummary

FIXED_NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Reference instant shared by every engine test."""
    return FIXED_NOW


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with safe defaults."""
    return Settings(
        environment=Environment.TESTING,
        debug=True,
        github_token=SecretStr("ghp_test_token_fake_value"),
        github_max_retries=2,
        anonymous_debounce_seconds=0.0,
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def anonymous_settings() -> Settings:
    """Settings without a token and a tiny anonymous quota."""
    return Settings(
        environment=Environment.TESTING,
        github_token=None,
        github_max_retries=0,
        anonymous_request_limit=2,
        anonymous_window_seconds=60.0,
        anonymous_debounce_seconds=0.0,
    )


@pytest.fixture
def repo_factory(now):
    """Build RepositorySummary objects relative to the fixed ``now``."""

    def _make(
        name: str = "repo",
        *,
        updated_days_ago: float = 1,
        created_days_ago: float | None = None,
        **overrides,
    ) -> RepositorySummary:
        created = created_days_ago if created_days_ago is not None else updated_days_ago + 30
        fields = {
            "name": name,
            "description": None,
            "language": None,
            "stars": 0,
            "forks": 0,
            "created_at": now - timedelta(days=created),
            "updated_at": now - timedelta(days=updated_days_ago),
            "topics": [],
            "url": f"https://github.com/octo/{name}",
            "languages": {},
        }
        fields.update(overrides)
        return RepositorySummary(**fields)

    return _make


@pytest.fixture
def account_factory(now):
    """Build Account objects whose age is given in days before ``now``."""

    def _make(login: str = "octo", *, age_days: float = 365 * 4, **overrides) -> Account:
        fields = {
            "login": login,
            "name": "Octo Cat",
            "public_repos": 10,
            "followers": 5,
            "following": 2,
            "created_at": now - timedelta(days=age_days),
            "avatar_url": "https://example.com/avatar.png",
            "html_url": f"https://github.com/{login}",
        }
        fields.update(overrides)
        return Account(**fields)

    return _make


@pytest.fixture
async def app():
    """Create a test application instance."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator:
    """Provide an async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
