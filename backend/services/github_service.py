"""GitHub Data Service.

Fetches the public snapshot the analysis engine consumes: the account,
its repositories (with language-byte maps for the first N), and the
recent events feed condensed into contribution stats.

Request policy:
- Identical in-flight URLs share a single request
- At most ``github_max_concurrent`` requests run at once
- Without a token, a client-side quota and a small debounce apply
- Exponential backoff on connection errors, rate limits and 5xx
"""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import httpx

from app.config import Settings, get_settings
from app.exceptions import (
    AnonymousQuotaError,
    GitHubAPIError,
    GitHubRateLimitError,
    GitHubUserNotFoundError,
    StackLensError,
)
from app.logging_config import get_logger
from app.metrics import GITHUB_API_CALLS, GITHUB_API_DURATION, GITHUB_INFLIGHT_DEDUPED
from services.models import (
    Account,
    ContributionStats,
    PullRequestRecord,
    PullRequestState,
    RepositorySummary,
)

logger = get_logger(__name__)

MAX_RECENT_PRS = 5
DEGENERATE_LANGUAGE_BYTES = 1  # weight for repos without a fetched language map


@dataclass(frozen=True)
class ProfileSnapshot:
    """Everything the engine needs for one account."""

    account: Account
    repositories: list[RepositorySummary]
    contributions: ContributionStats | None = None


class GitHubService:
    """Async GitHub REST client producing analysis snapshots."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._owns_client = client is None
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.settings.has_github_token:
            self._headers["Authorization"] = (
                f"Bearer {self.settings.github_token.get_secret_value()}"
            )

        self._inflight: dict[str, asyncio.Future[Any]] = {}
        self._semaphore = asyncio.Semaphore(self.settings.github_max_concurrent)
        self._debounce_lock = asyncio.Lock()
        self._last_request_at = 0.0
        self._anon_window_start = 0.0
        self._anon_request_count = 0

    @property
    def has_token(self) -> bool:
        return "Authorization" in self._headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.github_timeout_seconds)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # --- Public API ---

    async def fetch_snapshot(self, username: str) -> ProfileSnapshot:
        """Fetch account, repositories and contribution stats.

        User, repositories and events are fetched concurrently. The first
        ``github_language_fetch_depth`` repositories get a full language
        map; the rest fall back to their primary language.
        """
        account, raw_repos, events = await asyncio.gather(
            self.get_user(username),
            self.get_repositories(username),
            self.get_user_events(username),
        )

        depth = self.settings.github_language_fetch_depth
        detailed, remainder = raw_repos[:depth], raw_repos[depth:]

        language_maps = await asyncio.gather(
            *(self._languages_or_fallback(raw) for raw in detailed)
        )
        repositories = [
            self._to_repository(raw, languages)
            for raw, languages in zip(detailed, language_maps)
        ]
        for raw in remainder:
            repositories.append(self._to_repository(raw, self._primary_language(raw)))

        logger.info(
            "github_snapshot_fetched",
            repositories=len(repositories),
            language_maps=len(detailed),
            events=len(events),
        )
        return ProfileSnapshot(
            account=account,
            repositories=repositories,
            contributions=self.parse_contribution_stats(events),
        )

    async def get_user(self, username: str) -> Account:
        url = f"{self.settings.github_api_base}/users/{username}"
        data = await self._get_json(url, endpoint="user")
        return Account(
            login=data.get("login", username),
            name=data.get("name"),
            bio=data.get("bio"),
            public_repos=data.get("public_repos", 0),
            followers=data.get("followers", 0),
            following=data.get("following", 0),
            created_at=data.get("created_at") or datetime.now(UTC),
            avatar_url=data.get("avatar_url") or "",
            html_url=data.get("html_url") or "",
        )

    async def get_repositories(self, username: str) -> list[dict[str, Any]]:
        """Fetch public repositories, most recently updated first."""
        url = f"{self.settings.github_api_base}/users/{username}/repos"
        params = {"per_page": self.settings.github_repos_per_page, "sort": "updated"}
        data = await self._get_json(url, params=params, endpoint="repos")
        return data if isinstance(data, list) else []

    async def get_repository_languages(self, languages_url: str) -> dict[str, int]:
        data = await self._get_json(languages_url, endpoint="languages")
        if not isinstance(data, dict):
            return {}
        return {name: int(size) for name, size in data.items()}

    async def get_user_events(self, username: str) -> list[dict[str, Any]]:
        """Fetch the recent public events feed. Failures yield an empty feed."""
        url = f"{self.settings.github_api_base}/users/{username}/events"
        try:
            data = await self._get_json(
                url,
                params={"per_page": self.settings.github_events_per_page},
                endpoint="events",
            )
        except StackLensError as exc:
            logger.warning("github_events_fetch_failed", error_code=exc.code)
            return []
        return data if isinstance(data, list) else []

    @staticmethod
    def parse_contribution_stats(
        events: Sequence[dict[str, Any]],
    ) -> ContributionStats | None:
        """Condense pull request and issue events into ContributionStats.

        Returns None for an empty feed.
        """
        if not events:
            return None

        total_prs = merged_prs = open_prs = 0
        total_issues = closed_issues = 0
        recent_prs: list[PullRequestRecord] = []

        for event in events:
            payload = event.get("payload") or {}
            action = payload.get("action")
            event_type = event.get("type")

            if event_type == "IssuesEvent":
                if action == "opened":
                    total_issues += 1
                elif action == "closed":
                    closed_issues += 1
                continue

            if event_type != "PullRequestEvent":
                continue

            if action == "opened":
                total_prs += 1
            pr = payload.get("pull_request")
            if not pr:
                continue

            if pr.get("merged"):
                merged_prs += 1
                state = PullRequestState.MERGED
            elif pr.get("state") == "open":
                open_prs += 1
                state = PullRequestState.OPEN
            else:
                state = PullRequestState.CLOSED

            if action == "opened" and len(recent_prs) < MAX_RECENT_PRS:
                full_name = (event.get("repo") or {}).get("name", "")
                parts = full_name.split("/")
                recent_prs.append(
                    PullRequestRecord(
                        repo=parts[1] if len(parts) > 1 and parts[1] else full_name,
                        title=pr.get("title", ""),
                        state=state,
                        url=pr.get("html_url", ""),
                        created_at=pr.get("created_at", ""),
                    )
                )

        return ContributionStats(
            total_prs=total_prs,
            merged_prs=merged_prs,
            open_prs=open_prs,
            total_issues=total_issues,
            closed_issues=closed_issues,
            recent_prs=recent_prs,
        )

    # --- Helpers ---

    async def _languages_or_fallback(self, raw: dict[str, Any]) -> dict[str, int]:
        languages_url = raw.get("languages_url")
        if not languages_url:
            return self._primary_language(raw)
        try:
            return await self.get_repository_languages(languages_url)
        except StackLensError as exc:
            logger.warning(
                "github_languages_fetch_failed",
                repo=raw.get("name", ""),
                error_code=exc.code,
            )
            return self._primary_language(raw)

    @staticmethod
    def _primary_language(raw: dict[str, Any]) -> dict[str, int]:
        """One-entry map for the primary language, or empty without one."""
        language = raw.get("language")
        return {language: DEGENERATE_LANGUAGE_BYTES} if language else {}

    @staticmethod
    def _to_repository(raw: dict[str, Any], languages: dict[str, int]) -> RepositorySummary:
        created_at = raw.get("created_at") or raw.get("updated_at")
        return RepositorySummary(
            name=raw.get("name", ""),
            description=raw.get("description"),
            language=raw.get("language"),
            stars=raw.get("stargazers_count", 0),
            forks=raw.get("forks_count", 0),
            created_at=created_at,
            updated_at=raw.get("updated_at") or created_at,
            topics=raw.get("topics") or [],
            url=raw.get("html_url", ""),
            languages=languages,
        )

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        endpoint: str = "other",
    ) -> Any:
        """GET with in-flight de-duplication keyed on the full URL."""
        key = str(httpx.URL(url, params=params))
        pending = self._inflight.get(key)
        if pending is not None:
            GITHUB_INFLIGHT_DEDUPED.inc()
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(self._api_request(url, params=params, endpoint=endpoint))
        self._inflight[key] = task
        try:
            return await asyncio.shield(task)
        finally:
            if self._inflight.get(key) is task:
                del self._inflight[key]

    def _enforce_anonymous_quota(self) -> None:
        """Sliding window on unauthenticated requests."""
        if self.has_token:
            return

        now = time.monotonic()
        if now - self._anon_window_start > self.settings.anonymous_window_seconds:
            self._anon_window_start = now
            self._anon_request_count = 0

        self._anon_request_count += 1
        if self._anon_request_count > self.settings.anonymous_request_limit:
            raise AnonymousQuotaError(
                limit=self.settings.anonymous_request_limit,
                window_seconds=self.settings.anonymous_window_seconds,
            )

    async def _debounce(self) -> None:
        if self.has_token or self.settings.anonymous_debounce_seconds <= 0:
            return
        async with self._debounce_lock:
            wait = self._last_request_at + self.settings.anonymous_debounce_seconds - time.monotonic()
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request_at = time.monotonic()

    async def _api_request(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        endpoint: str = "other",
    ) -> Any:
        """Make a request to the GitHub API with retry logic.

        Implements exponential backoff for:
        - 429 Too Many Requests
        - 403 Forbidden (rate limit)
        - 502/503/504 Server errors

        Non-retryable errors (404, 401) are raised immediately.
        """
        self._enforce_anonymous_quota()
        max_retries = self.settings.github_max_retries
        client = self._get_client()

        for attempt in range(max_retries + 1):
            await self._debounce()
            try:
                async with self._semaphore:
                    with GITHUB_API_DURATION.labels(endpoint=endpoint).time():
                        response = await client.get(url, headers=self._headers, params=params)
            except httpx.RequestError as exc:
                GITHUB_API_CALLS.labels(endpoint=endpoint, status="error").inc()
                if attempt < max_retries:
                    wait = self._backoff_delay(attempt)
                    logger.warning(
                        "github_api_connection_retry",
                        attempt=attempt + 1,
                        wait_seconds=wait,
                        endpoint=endpoint,
                    )
                    await asyncio.sleep(wait)
                    continue
                raise GitHubAPIError("GitHub API connection failed after retries") from exc

            status = response.status_code
            GITHUB_API_CALLS.labels(endpoint=endpoint, status=str(status)).inc()

            # Non-retryable errors
            if status == 404:
                raise GitHubUserNotFoundError()
            if status == 401:
                raise GitHubAPIError("GitHub token invalid or expired", status_code=401)

            # Retryable: rate limit
            if status in (403, 429):
                retry_after = response.headers.get("Retry-After", "")
                # HTTP-date values fall back to backoff
                retry_seconds = int(retry_after) if retry_after.isdigit() else None
                rate_remaining = response.headers.get("X-RateLimit-Remaining")

                if attempt < max_retries:
                    if retry_seconds is not None:
                        wait = min(retry_seconds, 60)
                    elif rate_remaining == "0":
                        wait = self._backoff_delay(attempt, base=5.0)
                    else:
                        wait = self._backoff_delay(attempt)

                    logger.warning(
                        "github_rate_limit_retry",
                        attempt=attempt + 1,
                        wait_seconds=wait,
                        status=status,
                        endpoint=endpoint,
                    )
                    await asyncio.sleep(wait)
                    continue

                raise GitHubRateLimitError(
                    retry_after=retry_seconds,
                    reset_at=self._reset_at(response.headers.get("X-RateLimit-Reset")),
                )

            # Retryable: server errors
            if status in (502, 503, 504):
                if attempt < max_retries:
                    wait = self._backoff_delay(attempt)
                    logger.warning(
                        "github_server_error_retry",
                        attempt=attempt + 1,
                        wait_seconds=wait,
                        status=status,
                        endpoint=endpoint,
                    )
                    await asyncio.sleep(wait)
                    continue

                raise GitHubAPIError(
                    f"GitHub API server error {status} after retries",
                    status_code=status,
                )

            # Other client errors
            if status >= 400:
                raise GitHubAPIError(
                    f"GitHub API returned status {status}",
                    status_code=status,
                )

            return response.json()

        raise GitHubAPIError("GitHub API request failed")

    @staticmethod
    def _reset_at(header: str | None) -> str | None:
        if not header or not header.isdigit():
            return None
        return datetime.fromtimestamp(int(header), UTC).isoformat()

    @staticmethod
    def _backoff_delay(attempt: int, base: float = 1.0, max_delay: float = 30.0) -> float:
        """Calculate exponential backoff delay with jitter.

        Formula: min(base * 2^attempt + jitter, max_delay)
        """
        delay = base * (2 ** attempt)
        jitter = random.uniform(0, delay * 0.1)
        return min(delay + jitter, max_delay)
