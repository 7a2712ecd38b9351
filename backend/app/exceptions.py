"""Custom exception classes for Stack Lens.

All exceptions render to the same error envelope:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "details": {}  # optional
    }
}

The analysis engine itself never raises; these cover the GitHub fetch
layer and the HTTP surface.
"""

from __future__ import annotations

from typing import Any


class StackLensError(Exception):
    """Base exception for Stack Lens."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class GitHubAPIError(StackLensError):
    """GitHub API specific errors."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(
            code="GITHUB_API_ERROR",
            message=message,
            status_code=status_code,
        )


class GitHubUserNotFoundError(StackLensError):
    """GitHub user not found."""

    def __init__(self) -> None:
        super().__init__(
            code="GITHUB_USER_NOT_FOUND",
            message="GitHub user not found",
            status_code=404,
        )


class GitHubRateLimitError(StackLensError):
    """GitHub API rate limit exceeded."""

    def __init__(self, retry_after: int | None = None, reset_at: str | None = None) -> None:
        details: dict[str, Any] = {}
        if retry_after:
            details["retry_after_seconds"] = retry_after
        if reset_at:
            details["reset_at"] = reset_at
        super().__init__(
            code="GITHUB_RATE_LIMIT",
            message=(
                "GitHub API rate limit exceeded. Try again later or configure "
                "STACKLENS_GITHUB_TOKEN to raise the limit."
            ),
            status_code=429,
            details=details,
        )


class AnonymousQuotaError(StackLensError):
    """Too many unauthenticated GitHub requests in the current window."""

    def __init__(self, limit: int, window_seconds: float) -> None:
        super().__init__(
            code="ANONYMOUS_QUOTA_EXCEEDED",
            message=(
                "Too many GitHub requests without a personal token. "
                "Set STACKLENS_GITHUB_TOKEN to continue."
            ),
            status_code=429,
            details={"limit": limit, "window_seconds": window_seconds},
        )


class ValidationError(StackLensError):
    """Input validation error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=422,
            details=details,
        )
