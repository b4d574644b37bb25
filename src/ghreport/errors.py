from __future__ import annotations

from typing import Any


class GhReportError(Exception):
    """Base class for errors reported to the CI log."""


class ConfigError(GhReportError):
    pass


class ApiError(GhReportError):
    pass


class AuthError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class NetworkError(GhReportError):
    pass


class TableError(GhReportError, ValueError):
    pass


class StatsError(GhReportError):
    pass


class CommentPostError(GhReportError):
    """Raised once after a batch of comments settled with at least one failure."""

    def __init__(self, message: str, results: list[Any]) -> None:
        super().__init__(message)
        self.results = results

    @property
    def failures(self) -> list[Any]:
        return [r for r in self.results if r.status == "rejected"]


class BuildError(GhReportError):
    def __init__(self, task_name: str, message: str) -> None:
        super().__init__(f"Task {task_name!r} failed: {message}")
        self.task_name = task_name
