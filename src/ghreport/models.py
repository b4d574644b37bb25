from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from .client import GitHubClient


@dataclass(frozen=True)
class IssueComment:
    id: int
    body: str | None


@dataclass(frozen=True)
class DiffComment:
    path: str
    title_text: str
    marker_text: str


@dataclass(frozen=True)
class StatsComment:
    path: str
    title_text: str
    marker_text: str


@dataclass(frozen=True)
class RunContext:
    owner: str
    repo: str
    run_id: str
    run_attempt: str = "1"


@dataclass(frozen=True)
class ActionContext:
    github: GitHubClient
    run: RunContext
    commit: str


@dataclass(frozen=True)
class SettledResult:
    status: Literal["fulfilled", "rejected"]
    value: Any = None
    reason: BaseException | None = None
