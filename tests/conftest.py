"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from ghreport.models import ActionContext, IssueComment, RunContext

# ---------------------------------------------------------------------------
# REST payload factories — return raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def comment_node(id: int = 1, body: str | None = "Looks good") -> dict:
    return {
        "id": id,
        "body": body,
        "user": {"login": "github-actions[bot]"},
        "html_url": f"https://github.com/owner/repo/pull/1#issuecomment-{id}",
        "created_at": "2024-01-01T10:00:00Z",
    }


def rate_limit_headers(remaining: int = 4999) -> dict:
    return {"x-ratelimit-remaining": str(remaining), "x-ratelimit-reset": "1735689599"}


# ---------------------------------------------------------------------------
# In-memory GitHub
# ---------------------------------------------------------------------------


class FakeGitHub:
    """Stores issue comments in memory and serves them in fixed-size pages."""

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.comments: dict[int, list[IssueComment]] = {}
        self.created: list[tuple[int, str]] = []
        self.updated: list[tuple[int, str]] = []
        self.pages_fetched = 0
        self._next_id = 1000

    def add(self, issue_number: int, body: str, id: int | None = None) -> IssueComment:
        if id is None:
            id = self._next_id
            self._next_id += 1
        comment = IssueComment(id=id, body=body)
        self.comments.setdefault(issue_number, []).append(comment)
        return comment

    def iter_comment_pages(
        self, owner: str, repo: str, issue_number: int, per_page: int = 100
    ) -> Iterator[list[IssueComment]]:
        comments = self.comments.get(issue_number, [])
        for start in range(0, len(comments), self.page_size):
            self.pages_fetched += 1
            yield comments[start : start + self.page_size]

    def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> IssueComment:
        self.created.append((issue_number, body))
        return self.add(issue_number, body)

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> IssueComment:
        self.updated.append((comment_id, body))
        for comments in self.comments.values():
            for index, comment in enumerate(comments):
                if comment.id == comment_id:
                    comments[index] = IssueComment(id=comment_id, body=body)
                    return comments[index]
        raise AssertionError(f"no comment {comment_id}")

    def bodies(self, issue_number: int) -> list[str]:
        return [c.body or "" for c in self.comments.get(issue_number, [])]


# ---------------------------------------------------------------------------
# Model object factories
# ---------------------------------------------------------------------------


def make_run_context(
    owner: str = "alphagov",
    repo: str = "govuk-frontend",
    run_id: str = "4242",
    run_attempt: str = "1",
) -> RunContext:
    return RunContext(owner=owner, repo=repo, run_id=run_id, run_attempt=run_attempt)


def make_action_context(github, commit: str = "abc1234") -> ActionContext:
    return ActionContext(github=github, run=make_run_context(), commit=commit)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def action(github):
    return make_action_context(github)


@pytest.fixture(autouse=True)
def no_dotenv(mocker):
    """Prevent tests from loading a real .env file."""
    mocker.patch("ghreport.cli.load_dotenv")
