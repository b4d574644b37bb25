from __future__ import annotations

import time
from collections.abc import Iterator
from typing import Any

import httpx
from rich.console import Console

from .errors import ApiError, AuthError, NetworkError, NotFoundError, RateLimitError
from .models import IssueComment

_API_URL = "https://api.github.com"
_RETRY_DELAYS = (1, 5, 15)
# Only reads are retried; writes surface their first failure
_RETRY_METHODS = frozenset({"GET"})
_stderr = Console(stderr=True)


class GitHubClient:
    def __init__(self, token: str, api_url: str = _API_URL) -> None:
        self._api_url = api_url.rstrip("/")
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=httpx.Timeout(30.0),
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self._client.close()

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if url.startswith("/"):
            url = f"{self._api_url}{url}"

        retry = method.upper() in _RETRY_METHODS
        delays = _RETRY_DELAYS if retry else ()

        last_exc: Exception | None = None
        for attempt, delay in enumerate((*delays, None)):
            try:
                response = self._client.request(method, url, **kwargs)
            except httpx.TimeoutException as exc:
                if not retry:
                    raise NetworkError(f"Request timed out: {method} {url}") from exc
                last_exc = exc
                if delay is not None:
                    time.sleep(delay)
                continue
            except httpx.RequestError as exc:
                raise NetworkError(str(exc)) from exc

            if response.status_code == 401:
                raise AuthError("GitHub token is invalid or missing required scopes.")
            if response.status_code >= 500:
                last_exc = ApiError(f"GitHub API returned HTTP {response.status_code}")
                if not retry:
                    raise last_exc
                if delay is not None:
                    time.sleep(delay)
                continue

            remaining = response.headers.get("x-ratelimit-remaining")
            if response.status_code in (403, 429) and remaining == "0":
                reset_at = response.headers.get("x-ratelimit-reset", "unknown")
                raise RateLimitError(f"GitHub rate limit exhausted. Resets at {reset_at}.")
            if response.status_code == 404:
                raise NotFoundError(f"Not found: {method} {url}")
            if not response.is_success:
                raise ApiError(f"GitHub API returned HTTP {response.status_code}: {response.text}")

            if remaining is not None and remaining.isdigit() and int(remaining) < 100:
                _stderr.print(
                    f"[yellow]Warning:[/yellow] GitHub rate limit low: {remaining} requests remaining "
                    f"(resets at {response.headers.get('x-ratelimit-reset', 'unknown')})"
                )

            return response

        raise NetworkError(f"Request failed after retries: {last_exc}") from last_exc

    def iter_comment_pages(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        per_page: int = 100,
    ) -> Iterator[list[IssueComment]]:
        """Yield the issue's comments one page at a time, following ``Link: rel="next"``."""
        url: str | None = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"
        params: dict[str, Any] | None = {"per_page": per_page}

        while url:
            response = self.request("GET", url, params=params)
            yield [self._parse_comment(c) for c in response.json()]

            next_link = response.links.get("next")
            url = next_link.get("url") if next_link else None
            # The next URL already carries the query string
            params = None

    def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> IssueComment:
        response = self.request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return self._parse_comment(response.json())

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> IssueComment:
        response = self.request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            json={"body": body},
        )
        return self._parse_comment(response.json())

    @staticmethod
    def _parse_comment(node: dict[str, Any]) -> IssueComment:
        return IssueComment(id=node["id"], body=node.get("body"))
