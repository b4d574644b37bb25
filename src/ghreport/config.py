from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError
from .models import RunContext

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class Settings:
    token: str
    owner: str
    repo: str
    run_id: str
    run_attempt: str
    commit: str
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read the GitHub Actions environment.

        ``GITHUB_TOKEN``, ``GITHUB_REPOSITORY``, ``GITHUB_RUN_ID`` and ``GITHUB_SHA``
        are required. ``GITHUB_RUN_ATTEMPT`` defaults to ``1``.
        """
        env = os.environ if environ is None else environ

        missing = [
            name
            for name in ("GITHUB_TOKEN", "GITHUB_REPOSITORY", "GITHUB_RUN_ID", "GITHUB_SHA")
            if not env.get(name)
        ]
        if missing:
            raise ConfigError(f"{', '.join(missing)} environment variable(s) not set.")

        repository = env["GITHUB_REPOSITORY"]
        owner, _, repo = repository.partition("/")
        if not owner or not repo or "/" in repo:
            raise ConfigError(f"GITHUB_REPOSITORY {repository!r} is not in OWNER/REPO format.")

        return cls(
            token=env["GITHUB_TOKEN"],
            owner=owner,
            repo=repo,
            run_id=env["GITHUB_RUN_ID"],
            run_attempt=env.get("GITHUB_RUN_ATTEMPT") or "1",
            commit=env["GITHUB_SHA"],
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )

    @property
    def run(self) -> RunContext:
        return RunContext(
            owner=self.owner,
            repo=self.repo,
            run_id=self.run_id,
            run_attempt=self.run_attempt,
        )
