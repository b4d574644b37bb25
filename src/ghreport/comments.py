from __future__ import annotations

from urllib.parse import urljoin

from .models import ActionContext, RunContext

_REVIEW_APP_URL = "https://govuk-frontend-pr-{number}.herokuapp.com"


def upsert_comment(
    action: ActionContext,
    issue_number: int,
    marker_text: str,
    title_text: str,
    body_text: str,
) -> None:
    """Create or update the issue comment identified by ``marker_text``.

    Every page of comments is scanned. The first matching comment of a page is
    kept, and a match on a later page replaces one from an earlier page.
    """
    marker = f"<!-- {marker_text} -->"
    body = "\n".join(
        [
            marker,
            f"## {title_text}",
            body_text,
            "\n---",  # <hr> for a little extra separation from content
            render_comment_footer(action.run, action.commit),
        ]
    )

    owner, repo = action.run.owner, action.run.repo
    comment_id: int | None = None

    for comments in action.github.iter_comment_pages(owner, repo, issue_number):
        match = next((c for c in comments if c.body and marker in c.body), None)
        if match is not None:
            comment_id = match.id

    if comment_id is None:
        action.github.create_comment(owner, repo, issue_number, body)
    else:
        action.github.update_comment(owner, repo, comment_id, body)


def render_comment_footer(run: RunContext, commit: str) -> str:
    return f"[Action run]({action_run_url(run)}) for {commit}"


def action_run_url(run: RunContext) -> str:
    return (
        f"https://github.com/{run.owner}/{run.repo}"
        f"/actions/runs/{run.run_id}/attempts/{run.run_attempt}"
    )


def artifacts_url(run: RunContext) -> str:
    return f"{action_run_url(run)}#artifacts"


def review_app_url(pr_number: int, path: str = "/") -> str:
    return urljoin(_REVIEW_APP_URL.format(number=pr_number), path)
