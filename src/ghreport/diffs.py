from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .comments import artifacts_url, upsert_comment
from .errors import CommentPostError
from .models import ActionContext, DiffComment, SettledResult

NO_CHANGES_TEXT = "No changes found."

_stderr = Console(stderr=True)


def comment_diffs(action: ActionContext, issue_number: int, diffs: list[DiffComment]) -> None:
    """Post every diff in parallel, then fail once if any of them failed.

    A failing diff never prevents the others from being posted.
    """
    with ThreadPoolExecutor(max_workers=max(len(diffs), 1)) as pool:
        futures = [pool.submit(comment_diff, action, issue_number, diff) for diff in diffs]
        wait(futures)

    results: list[SettledResult] = []
    for diff, future in zip(diffs, futures):
        exc = future.exception()
        if exc is None:
            results.append(SettledResult(status="fulfilled", value=future.result()))
        else:
            _stderr.print(f"[red]Error:[/red] posting {escape(diff.path)} failed: {escape(str(exc))}")
            results.append(SettledResult(status="rejected", reason=exc))

    if any(result.status == "rejected" for result in results):
        raise CommentPostError("Posting diff comment failed", results)


def comment_diff(action: ActionContext, issue_number: int, diff: DiffComment) -> None:
    try:
        # An empty diff file still gets a comment, with a short note
        diff_text = Path(diff.path).read_text(encoding="utf-8") or NO_CHANGES_TEXT
        upsert_comment(
            action,
            issue_number,
            diff.marker_text,
            diff.title_text,
            f"```diff\n{diff_text}\n```",
        )
    except Exception as exc:
        _stderr.print(
            f"[yellow]Warning:[/yellow] could not post {escape(diff.path)} ({escape(str(exc))}), linking to artifacts instead"
        )
        # upload-artifact doesn't expose a public URL for the file, so link the run's artifacts
        upsert_comment(
            action,
            issue_number,
            diff.marker_text,
            diff.title_text,
            "The diff could not be posted as a comment. You can download it from the "
            f"[workflow artifacts]({artifacts_url(action.run)}).",
        )
