from __future__ import annotations

import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .client import GitHubClient
from .comments import upsert_comment
from .config import Settings
from .diffs import comment_diffs
from .errors import CommentPostError, GhReportError
from .models import ActionContext, DiffComment, StatsComment
from .pipeline import BuildOptions, package
from .stats import comment_stats

_stderr = Console(stderr=True)


load_dotenv()


def _fail(exc: GhReportError) -> None:
    _stderr.print(f"[red]Error:[/red] {escape(str(exc))}")
    if isinstance(exc, CommentPostError):
        for result in exc.failures:
            _stderr.print(f"  - {escape(str(result.reason))}")
    sys.exit(1)


def _run_with_github(issue: int, callback) -> None:
    try:
        settings = Settings.from_env()
        with GitHubClient(settings.token, settings.api_url) as client:
            action = ActionContext(github=client, run=settings.run, commit=settings.commit)
            callback(action, issue)
    except GhReportError as exc:
        _fail(exc)


@click.group()
def cli() -> None:
    """ghreport — post CI reports on pull requests and build the package."""


@cli.command("diffs")
@click.argument("issue", type=click.IntRange(min=1))
@click.option(
    "--diff",
    "diffs",
    type=(click.Path(path_type=Path), str, str),
    multiple=True,
    required=True,
    metavar="PATH MARKER TITLE",
    help="Diff file to post, with its comment marker and title. Repeatable.",
)
def diffs_command(issue: int, diffs: tuple[tuple[Path, str, str], ...]) -> None:
    """Post diff files as comments on pull request ISSUE."""
    descriptors = [
        DiffComment(path=str(path), marker_text=marker, title_text=title)
        for path, marker, title in diffs
    ]
    _run_with_github(issue, lambda action, number: comment_diffs(action, number, descriptors))
    _stderr.print(f"[green]Posted {len(descriptors)} diff comment(s) on #{issue}[/green]")


@cli.command()
@click.argument("issue", type=click.IntRange(min=1))
@click.option(
    "--path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory holding the build output to measure.",
)
@click.option("--marker", required=True, help="Marker identifying the comment.")
@click.option("--title", required=True, help="Title of the comment.")
def stats(issue: int, path: Path, marker: str, title: str) -> None:
    """Post file and module size stats on pull request ISSUE."""
    descriptor = StatsComment(path=str(path), marker_text=marker, title_text=title)
    _run_with_github(issue, lambda action, number: comment_stats(action, number, descriptor))
    _stderr.print(f"[green]Posted stats comment on #{issue}[/green]")


@cli.command()
@click.argument("issue", type=click.IntRange(min=1))
@click.option("--marker", required=True, help="Marker identifying the comment.")
@click.option("--title", required=True, help="Title of the comment.")
@click.option(
    "--body-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Markdown file holding the comment body.",
)
def comment(issue: int, marker: str, title: str, body_file: Path) -> None:
    """Create or update a marked comment on pull request ISSUE."""
    body_text = body_file.read_text(encoding="utf-8")
    _run_with_github(
        issue,
        lambda action, number: upsert_comment(action, number, marker, title, body_text),
    )
    _stderr.print(f"[green]Posted comment on #{issue}[/green]")


@cli.command("build-package")
@click.option(
    "--src",
    "src_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=True,
    help="Source tree (assets, scripts, styles, templates…).",
)
@click.option(
    "--dest",
    "dest_path",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Package output directory. Cleaned before building.",
)
@click.option(
    "--stats",
    "stats_path",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Stats package directory whose dist/ is cleaned.",
)
def build_package(src_path: Path, dest_path: Path, stats_path: Path) -> None:
    """Assemble the publishable package from SRC into DEST."""
    options = BuildOptions(src_path=src_path, dest_path=dest_path, stats_path=stats_path)
    try:
        package(options)()
    except GhReportError as exc:
        _fail(exc)
    _stderr.print(f"[green]Package built in {dest_path}[/green]")
