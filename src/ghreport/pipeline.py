from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from . import files
from .errors import BuildError

_stderr = Console(stderr=True)

SCRIPT_IGNORE = ("*.test.*", "*.unit.test.*", "govuk-prototype-kit/*")


@dataclass(frozen=True)
class Task:
    name: str
    fn: Callable[[], object]

    def __call__(self) -> None:
        self.fn()


@dataclass(frozen=True)
class BuildOptions:
    src_path: Path
    dest_path: Path
    stats_path: Path


def series(name: str, *tasks: Task) -> Task:
    """Combine ``tasks`` into one task that runs them in order.

    The first failing task stops the series.
    """

    def run() -> None:
        for task in tasks:
            _stderr.print(f"Starting [cyan]'{task.name}'[/cyan]...")
            started = time.perf_counter()
            try:
                task()
            except BuildError:
                raise
            except Exception as exc:
                _stderr.print(f"[red]'{task.name}' errored[/red]")
                raise BuildError(task.name, str(exc)) from exc
            elapsed = (time.perf_counter() - started) * 1000
            _stderr.print(f"Finished [cyan]'{task.name}'[/cyan] after {elapsed:.0f} ms")

    return Task(name, run)


def clean_task(name: str, path: Path) -> Task:
    return Task(name, lambda: files.clean(path))


def copy_task(
    name: str,
    patterns: str | list[str],
    src_path: Path,
    dest_path: Path,
    ignore: tuple[str, ...] = (),
) -> Task:
    return Task(name, lambda: files.copy(patterns, src_path, dest_path, ignore=ignore))


def assets(options: BuildOptions) -> Task:
    return copy_task(
        "copy:assets",
        "**/*",
        options.src_path / "assets",
        options.dest_path / "assets",
    )


def fixtures(options: BuildOptions) -> Task:
    return copy_task("copy:fixtures", "**/fixtures.json", options.src_path, options.dest_path)


def scripts(options: BuildOptions) -> Task:
    return copy_task(
        "copy:scripts",
        ["**/*.mjs", "**/*.js"],
        options.src_path,
        options.dest_path,
        ignore=SCRIPT_IGNORE,
    )


def styles(options: BuildOptions) -> Task:
    return copy_task("copy:styles", "**/*.scss", options.src_path, options.dest_path)


def templates(options: BuildOptions) -> Task:
    return copy_task("copy:templates", "**/*.njk", options.src_path, options.dest_path)


def package(options: BuildOptions) -> Task:
    """Prepare ``options.dest_path`` for publishing."""
    return series(
        "build:package",
        clean_task("clean", options.stats_path / "dist"),
        clean_task("clean:package", options.dest_path),
        assets(options),
        fixtures(options),
        scripts(options),
        styles(options),
        templates(options),
        # GOV.UK Prototype Kit JavaScript
        copy_task(
            "copy:files 'govuk-prototype-kit'",
            "**/*.js",
            options.src_path / "govuk-prototype-kit",
            options.dest_path / "govuk-prototype-kit",
        ),
    )
