from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from urllib.parse import urljoin

from .comments import review_app_url, upsert_comment
from .errors import StatsError
from .formatters import format_size, render_table
from .models import ActionContext, StatsComment

DIST_PATH = "dist"
PACKAGE_PATH = "packages/govuk-frontend/dist/govuk"
ASSET_SUFFIXES = (".css", ".js", ".mjs")

# Modules are the package entry point plus one entry point per component,
# found in the packaged tree as components/<name>/<name>.mjs
ENTRY_MODULE = "all.mjs"

TABLE_HEADERS = ("File", "Size")


def get_file_sizes(base_path: Path, search_path: Path, recursive: bool = False) -> list[list[str]]:
    """Return ``[label, size]`` rows for style and script files under ``search_path``.

    Labels are relative to ``base_path``. Missing directories yield no rows.
    """
    if not search_path.is_dir():
        return []

    candidates = search_path.rglob("*") if recursive else search_path.glob("*")
    files = sorted(p for p in candidates if p.is_file() and p.suffix in ASSET_SUFFIXES)

    return [
        [p.relative_to(base_path).as_posix(), format_size(p.stat().st_size)]
        for p in files
    ]


def find_module_paths(base_path: Path) -> list[str]:
    package_path = base_path / PACKAGE_PATH
    if not package_path.is_dir():
        raise StatsError(f"No built package found at {package_path}")

    components = sorted(
        p.relative_to(package_path).as_posix()
        for p in package_path.glob("components/*/*.mjs")
        if p.stem == p.parent.name
    )
    return [ENTRY_MODULE, *components]


def get_module_stats(base_path: Path, module_path: str) -> tuple[str, str]:
    module_file = base_path / PACKAGE_PATH / module_path
    try:
        size = module_file.stat().st_size
    except FileNotFoundError as exc:
        raise StatsError(f"Module {module_path} has not been built ({module_file} not found)") from exc
    return module_path, format_size(size)


def render_stats(
    base_path: Path,
    issue_number: int,
    module_paths: Iterable[str] | None = None,
) -> str:
    app_url = review_app_url(issue_number)
    if module_paths is None:
        module_paths = find_module_paths(base_path)

    file_size_rows = [
        *get_file_sizes(base_path, base_path / DIST_PATH, recursive=True),
        *get_file_sizes(base_path, base_path / PACKAGE_PATH),
    ]
    file_size_text = "\n".join(["### File sizes", render_table(TABLE_HEADERS, file_size_rows)])

    modules_rows: list[Sequence[str]] = []
    for module_path, module_size in (get_module_stats(base_path, m) for m in module_paths):
        stats_url = urljoin(app_url, f"docs/stats/{module_path.replace('mjs', 'html', 1)}")
        modules_rows.append([f"[{module_path}]({stats_url})", module_size])

    modules_text = "\n".join(
        [
            "### Modules",
            render_table(TABLE_HEADERS, modules_rows),
            f"[View stats and visualisations on the review app]({app_url})",
        ]
    )

    return "\n".join([file_size_text, modules_text])


def comment_stats(
    action: ActionContext,
    issue_number: int,
    stats: StatsComment,
    module_paths: Iterable[str] | None = None,
) -> None:
    body_text = render_stats(Path(stats.path), issue_number, module_paths)
    upsert_comment(action, issue_number, stats.marker_text, stats.title_text, body_text)
