"""Tests for file helpers and the package build series."""
from __future__ import annotations

from pathlib import Path

import pytest

from ghreport import files
from ghreport.errors import BuildError
from ghreport.pipeline import BuildOptions, Task, package, series


def write(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def source_tree(tmp_path):
    src = tmp_path / "src/govuk"
    write(src / "assets/images/crest.png", "png")
    write(src / "assets/fonts/bold.woff2", "font")
    write(src / "all.mjs", "export {}")
    write(src / "components/button/button.mjs", "export class Button {}")
    write(src / "components/button/button.unit.test.mjs", "test")
    write(src / "components/button/_index.scss", ".govuk-button {}")
    write(src / "components/button/template.njk", "<button>")
    write(src / "components/button/fixtures.json", "{}")
    write(src / "components/button/button.yaml", "params: []")
    write(src / "govuk-prototype-kit/init.js", "init")
    write(src / "govuk-prototype-kit/macros/button.js", "macro")
    write(src / "govuk-prototype-kit/README.md", "readme")
    return src


@pytest.fixture
def options(tmp_path, source_tree):
    return BuildOptions(
        src_path=source_tree,
        dest_path=tmp_path / "dist/govuk",
        stats_path=tmp_path / "stats",
    )


def relative_files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


# ---------------------------------------------------------------------------
# files
# ---------------------------------------------------------------------------


class TestFiles:
    def test_clean_removes_directory(self, tmp_path):
        write(tmp_path / "out/a/b.txt")
        files.clean(tmp_path / "out")
        assert not (tmp_path / "out").exists()

    def test_clean_missing_path_is_a_no_op(self, tmp_path):
        files.clean(tmp_path / "missing")

    def test_copy_mirrors_structure(self, source_tree, tmp_path):
        dest = tmp_path / "out"
        copied = files.copy("**/*.scss", source_tree, dest)
        assert copied == [dest / "components/button/_index.scss"]
        assert (dest / "components/button/_index.scss").read_text() == ".govuk-button {}"

    def test_copy_multiple_patterns_with_ignore(self, source_tree, tmp_path):
        dest = tmp_path / "out"
        files.copy(["**/*.mjs", "**/*.js"], source_tree, dest, ignore=["*.test.*", "govuk-prototype-kit/*"])
        assert relative_files(dest) == {"all.mjs", "components/button/button.mjs"}


# ---------------------------------------------------------------------------
# series()
# ---------------------------------------------------------------------------


class TestSeries:
    def test_runs_tasks_in_order(self):
        calls = []
        run = series("all", Task("one", lambda: calls.append(1)), Task("two", lambda: calls.append(2)))
        run()
        assert calls == [1, 2]

    def test_stops_at_first_failure(self):
        calls = []

        def fail():
            raise OSError("disk full")

        run = series(
            "all",
            Task("one", lambda: calls.append(1)),
            Task("two", fail),
            Task("three", lambda: calls.append(3)),
        )
        with pytest.raises(BuildError, match="'two' failed: disk full") as excinfo:
            run()
        assert calls == [1]
        assert excinfo.value.task_name == "two"
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_nested_failure_keeps_inner_task_name(self):
        def fail():
            raise RuntimeError("nope")

        run = series("outer", series("inner", Task("leaf", fail)))
        with pytest.raises(BuildError) as excinfo:
            run()
        assert excinfo.value.task_name == "leaf"


# ---------------------------------------------------------------------------
# package()
# ---------------------------------------------------------------------------


class TestPackage:
    def test_builds_package_tree(self, options):
        package(options)()
        assert relative_files(options.dest_path) == {
            "assets/images/crest.png",
            "assets/fonts/bold.woff2",
            "components/button/fixtures.json",
            "all.mjs",
            "components/button/button.mjs",
            "components/button/_index.scss",
            "components/button/template.njk",
            "govuk-prototype-kit/init.js",
            "govuk-prototype-kit/macros/button.js",
        }

    def test_cleans_previous_output(self, options):
        write(options.dest_path / "stale.js")
        write(options.stats_path / "dist/stats.html")
        write(options.stats_path / "package.json", "{}")
        package(options)()
        assert not (options.dest_path / "stale.js").exists()
        assert not (options.stats_path / "dist").exists()
        assert (options.stats_path / "package.json").exists()

    def test_step_order(self, options, mocker):
        clean = mocker.patch("ghreport.pipeline.files.clean")
        copy = mocker.patch("ghreport.pipeline.files.copy")
        package(options)()
        assert [c.args[0] for c in clean.call_args_list] == [
            options.stats_path / "dist",
            options.dest_path,
        ]
        assert [c.args[0] for c in copy.call_args_list] == [
            "**/*",
            "**/fixtures.json",
            ["**/*.mjs", "**/*.js"],
            "**/*.scss",
            "**/*.njk",
            "**/*.js",
        ]

    def test_failing_step_aborts_remaining(self, options, mocker):
        copy = mocker.patch("ghreport.pipeline.files.copy", side_effect=[None, OSError("boom")])
        with pytest.raises(BuildError) as excinfo:
            package(options)()
        assert excinfo.value.task_name == "copy:fixtures"
        assert copy.call_count == 2
