from __future__ import annotations

from collections.abc import Sequence

from ..errors import TableError

_SIZE_UNITS = ("B", "KiB", "MiB", "GiB")


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render a GitHub-flavoured Markdown table.

    Every row must have as many cells as there are headers::

        | File | Size |
        | --- | --- |
        | dist/govuk-frontend.min.js | 100 KiB |
    """
    if not all(len(row) == len(headers) for row in rows):
        raise TableError("All rows must have the same number of elements as the headers.")

    lines: list[str] = []
    lines.append(f"| {' | '.join(headers)} |")
    lines.append(f"| {' | '.join(['---'] * len(headers))} |")
    for row in rows:
        lines.append(f"| {' | '.join(str(cell) for cell in row)} |")

    return "\n".join(lines) + "\n"


def format_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in _SIZE_UNITS:
        # Pick the unit after rounding, so 1023.999 KiB becomes 1 MiB
        rounded = round(size, 2)
        if rounded < 1024 or unit == _SIZE_UNITS[-1]:
            break
        size /= 1024

    return f"{rounded:.2f}".rstrip("0").rstrip(".") + f" {unit}"
