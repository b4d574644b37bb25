from __future__ import annotations

from .markdown_fmt import format_size, render_table

__all__ = ["format_size", "render_table"]
