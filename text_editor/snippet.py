"""
Snippet builder — fenced, language-tagged views of whole files or of the
few lines around an edit.
"""

from __future__ import annotations

import os

SNIPPET_LINES = 4


def language_tag(path: str) -> str:
    """Return the fence label for *path*: its extension, lower-cased.

    The extension is whatever follows the last ``.`` of the base name, so
    ``dir.v2/Makefile`` has none and ``.bashrc`` is ``bashrc``.
    """
    name = os.path.basename(path)
    _, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""


def fence(text: str, language: str = "") -> str:
    """Wrap *text* in a markdown code fence labelled *language*."""
    return f"```{language}\n{text}\n```"


def snippet_range(
    match_line: int,
    new_str: str,
    total_lines: int,
    context: int = SNIPPET_LINES,
) -> tuple[int, int]:
    """Compute the inclusive 0-based line range to show after a replacement.

    The window starts *context* lines above the first line of the match
    and ends *context* lines below it, pushed further down by every
    newline *new_str* introduces. Both ends are clamped to the file.
    """
    start = max(0, match_line - context)
    end = match_line + context + new_str.count("\n")
    end = min(end, total_lines - 1)
    return start, end


def render_snippet(content: str, start: int, end: int, language: str = "") -> str:
    """Slice lines ``start..end`` (inclusive) of *content* into a fence."""
    lines = content.split("\n")
    return fence("\n".join(lines[start:end + 1]), language)
