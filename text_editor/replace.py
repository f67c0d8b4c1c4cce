"""
Replace engine — exact, uniqueness-checked literal substring replacement.

``old_str`` is matched literally: case, whitespace and line endings must
agree with the file. No regular-expression semantics apply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import AmbiguousMatchError, NoMatchError
from .snippet import SNIPPET_LINES, snippet_range

logger = logging.getLogger(__name__)


@dataclass
class ReplaceResult:
    """Outcome of a single successful replacement."""
    new_content: str
    match_line: int     # 0-indexed line of the match start in the original
    start_line: int     # snippet window, inclusive, over new_content
    end_line: int


def count_occurrences(content: str, old_str: str) -> int:
    """Count non-overlapping occurrences of *old_str* in *content*."""
    return content.count(old_str)


def replace_unique(
    content: str,
    old_str: str,
    new_str: str,
    path: str = "",
    context: int = SNIPPET_LINES,
) -> ReplaceResult:
    """Replace the single occurrence of *old_str* in *content*.

    Raises
    ------
    NoMatchError
        *old_str* does not occur.
    AmbiguousMatchError
        *old_str* occurs more than once.
    """
    count = count_occurrences(content, old_str)
    if count == 0:
        raise NoMatchError(
            f"No replacement was performed: old_str `{old_str}` did not appear "
            f"verbatim in {path or 'the file'}. "
            "'old_str' must appear exactly once in the file. Make sure the string "
            "exactly matches existing file content, including whitespace!"
        )
    if count > 1:
        raise AmbiguousMatchError(
            f"No replacement was performed: 'old_str' appears {count} times in "
            f"{path or 'the file'}, but must appear exactly once. Include enough "
            "surrounding context in 'old_str' to make the match unique.",
            occurrences=count,
        )

    idx = content.index(old_str)
    new_content = content[:idx] + new_str + content[idx + len(old_str):]

    match_line = content.count("\n", 0, idx)
    total_lines = new_content.count("\n") + 1
    start, end = snippet_range(match_line, new_str, total_lines, context)
    logger.debug(
        "[Replace] %s: match at line %d, snippet %d-%d",
        path, match_line + 1, start + 1, end + 1,
    )
    return ReplaceResult(
        new_content=new_content,
        match_line=match_line,
        start_line=start,
        end_line=end,
    )
