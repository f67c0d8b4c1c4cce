"""
Size guard — bounds how much of a file the view path will load into memory.
"""

from __future__ import annotations

import logging
import os

from .errors import EditIOError, TooLargeError, TooManyCharactersError

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 400 * 1024
MAX_CHAR_COUNT = 400_000


def check_file_size(path: str, max_bytes: int = MAX_FILE_BYTES) -> int:
    """Reject *path* when its on-disk size exceeds *max_bytes*.

    Returns the measured size in bytes.
    """
    try:
        size = os.stat(path).st_size
    except OSError as exc:
        raise EditIOError(f"Failed to stat file '{path}': {exc}") from exc

    if size > max_bytes:
        logger.info("[SizeGuard] %s rejected: %d bytes > %d", path, size, max_bytes)
        raise TooLargeError(
            f"File '{path}' is too large ({size / 1024:.2f}KB). "
            f"Maximum size is {max_bytes // 1024}KB to prevent memory issues."
        )
    return size


def check_char_count(path: str, text: str, max_chars: int = MAX_CHAR_COUNT) -> int:
    """Reject decoded *text* holding more than *max_chars* characters.

    Characters are Unicode code points, the same unit used to locate
    line numbers elsewhere in the editor.
    """
    count = len(text)
    if count > max_chars:
        logger.info("[SizeGuard] %s rejected: %d chars > %d", path, count, max_chars)
        raise TooManyCharactersError(
            f"File '{path}' has too many characters ({count}). "
            f"Maximum character count is {max_chars}."
        )
    return count
