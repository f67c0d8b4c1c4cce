"""
History store — per-path stacks of prior file contents for undo.

The store is the only shared mutable state in the editor. Stack operations
are individually thread-safe; callers that need a read-modify-write sequence
against the file on disk (capture, push, write) hold :meth:`HistoryStore.lock`
for the path across the whole sequence.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from typing import Iterator

from .errors import NoHistoryError

logger = logging.getLogger(__name__)

LOCK_MODES = ("path", "global")


class HistoryStore:
    """Maps a file path to the stack of contents it held before each edit.

    Parameters
    ----------
    lock_mode:
        ``"path"`` gives every file its own lock so edits to unrelated
        files never wait on each other. ``"global"`` serialises every
        mutation behind one lock.
    """

    def __init__(self, lock_mode: str = "path") -> None:
        if lock_mode not in LOCK_MODES:
            raise ValueError(f"lock_mode must be one of {LOCK_MODES}, got {lock_mode!r}")
        self.lock_mode = lock_mode
        self._stacks: dict[str, list[bytes]] = {}
        self._path_locks: dict[str, threading.RLock] = {}
        self._global_lock = threading.RLock()
        # Guards _stacks and _path_locks themselves.
        self._mutex = threading.Lock()

    @staticmethod
    def key(path: str) -> str:
        """Normalise *path* so every spelling of one file, symlinks
        included, shares one stack and one lock."""
        return os.path.realpath(path)

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    def _lock_for(self, key: str) -> threading.RLock:
        if self.lock_mode == "global":
            return self._global_lock
        with self._mutex:
            lock = self._path_locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._path_locks[key] = lock
            return lock

    @contextmanager
    def lock(self, path: str) -> Iterator[None]:
        """Hold the lock that serialises mutations of *path*."""
        with self._lock_for(self.key(path)):
            yield

    # ------------------------------------------------------------------
    # Stack operations
    # ------------------------------------------------------------------

    def push(self, path: str, content: bytes) -> int:
        """Record *content* as the newest prior state of *path*.

        Returns the stack depth after the push.
        """
        key = self.key(path)
        with self._mutex:
            stack = self._stacks.setdefault(key, [])
            stack.append(content)
            depth = len(stack)
        logger.debug("[History] push %s (depth=%d, %d bytes)", key, depth, len(content))
        return depth

    def peek(self, path: str) -> bytes:
        """Return the newest entry for *path* without removing it."""
        key = self.key(path)
        with self._mutex:
            stack = self._stacks.get(key)
            if not stack:
                raise NoHistoryError(f"No edit history found for file '{path}'")
            return stack[-1]

    def pop(self, path: str) -> bytes:
        """Remove and return the newest entry for *path*."""
        key = self.key(path)
        with self._mutex:
            stack = self._stacks.get(key)
            if not stack:
                raise NoHistoryError(f"No edit history found for file '{path}'")
            content = stack.pop()
            if not stack:
                del self._stacks[key]
            depth = len(stack)
        logger.debug("[History] pop %s (depth=%d)", key, depth)
        return content

    def depth(self, path: str) -> int:
        """Number of undoable edits recorded for *path*."""
        with self._mutex:
            return len(self._stacks.get(self.key(path), ()))

    def paths(self) -> list[str]:
        """Normalised paths that currently have history."""
        with self._mutex:
            return sorted(self._stacks)

    def clear(self, path: str | None = None) -> None:
        """Drop the history of *path*, or of every path when omitted."""
        with self._mutex:
            if path is None:
                self._stacks.clear()
            else:
                self._stacks.pop(self.key(path), None)
