"""
Text editor engine — view, write, str_replace and undo_edit on files.

Every destructive mutation pushes the file's previous bytes onto the
history store before the new content reaches disk, so each prior state
can be restored exactly once by ``undo_edit``.
"""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from typing import Any, Callable, Mapping, Union

from .config import Config
from .errors import (
    EditError,
    EditIOError,
    InvalidCommandError,
    InvalidParameterError,
    IsDirectoryError,
    MissingParameterError,
    NotFoundError,
)
from .history import HistoryStore
from .metrics import log_edit_metric
from .replace import replace_unique
from .size_guard import check_char_count, check_file_size
from .snippet import fence, language_tag, render_snippet
from .types import Command, EditRequest, EditResponse

logger = logging.getLogger(__name__)


class TextEditor:
    """Dispatches edit requests from an agent to the four command handlers.

    One instance owns one history; share the instance between workers that
    edit the same files so their undo stacks agree.
    """

    def __init__(
        self,
        config: Config | None = None,
        history: HistoryStore | None = None,
    ) -> None:
        self.config = config or Config()
        self.history = history or HistoryStore(self.config.LOCK_MODE)
        self._handlers: dict[Command, Callable[[EditRequest], EditResponse]] = {
            Command.VIEW: self.view,
            Command.WRITE: self.write,
            Command.STR_REPLACE: self.str_replace,
            Command.UNDO_EDIT: self.undo_edit,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def edit(self, request: Union[EditRequest, Mapping[str, Any]]) -> EditResponse:
        """Run one request and return its response.

        Raises
        ------
        EditError
            The first failure the handler met. Nothing is retried.
        """
        if not isinstance(request, EditRequest):
            request = EditRequest.from_dict(request)

        try:
            try:
                command = Command(request.command)
            except ValueError:
                raise InvalidCommandError(
                    f"Invalid command: {request.command!r}. Allowed options are: "
                    + ", ".join(c.value for c in Command)
                ) from None
            self._check_types(request)
            if not request.path:
                raise MissingParameterError(
                    f"The '{command.value}' command requires 'path'.")
            response = self._handlers[command](request)
        except EditError as exc:
            logger.info(
                "[TextEditor] %s %s failed (%s): %s",
                request.command, request.path, exc.kind, exc,
            )
            self._record(request, exc)
            raise

        self._record(request, None)
        return response

    @staticmethod
    def _check_types(request: EditRequest) -> None:
        """Reject fields that arrived as something other than a string."""
        for name in ("path", "old_str", "new_str", "file_text"):
            value = getattr(request, name)
            if value is not None and not isinstance(value, str):
                raise InvalidParameterError(
                    f"'{name}' must be a string, got {type(value).__name__}.")

    def _record(self, request: EditRequest, error: EditError | None) -> None:
        if not self.config.METRICS_ENABLED:
            return
        log_edit_metric(
            {
                "command": request.command,
                "path": request.path,
                "success": error is None,
                "error_kind": error.kind if error is not None else None,
                "history_depth": (
                    self.history.depth(request.path)
                    if request.path and isinstance(request.path, str) else 0
                ),
            },
            metrics_dir=self.config.METRICS_DIR,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def view(self, request: EditRequest) -> EditResponse:
        path = request.path
        if os.path.isdir(path):
            raise IsDirectoryError(f"The path '{path}' is a directory, not a file.")
        if not os.path.isfile(path):
            raise NotFoundError(f"The path '{path}' does not exist or is not a file.")

        check_file_size(path, self.config.MAX_FILE_BYTES)
        content = self._decode(path, self._read_bytes(path))
        check_char_count(path, content, self.config.MAX_CHARS)

        return EditResponse(file_text=fence(content, language_tag(path)))

    def write(self, request: EditRequest) -> EditResponse:
        path = request.path
        if request.file_text is None:
            raise MissingParameterError(
                "The 'write' command requires 'file_text', the complete new content of the file.")
        data = self._encode(path, request.file_text)

        with self.history.lock(path):
            existed = os.path.isfile(path)
            if existed:
                prior = self._read_bytes(path, "Failed to read existing file")
                self.history.push(path, prior)
            try:
                self._write_bytes(path, data)
            except EditIOError:
                if existed:
                    self.history.pop(path)
                raise

        logger.info(
            "[TextEditor] write %s (%d bytes, %s)",
            path, len(data), "overwrite" if existed else "new file",
        )
        return EditResponse(
            file_text=request.file_text,
            message=f"File '{path}' has been written successfully.",
        )

    def str_replace(self, request: EditRequest) -> EditResponse:
        path = request.path
        if not request.old_str:
            raise MissingParameterError(
                "The 'str_replace' command requires a non-empty 'old_str'.")
        new_str = request.new_str or ""

        if os.path.isdir(path):
            raise IsDirectoryError(f"The path '{path}' is a directory, not a file.")
        if not os.path.isfile(path):
            raise NotFoundError(
                f"File '{path}' does not exist, you can write a new file with the `write` command")

        with self.history.lock(path):
            original = self._read_bytes(path)
            content = self._decode(path, original)
            result = replace_unique(
                content, request.old_str, new_str, path, self.config.SNIPPET_LINES)
            data = self._encode(path, result.new_content)

            self.history.push(path, original)
            try:
                self._write_bytes(path, data)
            except EditIOError:
                self.history.pop(path)
                raise

        logger.info(
            "[TextEditor] str_replace %s at line %d", path, result.match_line + 1)
        snippet = render_snippet(
            result.new_content, result.start_line, result.end_line, language_tag(path))
        return EditResponse(
            message=(
                f"The file {path} has been edited, and the section now reads:\n"
                f"{snippet}\n"
                "Review the changes above for errors. "
                "Undo and edit the file again if necessary!"
            ),
        )

    def undo_edit(self, request: EditRequest) -> EditResponse:
        path = request.path
        with self.history.lock(path):
            prior = self.history.peek(path)
            self._write_bytes(path, prior)
            # Popped only once the restore is on disk.
            self.history.pop(path)

        logger.info(
            "[TextEditor] undo_edit %s (%d left)", path, self.history.depth(path))
        return EditResponse(
            message=f"The last edit to file '{path}' has been undone.",
        )

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    @staticmethod
    def _read_bytes(path: str, what: str = "Failed to read file") -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as exc:
            raise EditIOError(f"{what} '{path}': {exc}") from exc

    def _decode(self, path: str, data: bytes) -> str:
        try:
            return data.decode(self.config.ENCODING)
        except (UnicodeDecodeError, LookupError) as exc:
            raise EditIOError(
                f"File '{path}' is not valid {self.config.ENCODING} text: {exc}") from exc

    def _encode(self, path: str, text: str) -> bytes:
        try:
            return text.encode(self.config.ENCODING)
        except (UnicodeEncodeError, LookupError) as exc:
            raise EditIOError(
                f"Content for '{path}' cannot be encoded as {self.config.ENCODING}: {exc}") from exc

    @staticmethod
    def _write_bytes(path: str, data: bytes) -> None:
        """Replace the whole file with *data* via temp file + rename.

        Writes through symlinks and keeps the permission bits of an
        existing file; a new file gets 0o666 less the process umask.
        """
        target = os.path.realpath(path)
        tmp_path = os.path.join(
            os.path.dirname(target), f".text_editor_{uuid.uuid4().hex}.tmp")
        created = False
        try:
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
            created = True
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            if os.path.isfile(target):
                shutil.copymode(target, tmp_path)
            os.replace(tmp_path, target)
        except OSError as exc:
            if created:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            raise EditIOError(f"Failed to write file '{path}': {exc}") from exc
