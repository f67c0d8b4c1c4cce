"""
Edit errors — every failure the text editor reports back to its caller.

Errors are data for the orchestrator: each carries a short ``kind`` string
so the tool bridge and the metrics log can classify it without parsing the
message.
"""

from __future__ import annotations


class EditError(Exception):
    """Base class for all text editor failures."""

    kind = "error"


class NotFoundError(EditError):
    """The path does not exist."""

    kind = "not_found"


class IsDirectoryError(EditError):
    """The path resolves to a directory, not a file."""

    kind = "is_directory"


class TooLargeError(EditError):
    """The file's byte length is over the view limit."""

    kind = "too_large"


class TooManyCharactersError(EditError):
    """The decoded file has more characters than the view limit."""

    kind = "too_many_characters"


class NoMatchError(EditError):
    """``old_str`` does not appear in the file."""

    kind = "no_match"


class AmbiguousMatchError(EditError):
    """``old_str`` appears more than once in the file."""

    kind = "ambiguous_match"

    def __init__(self, message: str, occurrences: int = 0) -> None:
        super().__init__(message)
        self.occurrences = occurrences


class NoHistoryError(EditError):
    """Undo was requested for a path with no recorded edits."""

    kind = "no_history"


class InvalidCommandError(EditError):
    """The request names a command the editor does not know."""

    kind = "invalid_command"


class MissingParameterError(EditError):
    """A field required by the command was not supplied."""

    kind = "missing_parameter"


class InvalidParameterError(EditError):
    """A field was supplied with the wrong type."""

    kind = "invalid_parameter"


class EditIOError(EditError):
    """An underlying read or write failed."""

    kind = "io_error"
