"""text_editor — view, overwrite, patch and undo edits to files for an agent."""

from .config import Config
from .engine import TextEditor
from .errors import (
    AmbiguousMatchError,
    EditError,
    EditIOError,
    InvalidCommandError,
    InvalidParameterError,
    IsDirectoryError,
    MissingParameterError,
    NoHistoryError,
    NoMatchError,
    NotFoundError,
    TooLargeError,
    TooManyCharactersError,
)
from .history import HistoryStore
from .tool_defs import TOOL_DEFINITION, invoke, to_anthropic_tool, to_openai_tool
from .types import Command, EditRequest, EditResponse

__all__ = [
    "Config", "TextEditor", "HistoryStore",
    "Command", "EditRequest", "EditResponse",
    "TOOL_DEFINITION", "invoke", "to_openai_tool", "to_anthropic_tool",
    "EditError", "NotFoundError", "IsDirectoryError", "TooLargeError",
    "TooManyCharactersError", "NoMatchError", "AmbiguousMatchError",
    "NoHistoryError", "InvalidCommandError", "MissingParameterError",
    "InvalidParameterError",
    "EditIOError",
]
