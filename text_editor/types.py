"""
Request and response records exchanged with the agent loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class Command(str, Enum):
    """The four operations the editor understands."""

    VIEW = "view"
    WRITE = "write"
    STR_REPLACE = "str_replace"
    UNDO_EDIT = "undo_edit"


@dataclass
class EditRequest:
    """One tool call from the agent.

    ``command`` is kept as the raw string the caller sent; it is validated
    at dispatch so an unknown value can be reported verbatim.
    """
    command: str
    path: str = ""
    old_str: Optional[str] = None
    new_str: Optional[str] = None
    file_text: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EditRequest":
        """Build a request from tool-call arguments, ignoring unknown keys."""
        command = data.get("command", "")
        if isinstance(command, Command):
            command = command.value
        return cls(
            command=str(command),
            path=data.get("path") or "",
            old_str=data.get("old_str"),
            new_str=data.get("new_str"),
            file_text=data.get("file_text"),
        )


@dataclass
class EditResponse:
    """Successful result of an edit.

    View and write populate ``file_text``; write, str_replace and undo_edit
    populate ``message``.
    """
    file_text: Optional[str] = None
    message: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.file_text is not None:
            out["file_text"] = self.file_text
        if self.message is not None:
            out["message"] = self.message
        return out
