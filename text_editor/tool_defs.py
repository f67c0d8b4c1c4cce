"""Provider-neutral definition of the ``text_editor`` tool.

Single source of truth for the tool's description and argument schema.
Converter helpers produce the shapes expected by OpenAI and Anthropic APIs,
and :func:`invoke` turns a raw tool call into a result dict.
"""
from __future__ import annotations

import copy
import json
from typing import Any, Mapping, Union

from .engine import TextEditor
from .errors import EditError
from .types import Command, EditRequest


TOOL_NAME = "text_editor"

TOOL_DESCRIPTION = """Perform text editing operations on files.

The `command` parameter specifies the operation to perform. Allowed options are:
    - `view`: View the content of a file.
    - `write`: Create or overwrite a file with the given content.
    - `str_replace`: Replace a string in a file with a new string.
    - `undo_edit`: Undo the last edit made to a file.

To use the write command, you must specify `file_text` which will become the new content of the file. Be careful with
existing files! This is a full overwrite, not a patch, so you must include everything - not just sections you are modifying.

To use the str_replace command, you must specify both `old_str` and `new_str` - the `old_str` needs to exactly match one
unique section of the original file, including any whitespace. Make sure to include enough context that the match is not
ambiguous. The entire original string will be replaced with `new_str`.

undo_edit reverts the most recent write or str_replace on the file, one step per call. Files larger than 400KB or
400,000 characters cannot be viewed."""

TOOL_DEFINITION: dict[str, Any] = {
    "name": TOOL_NAME,
    "description": TOOL_DESCRIPTION,
    "parameters": {
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "enum": [c.value for c in Command],
                "description": "The operation to perform. Allowed options are: "
                               "'view', 'write', 'str_replace', 'undo_edit'.",
            },
            "path": {
                "type": "string",
                "description": "Absolute path to the file, e.g. '/repo/file.py'.",
            },
            "old_str": {
                "type": "string",
                "description": "The string to be replaced (str_replace only).",
            },
            "new_str": {
                "type": "string",
                "description": "The string to replace the old string with (str_replace only).",
            },
            "file_text": {
                "type": "string",
                "description": "The complete new content of the file (write only).",
            },
        },
        "required": ["command", "path"],
        "additionalProperties": False,
    },
}


def _make_strict_parameters(params: dict[str, Any]) -> dict[str, Any]:
    """For OpenAI strict mode: every property is required, optional ones nullable."""
    out = copy.deepcopy(params)
    required = set(out.get("required", []))
    for key, prop in out["properties"].items():
        if key in required:
            continue
        prop_type = prop.pop("type")
        prop["anyOf"] = [{"type": prop_type}, {"type": "null"}]
    out["required"] = list(out["properties"])
    return out


def to_openai_tool(strict: bool = True) -> dict[str, Any]:
    """Return the tool in OpenAI ``tools`` array format."""
    parameters = TOOL_DEFINITION["parameters"]
    if strict:
        parameters = _make_strict_parameters(parameters)
    tool: dict[str, Any] = {
        "type": "function",
        "function": {
            "name": TOOL_DEFINITION["name"],
            "description": TOOL_DEFINITION["description"],
            "parameters": parameters,
        },
    }
    if strict:
        tool["function"]["strict"] = True
    return tool


def to_anthropic_tool() -> dict[str, Any]:
    """Return the tool in Anthropic ``tools`` array format."""
    return {
        "name": TOOL_DEFINITION["name"],
        "description": TOOL_DEFINITION["description"],
        "input_schema": copy.deepcopy(TOOL_DEFINITION["parameters"]),
    }


def invoke(
    editor: TextEditor,
    arguments: Union[str, Mapping[str, Any]],
) -> dict[str, Any]:
    """Execute one tool call and return a JSON-serialisable result.

    *arguments* is the call's argument object, or its JSON encoding as
    providers deliver it. Failures come back as ``{"error", "kind"}``
    rather than raising, so the agent can read them and correct itself.
    """
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as exc:
            return {"error": f"Invalid JSON arguments: {exc}", "kind": "invalid_arguments"}
    if not isinstance(arguments, Mapping):
        return {"error": "Tool arguments must be a JSON object.", "kind": "invalid_arguments"}

    # Strict-mode providers send explicit nulls for unused fields.
    request = EditRequest.from_dict(
        {k: v for k, v in arguments.items() if v is not None})
    try:
        return editor.edit(request).to_dict()
    except EditError as exc:
        return {"error": str(exc), "kind": exc.kind}
