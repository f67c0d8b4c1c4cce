"""Tests for the tool definition and the invoke bridge."""

import json

from text_editor.config import Config
from text_editor.engine import TextEditor
from text_editor.tool_defs import (
    TOOL_DEFINITION,
    invoke,
    to_anthropic_tool,
    to_openai_tool,
)


class TestDefinition:
    def test_commands_enumerated(self):
        props = TOOL_DEFINITION["parameters"]["properties"]
        assert props["command"]["enum"] == ["view", "write", "str_replace", "undo_edit"]
        assert TOOL_DEFINITION["parameters"]["required"] == ["command", "path"]

    def test_description_states_full_overwrite(self):
        desc = TOOL_DEFINITION["description"]
        assert "full overwrite" in desc
        assert "exactly match one" in desc

    def test_openai_strict_shape(self):
        tool = to_openai_tool()
        fn = tool["function"]
        assert tool["type"] == "function"
        assert fn["strict"] is True
        params = fn["parameters"]
        assert set(params["required"]) == {"command", "path", "old_str", "new_str", "file_text"}
        assert params["properties"]["old_str"]["anyOf"] == [{"type": "string"}, {"type": "null"}]
        assert params["properties"]["command"]["type"] == "string"
        # The shared definition is not mutated.
        assert "type" in TOOL_DEFINITION["parameters"]["properties"]["old_str"]

    def test_openai_non_strict(self):
        fn = to_openai_tool(strict=False)["function"]
        assert "strict" not in fn
        assert fn["parameters"] == TOOL_DEFINITION["parameters"]

    def test_anthropic_shape(self):
        tool = to_anthropic_tool()
        assert tool["name"] == "text_editor"
        assert tool["input_schema"] == TOOL_DEFINITION["parameters"]


class TestInvoke:
    def test_json_arguments(self, tmp_path):
        editor = TextEditor(Config({}))
        path = str(tmp_path / "a.txt")
        result = invoke(editor, json.dumps(
            {"command": "write", "path": path, "file_text": "hello"}))
        assert result["file_text"] == "hello"
        assert "written successfully" in result["message"]

    def test_strict_nulls_are_ignored(self, tmp_path):
        editor = TextEditor(Config({}))
        path = tmp_path / "a.txt"
        path.write_text("one two")
        result = invoke(editor, {
            "command": "str_replace", "path": str(path),
            "old_str": "one", "new_str": None, "file_text": None,
        })
        assert "has been edited" in result["message"]
        assert path.read_text() == " two"

    def test_errors_are_data(self, tmp_path):
        editor = TextEditor(Config({}))
        result = invoke(editor, {"command": "undo_edit", "path": str(tmp_path / "a.txt")})
        assert result["kind"] == "no_history"
        assert "No edit history" in result["error"]

    def test_invalid_command(self, tmp_path):
        result = invoke(TextEditor(Config({})), {"command": "create", "path": "/x"})
        assert result["kind"] == "invalid_command"
        assert "create" in result["error"]

    def test_bad_json(self):
        result = invoke(TextEditor(Config({})), "{oops")
        assert result["kind"] == "invalid_arguments"

    def test_non_object_json(self):
        result = invoke(TextEditor(Config({})), "[1, 2]")
        assert result["kind"] == "invalid_arguments"

    def test_non_string_file_text_is_data(self, tmp_path):
        editor = TextEditor(Config({}))
        path = tmp_path / "a.txt"
        result = invoke(editor, {"command": "write", "path": str(path), "file_text": 123})
        assert result["kind"] == "invalid_parameter"
        assert "file_text" in result["error"]
        assert not path.exists()

    def test_non_string_old_str_leaves_file_and_history(self, tmp_path):
        editor = TextEditor(Config({}))
        path = tmp_path / "a.txt"
        invoke(editor, {"command": "write", "path": str(path), "file_text": "v1"})
        invoke(editor, {"command": "write", "path": str(path), "file_text": "v2 5"})

        result = invoke(editor, {
            "command": "str_replace", "path": str(path), "old_str": 5, "new_str": "x"})
        assert result["kind"] == "invalid_parameter"
        assert path.read_text() == "v2 5"

        result = invoke(editor, {"command": "undo_edit", "path": str(path)})
        assert "undone" in result["message"]
        assert path.read_text() == "v1"

    def test_non_string_path_is_data(self):
        result = invoke(TextEditor(Config({})), {"command": "view", "path": ["a", "b"]})
        assert result["kind"] == "invalid_parameter"
