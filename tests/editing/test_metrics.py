"""Tests for edit metrics logging and stats."""

import json
import os

import pytest

from text_editor.config import Config
from text_editor.engine import TextEditor
from text_editor.errors import NoMatchError
from text_editor.metrics import log_edit_metric, read_edit_stats
from text_editor.types import EditRequest


@pytest.fixture
def metrics_dir(tmp_path):
    """A metrics directory that does not exist yet."""
    return str(tmp_path / ".text_editor")


def _metrics_file(metrics_dir):
    return os.path.join(metrics_dir, "edit_metrics.jsonl")


class TestLogEditMetric:
    def test_creates_file_and_writes_entry(self, metrics_dir):
        log_edit_metric(
            {"command": "write", "path": "src/auth.py", "success": True},
            metrics_dir=metrics_dir,
        )

        path = _metrics_file(metrics_dir)
        assert os.path.isfile(path)

        with open(path) as f:
            lines = f.readlines()
        assert len(lines) == 1

        entry = json.loads(lines[0])
        assert entry["path"] == "src/auth.py"
        assert entry["success"] is True
        assert "timestamp" in entry

    def test_appends_multiple_entries(self, metrics_dir):
        log_edit_metric({"command": "view"}, metrics_dir=metrics_dir)
        log_edit_metric({"command": "view"}, metrics_dir=metrics_dir)
        log_edit_metric({"command": "write"}, metrics_dir=metrics_dir)

        with open(_metrics_file(metrics_dir)) as f:
            assert len(f.readlines()) == 3


class TestReadEditStats:
    def test_empty_stats(self, metrics_dir):
        stats = read_edit_stats(metrics_dir=metrics_dir)

        assert stats["total_edits"] == 0
        assert stats["success_rate"] == 0.0
        assert stats["commands"] == {}
        assert stats["errors"] == {}

    def test_stats_from_entries(self, metrics_dir):
        entries = [
            {"command": "write", "success": True},
            {"command": "str_replace", "success": True},
            {"command": "str_replace", "success": False, "error_kind": "no_match"},
            {"command": "undo_edit", "success": False, "error_kind": "no_history"},
        ]
        for e in entries:
            log_edit_metric(e, metrics_dir=metrics_dir)

        stats = read_edit_stats(metrics_dir=metrics_dir)
        assert stats["total_edits"] == 4
        assert stats["success_rate"] == pytest.approx(50.0)
        assert stats["commands"] == {"str_replace": 2, "write": 1, "undo_edit": 1}
        assert stats["errors"] == {"no_match": 1, "no_history": 1}

    def test_last_n_limits_window(self, metrics_dir):
        for _ in range(5):
            log_edit_metric({"command": "view", "success": False, "error_kind": "not_found"},
                            metrics_dir=metrics_dir)
        for _ in range(3):
            log_edit_metric({"command": "view", "success": True}, metrics_dir=metrics_dir)

        stats = read_edit_stats(last_n=3, metrics_dir=metrics_dir)
        assert stats["total_edits"] == 3
        assert stats["success_rate"] == pytest.approx(100.0)

    def test_skips_corrupt_lines(self, metrics_dir):
        log_edit_metric({"command": "view", "success": True}, metrics_dir=metrics_dir)
        with open(_metrics_file(metrics_dir), "a") as f:
            f.write("{not json\n")

        stats = read_edit_stats(metrics_dir=metrics_dir)
        assert stats["total_edits"] == 1


class TestEditorMetrics:
    def test_editor_records_success_and_failure(self, tmp_path, metrics_dir):
        editor = TextEditor(Config({"metrics_enabled": True, "metrics_dir": metrics_dir}))
        path = str(tmp_path / "a.txt")

        editor.edit(EditRequest(command="write", path=path, file_text="abc"))
        with pytest.raises(NoMatchError):
            editor.edit(EditRequest(command="str_replace", path=path, old_str="zzz", new_str="y"))

        with open(_metrics_file(metrics_dir)) as f:
            entries = [json.loads(line) for line in f]

        assert [e["command"] for e in entries] == ["write", "str_replace"]
        assert entries[0]["success"] is True
        assert entries[0]["error_kind"] is None
        assert entries[1]["success"] is False
        assert entries[1]["error_kind"] == "no_match"

    def test_disabled_by_default(self, tmp_path, metrics_dir):
        editor = TextEditor(Config({"metrics_dir": metrics_dir}))
        editor.edit(EditRequest(command="write", path=str(tmp_path / "a.txt"), file_text="x"))
        assert not os.path.exists(_metrics_file(metrics_dir))
