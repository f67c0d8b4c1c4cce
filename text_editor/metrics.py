"""
Edit metrics — records every editor call in a JSONL log file.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections import Counter
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_METRICS_DIR = ".text_editor"
_METRICS_FILE = "edit_metrics.jsonl"

# Serialises appends from concurrent editor calls within this process.
_write_lock = threading.Lock()


def _metrics_path(metrics_dir: str | None = None) -> str:
    """Return the absolute path to the metrics file."""
    base = metrics_dir or os.path.join(os.getcwd(), _METRICS_DIR)
    return os.path.join(os.path.abspath(base), _METRICS_FILE)


def log_edit_metric(data: dict, metrics_dir: str | None = None) -> None:
    """Append a single edit metric entry to the JSONL log.

    Parameters
    ----------
    data:
        Metric fields to log (command, path, success, error_kind, ...).
    metrics_dir:
        Directory holding the log. Defaults to ``./.text_editor``.
    """
    path = _metrics_path(metrics_dir)

    entry = {"timestamp": datetime.now(timezone.utc).isoformat()}
    entry.update(data)

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with _write_lock, open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    except OSError as exc:
        logger.warning("[TextEditor] Failed to write metrics: %s", exc)


def read_edit_stats(
    last_n: int = 50,
    metrics_dir: str | None = None,
) -> dict:
    """Compute rolling statistics from the metrics log.

    Parameters
    ----------
    last_n:
        Number of most-recent entries to include.
    metrics_dir:
        Directory holding the log.

    Returns
    -------
    dict
        ``total_edits``, ``success_rate`` (percent), ``commands`` (calls per
        command) and ``errors`` (failures per error kind).
    """
    path = _metrics_path(metrics_dir)

    entries: list[dict] = []
    if os.path.isfile(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        try:
                            entries.append(json.loads(line))
                        except json.JSONDecodeError:
                            continue
        except OSError as exc:
            logger.warning("[TextEditor] Failed to read metrics: %s", exc)

    entries = entries[-last_n:]

    if not entries:
        return {
            "total_edits": 0,
            "success_rate": 0.0,
            "commands": {},
            "errors": {},
        }

    total = len(entries)
    successes = sum(1 for e in entries if e.get("success", False))
    commands = Counter(e.get("command", "unknown") for e in entries)
    errors = Counter(
        e.get("error_kind", "error") for e in entries
        if not e.get("success", False)
    )

    return {
        "total_edits": total,
        "success_rate": successes / total * 100,
        "commands": dict(commands.most_common()),
        "errors": dict(errors.most_common()),
    }
