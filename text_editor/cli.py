"""
CLI entry point — argument parsing and main execution flow.

History lives in the process, so ``undo_edit`` is only meaningful inside
``serve``, which reads one JSON tool call per line on stdin and answers
with one JSON result per line on stdout.
"""

import argparse
import json
import sys

from .config import Config
from .engine import TextEditor
from .errors import EditError
from .log import setup_logger
from .metrics import read_edit_stats
from .tool_defs import TOOL_DEFINITION, invoke, to_anthropic_tool, to_openai_tool
from .types import EditRequest


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-editor",
        description="View, write, patch and undo edits to text files")
    parser.add_argument("--config", default=None,
                        help="Path to .text_editor.yaml config file")
    parser.add_argument("--no-log", action="store_true",
                        help="Do not write a log file")
    sub = parser.add_subparsers(dest="action", required=True)

    p = sub.add_parser("view", help="Print a file in a fenced block")
    p.add_argument("path")

    p = sub.add_parser("write", help="Overwrite a file with new content")
    p.add_argument("path")
    p.add_argument("--from-file", default=None,
                   help="Read the new content from this file (default: stdin)")

    p = sub.add_parser("str_replace", help="Replace one exact occurrence of a string")
    p.add_argument("path")
    p.add_argument("--old", required=True, help="Exact text to replace")
    p.add_argument("--new", default="", help="Replacement text")

    sub.add_parser("serve", help="Answer JSON-lines tool calls on stdin")

    p = sub.add_parser("schema", help="Print the tool definition")
    p.add_argument("--format", choices=["neutral", "openai", "anthropic"],
                   default="neutral")

    p = sub.add_parser("stats", help="Summarise the edit metrics log")
    p.add_argument("--last", type=int, default=50,
                   help="Number of most-recent entries to include")
    return parser


def serve(editor: TextEditor, stdin=None, stdout=None) -> int:
    """Run the JSON-lines loop until EOF. Returns the number of calls handled."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    handled = 0
    for line in stdin:
        if not line.strip():
            continue
        result = invoke(editor, line)
        stdout.write(json.dumps(result) + "\n")
        stdout.flush()
        handled += 1
    return handled


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    cfg = Config.load(args.config)
    if not args.no_log:
        setup_logger(cfg.LOG_DIR)

    if args.action == "schema":
        if args.format == "openai":
            out = to_openai_tool()
        elif args.format == "anthropic":
            out = to_anthropic_tool()
        else:
            out = TOOL_DEFINITION
        print(json.dumps(out, indent=2))
        return 0

    if args.action == "stats":
        print(json.dumps(read_edit_stats(args.last, cfg.METRICS_DIR), indent=2))
        return 0

    editor = TextEditor(cfg)

    if args.action == "serve":
        serve(editor)
        return 0

    if args.action == "view":
        request = EditRequest(command="view", path=args.path)
    elif args.action == "write":
        if args.from_file:
            with open(args.from_file, "r", encoding=cfg.ENCODING, newline="") as f:
                text = f.read()
        else:
            text = sys.stdin.read()
        request = EditRequest(command="write", path=args.path, file_text=text)
    else:
        request = EditRequest(command="str_replace", path=args.path,
                              old_str=args.old, new_str=args.new)

    try:
        response = editor.edit(request)
    except EditError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if args.action == "view":
        print(response.file_text)
    else:
        print(response.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
