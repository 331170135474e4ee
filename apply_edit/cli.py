"""
CLI entry point — reads a SEARCH/REPLACE diff and applies it to a file.
"""

import argparse
import logging
import sys
from typing import NoReturn

from .cli_display import (
    print_error, print_explain, print_stats, print_success, print_usage,
    setup_logger,
)
from .config import Config
from .diff_display import build_preview, confirm_edit, show_preview
from .editing import (
    ParsedEdit, log_edit_metric, parse_diff, perform_edit, read_edit_stats,
    read_text, safe_write,
)
from .editing.metrics import (
    OUTCOME_AMBIGUOUS, OUTCOME_APPLIED, OUTCOME_DRY_RUN,
    OUTCOME_NO_SEARCH_BLOCK, OUTCOME_NOT_FOUND, OUTCOME_REJECTED,
)
from .errors import AmbiguousEdit, EditError, SearchNotFound

logger = logging.getLogger(__name__)


def _read_diff(args: argparse.Namespace, encoding: str) -> str:
    """Read the whole diff, including a final unterminated line."""
    if args.diff_file:
        return read_text(args.diff_file, encoding)
    return sys.stdin.buffer.read().decode(encoding)


def _record(cfg: Config, filename: str, outcome: str,
            edit: ParsedEdit | None = None) -> None:
    """Append an edit-log entry when metrics are enabled."""
    if not cfg.METRICS_ENABLED:
        return
    data = {"file": filename, "outcome": outcome}
    if edit is not None:
        data["search_lines"] = edit.search.count("\n") + 1
        data["replace_lines"] = (
            0 if edit.is_deletion else edit.replace.count("\n") + 1
        )
    log_edit_metric(data, metrics_dir=cfg.METRICS_DIR)


def _fail(message: str) -> NoReturn:
    logger.error("[ApplyEdit] %s", message)
    print_error(message)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apply-edit",
        description="Apply a SEARCH/REPLACE edit read from stdin to a file",
        add_help=True,
    )
    parser.add_argument("filenames", nargs="*", metavar="filename",
                        help="The file to edit (exactly one)")
    parser.add_argument("--explain", action="store_true",
                        help="Show example usage")
    parser.add_argument("--config", default=None,
                        help="Path to .apply_edit.yaml config file")
    parser.add_argument("--diff-file", default=None,
                        help="Read the diff from this file instead of stdin")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show the resulting diff without writing the file")
    parser.add_argument("--review", action="store_true",
                        help="Review the diff interactively before writing "
                             "(requires --diff-file)")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable colored diff output")
    parser.add_argument("--stats", action="store_true",
                        help="Show statistics from the edit log and exit")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # ── 0. Load config and logging ──
    cfg = Config.load(args.config)
    setup_logger(cfg.LOG_DIR)

    if args.explain:
        print_explain(parser.prog)
        return

    if args.stats:
        print_stats(read_edit_stats(metrics_dir=cfg.METRICS_DIR))
        return

    if len(args.filenames) != 1:
        print_usage(parser.prog)
        sys.exit(1)

    if args.review and not args.diff_file:
        _fail("--review requires --diff-file because stdin carries the diff")

    filename = args.filenames[0]

    # ── 1. Read and parse the diff ──
    try:
        diff_text = _read_diff(args, cfg.ENCODING)
    except (OSError, UnicodeDecodeError) as exc:
        source = args.diff_file or "stdin"
        _fail(f"Error reading diff from {source}: {exc}")

    try:
        edit = parse_diff(diff_text)
    except EditError as exc:
        _record(cfg, filename, OUTCOME_NO_SEARCH_BLOCK)
        _fail(f"Error parsing diff: {exc}")

    # ── 2. Read the target file ──
    try:
        content = read_text(filename, cfg.ENCODING)
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"Error reading file {filename}: {exc}")

    # ── 3. Compute the new content ──
    try:
        new_content = perform_edit(content, edit.search, edit.replace)
    except EditError as exc:
        if isinstance(exc, SearchNotFound):
            _record(cfg, filename, OUTCOME_NOT_FOUND, edit)
        elif isinstance(exc, AmbiguousEdit):
            _record(cfg, filename, OUTCOME_AMBIGUOUS, edit)
        _fail(f"Error performing edit: {exc}")

    color = cfg.COLOR and not args.no_color

    if args.dry_run:
        show_preview(build_preview(filename, content, new_content, edit.search),
                     color=color)
        _record(cfg, filename, OUTCOME_DRY_RUN, edit)
        return

    if args.review and not confirm_edit(
            build_preview(filename, content, new_content, edit.search)):
        _record(cfg, filename, OUTCOME_REJECTED, edit)
        _fail(f"Edit rejected for {filename}")

    # ── 4. Write back ──
    try:
        safe_write(filename, new_content, cfg.ENCODING, atomic=cfg.ATOMIC_WRITE)
    except OSError as exc:
        _fail(f"Error writing file {filename}: {exc}")

    _record(cfg, filename, OUTCOME_APPLIED, edit)
    logger.info("[ApplyEdit] Applied edit to %s", filename)
    print_success(filename)


if __name__ == "__main__":
    main()
