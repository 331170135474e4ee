import logging
import os
import sys
from datetime import datetime


LOGGER_NAME = "apply_edit"

EXPLAIN_TEXT = """\
apply-edit - Apply search and replace edits to files

USAGE:
  {prog} [--explain] <filename>

DESCRIPTION:
  Reads a diff from stdin and applies it to the specified file.
  The diff uses a special format with SEARCH and REPLACE blocks.

EXAMPLE:
  Given a file 'app.py' with contents:
    from flask import Flask
    app = Flask(__name__)

  Run this command:
    cat <<EOF | {prog} app.py
    <<<<<<< SEARCH
    from flask import Flask
    =======
    import math
    from flask import Flask
    >>>>>>> REPLACE
    EOF

  Result: The file will be updated to:
    import math
    from flask import Flask
    app = Flask(__name__)

FORMAT:
  <<<<<<< SEARCH
  [text to find]
  =======
  [text to replace with]
  >>>>>>> REPLACE

NOTES:
  - The search text must match exactly (including whitespace)
  - If multiple matches exist, the operation will fail to avoid ambiguity
  - Empty replace blocks will delete the search text
  - The original file is overwritten with the changes
"""


def setup_logger(log_dir: str = "") -> logging.Logger:
    """Configure the package logger.

    With a *log_dir*, everything down to DEBUG goes to a timestamped file
    there. Without one the logger stays silent.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not log_dir:
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        return logger

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"apply_edit_{timestamp}.log")

    logger.setLevel(logging.DEBUG)

    # File handler — captures everything
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(fh)

    return logger


def print_explain(prog: str) -> None:
    print(EXPLAIN_TEXT.format(prog=prog), end="")


def print_usage(prog: str) -> None:
    print(f"Usage: {prog} [--explain] <filename>", file=sys.stderr)
    print("Use --explain to see example usage", file=sys.stderr)


def print_error(message: str) -> None:
    print(message, file=sys.stderr)


def print_success(filename: str) -> None:
    print(f"Successfully applied edit to {filename}")


def print_stats(stats: dict) -> None:
    """Pretty-print the dict returned by ``read_edit_stats``."""
    print("\nEdit Statistics")
    print("=" * 40)
    print(f"  {'total_edits':<20} {stats['total_edits']}")
    print(f"  {'success_rate':<20} {stats['success_rate']:.1f}%")
    print(f"  {'avg_search_lines':<20} {stats['avg_search_lines']:.1f}")
    print(f"  {'avg_replace_lines':<20} {stats['avg_replace_lines']:.1f}")
    for outcome, pct in stats["outcomes"].items():
        print(f"  {outcome:<20} {pct:.1f}%")
    print()
