"""
Edit metrics — records every apply-edit invocation in a JSONL log file.
"""

from __future__ import annotations

import json
import logging
import os
from collections import Counter
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_METRICS_DIR = ".apply_edit"
_METRICS_FILE = "edit_metrics.jsonl"

OUTCOME_APPLIED = "applied"
OUTCOME_DRY_RUN = "dry_run"
OUTCOME_REJECTED = "rejected"
OUTCOME_NO_SEARCH_BLOCK = "no_search_block"
OUTCOME_NOT_FOUND = "not_found"
OUTCOME_AMBIGUOUS = "ambiguous"


def _metrics_path(
    project_root: str | None = None,
    metrics_dir: str = _METRICS_DIR,
) -> str:
    """Return the absolute path to the metrics file."""
    base = project_root or os.getcwd()
    return os.path.join(base, metrics_dir, _METRICS_FILE)


def log_edit_metric(
    data: dict,
    project_root: str | None = None,
    metrics_dir: str = _METRICS_DIR,
) -> None:
    """Append a single edit entry to the JSONL log.

    Parameters
    ----------
    data:
        Fields to log (file, outcome, search_lines, replace_lines, ...).
    project_root:
        Optional project root directory. Defaults to CWD.
    metrics_dir:
        Directory under *project_root* that holds the log.
    """
    path = _metrics_path(project_root, metrics_dir)

    entry = {"timestamp": datetime.now(timezone.utc).isoformat()}
    entry.update(data)

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    except OSError as exc:
        logger.warning("[ApplyEdit] Failed to write metrics: %s", exc)


def read_edit_stats(
    last_n: int = 50,
    project_root: str | None = None,
    metrics_dir: str = _METRICS_DIR,
) -> dict:
    """Compute rolling statistics from the metrics log.

    Parameters
    ----------
    last_n:
        Number of most-recent entries to include.
    project_root:
        Optional project root directory.
    metrics_dir:
        Directory under *project_root* that holds the log.

    Returns
    -------
    dict
        Statistics including total_edits, success_rate, outcomes,
        avg_search_lines and avg_replace_lines.
    """
    path = _metrics_path(project_root, metrics_dir)

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
            logger.warning("[ApplyEdit] Failed to read metrics: %s", exc)

    entries = entries[-last_n:]

    if not entries:
        return {
            "total_edits": 0,
            "success_rate": 0.0,
            "outcomes": {},
            "avg_search_lines": 0.0,
            "avg_replace_lines": 0.0,
        }

    total = len(entries)
    search_lines = [e["search_lines"] for e in entries if "search_lines" in e]
    replace_lines = [e["replace_lines"] for e in entries if "replace_lines" in e]
    outcomes = Counter(e.get("outcome", "unknown") for e in entries)

    return {
        "total_edits": total,
        "success_rate": outcomes.get(OUTCOME_APPLIED, 0) / total * 100,
        "outcomes": {
            outcome: count / total * 100
            for outcome, count in outcomes.most_common()
        },
        "avg_search_lines": (
            sum(search_lines) / len(search_lines) if search_lines else 0.0
        ),
        "avg_replace_lines": (
            sum(replace_lines) / len(replace_lines) if replace_lines else 0.0
        ),
    }
