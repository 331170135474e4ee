"""Tests for edit metrics logging and stats."""

import json
import os

import pytest

from apply_edit.editing.metrics import log_edit_metric, read_edit_stats


@pytest.fixture
def tmp_project(tmp_path):
    """Create a temp project root."""
    return str(tmp_path)


def _metrics_file(root: str) -> str:
    return os.path.join(root, ".apply_edit", "edit_metrics.jsonl")


class TestLogEditMetric:
    def test_creates_file_and_writes_entry(self, tmp_project):
        log_edit_metric(
            {"file": "src/app.py", "outcome": "applied", "search_lines": 2},
            project_root=tmp_project,
        )

        path = _metrics_file(tmp_project)
        assert os.path.isfile(path)

        with open(path) as f:
            lines = f.readlines()
        assert len(lines) == 1

        entry = json.loads(lines[0])
        assert entry["file"] == "src/app.py"
        assert entry["outcome"] == "applied"
        assert entry["search_lines"] == 2
        assert "timestamp" in entry

    def test_appends_multiple_entries(self, tmp_project):
        log_edit_metric({"file": "a.py"}, project_root=tmp_project)
        log_edit_metric({"file": "b.py"}, project_root=tmp_project)
        log_edit_metric({"file": "c.py"}, project_root=tmp_project)

        with open(_metrics_file(tmp_project)) as f:
            lines = f.readlines()
        assert len(lines) == 3

    def test_custom_metrics_dir(self, tmp_project):
        log_edit_metric({"file": "a.py"}, project_root=tmp_project,
                        metrics_dir="logs/edits")
        assert os.path.isfile(
            os.path.join(tmp_project, "logs", "edits", "edit_metrics.jsonl")
        )

    def test_unwritable_location_does_not_raise(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        log_edit_metric({"file": "a.py"}, project_root=str(blocker))


class TestReadEditStats:
    def test_empty_stats(self, tmp_project):
        stats = read_edit_stats(project_root=tmp_project)

        assert stats["total_edits"] == 0
        assert stats["success_rate"] == 0.0
        assert stats["outcomes"] == {}
        assert stats["avg_search_lines"] == 0.0

    def test_stats_from_entries(self, tmp_project):
        entries = [
            {"outcome": "applied", "search_lines": 2, "replace_lines": 4},
            {"outcome": "applied", "search_lines": 4, "replace_lines": 0},
            {"outcome": "ambiguous", "search_lines": 1, "replace_lines": 1},
            {"outcome": "no_search_block"},
        ]
        for e in entries:
            log_edit_metric(e, project_root=tmp_project)

        stats = read_edit_stats(project_root=tmp_project)

        assert stats["total_edits"] == 4
        assert stats["success_rate"] == pytest.approx(50.0)
        assert stats["outcomes"]["applied"] == pytest.approx(50.0)
        assert stats["outcomes"]["ambiguous"] == pytest.approx(25.0)
        assert stats["outcomes"]["no_search_block"] == pytest.approx(25.0)
        assert stats["avg_search_lines"] == pytest.approx(7 / 3)
        assert stats["avg_replace_lines"] == pytest.approx(5 / 3)

    def test_last_n_window(self, tmp_project):
        for _ in range(5):
            log_edit_metric({"outcome": "not_found"}, project_root=tmp_project)
        for _ in range(3):
            log_edit_metric({"outcome": "applied"}, project_root=tmp_project)

        stats = read_edit_stats(last_n=3, project_root=tmp_project)

        assert stats["total_edits"] == 3
        assert stats["success_rate"] == pytest.approx(100.0)

    def test_skips_corrupt_lines(self, tmp_project):
        log_edit_metric({"outcome": "applied"}, project_root=tmp_project)
        with open(_metrics_file(tmp_project), "a") as f:
            f.write("{not json\n\n")
        log_edit_metric({"outcome": "dry_run"}, project_root=tmp_project)

        stats = read_edit_stats(project_root=tmp_project)

        assert stats["total_edits"] == 2
