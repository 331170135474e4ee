"""Tests for the edit preview and confirmation."""

from unittest.mock import patch

import pytest

from apply_edit import diff_display
from apply_edit.diff_display import (
    CRLF_NOTICE, EditPreview, build_preview, colorize, compute_diff,
    confirm_edit, render_preview, to_rich_markup,
)
from apply_edit.errors import AmbiguousEdit


OLD = "import os\nimport sys\n"
NEW = "import os\nimport re\n"


@pytest.fixture
def preview():
    return build_preview("app.py", OLD, NEW, "import sys")


class TestComputeDiff:
    def test_unified_diff(self):
        diff = compute_diff("app.py", OLD, NEW)
        assert "--- a/app.py" in diff
        assert "+++ b/app.py" in diff
        assert "-import sys" in diff
        assert "+import re" in diff

    def test_unchanged_returns_none(self):
        assert compute_diff("app.py", OLD, OLD) is None

    def test_line_ending_only_change_returns_none(self):
        assert compute_diff("app.py", "a\r\nb\r\n", "a\nb\n") is None


class TestBuildPreview:
    def test_match_line(self, preview):
        assert preview.match_line == 2
        assert preview.crlf_normalized is False
        assert preview.has_changes
        assert preview.headline == "app.py: search block matched at line 2"

    def test_crlf_file_flagged(self):
        p = build_preview("win.txt", "a\r\nb\r\nc", "a\nB\nc", "b\r\n")
        assert p.crlf_normalized is True
        assert p.match_line == 2

    def test_lone_cr_not_flagged(self):
        p = build_preview("mac.txt", "a\rb", "a\rc", "b")
        assert p.crlf_normalized is False
        assert p.match_line == 1

    def test_rejects_ambiguous_search(self):
        with pytest.raises(AmbiguousEdit):
            build_preview("dup.txt", "x\nx\n", "y\nx\n", "x")


class TestRendering:
    def test_colorize(self):
        lines = colorize("--- a\n+++ b\n@@ -1 +1 @@\n-old\n+new\n ctx").splitlines()
        assert lines[0] == "\033[1m--- a\033[0m"
        assert lines[1] == "\033[1m+++ b\033[0m"
        assert lines[2].startswith("\033[36m")
        assert lines[3] == "\033[31m-old\033[0m"
        assert lines[4] == "\033[32m+new\033[0m"
        assert lines[5] == " ctx"

    def test_rich_markup_escapes_brackets(self):
        assert to_rich_markup("+x = [1]") == "[green]+x = \\[1][/green]"

    def test_render_plain(self, preview):
        text = render_preview(preview, color=False)
        assert text.startswith("app.py: search block matched at line 2\n")
        assert "+import re" in text
        assert "\033[" not in text
        assert CRLF_NOTICE not in text

    def test_render_crlf_notice_and_no_changes(self):
        p = EditPreview("win.txt", match_line=1, crlf_normalized=True)
        text = render_preview(p, color=False)
        assert CRLF_NOTICE in text
        assert "No textual changes" in text


class TestConfirmEdit:
    def test_auto_approves(self, preview):
        with patch.object(diff_display, "_review_in_textual") as tui:
            assert confirm_edit(preview, auto=True) is True
        tui.assert_not_called()

    def test_uses_textual_result(self, preview):
        with patch.object(diff_display, "_review_in_textual",
                          return_value=False) as tui:
            assert confirm_edit(preview) is False
        tui.assert_called_once_with(preview)

    @pytest.mark.parametrize("answer, expected", [
        ("y", True), ("YES", True), ("n", False), ("", False), ("maybe", False),
    ])
    def test_console_fallback(self, preview, monkeypatch, capsys, answer, expected):
        monkeypatch.setattr("builtins.input", lambda _prompt: answer)
        with patch.object(diff_display, "_review_in_textual",
                          side_effect=RuntimeError("no terminal")):
            assert confirm_edit(preview) is expected
        assert "matched at line 2" in capsys.readouterr().out

    def test_console_eof_rejects(self, preview, monkeypatch):
        def _eof(_prompt):
            raise EOFError
        monkeypatch.setattr("builtins.input", _eof)
        assert diff_display._confirm_on_console(preview) is False
