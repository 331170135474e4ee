"""
Edit preview — shows where the search block matched and what the file
will look like afterwards, and asks for confirmation before writing.

The interactive review runs in a small Textual app; a one-line console
prompt takes over when the terminal cannot host it.
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass

from .editing.edit_applier import find_unique_match, normalize_line_endings

logger = logging.getLogger(__name__)

# Unified-diff line prefix → (ANSI SGR code, Rich style). Order matters:
# file headers must win over plain additions/removals.
_LINE_STYLES = (
    ("+++", "1", "bold"),
    ("---", "1", "bold"),
    ("@@", "36", "cyan"),
    ("+", "32", "green"),
    ("-", "31", "red"),
)

CRLF_NOTICE = "CRLF line endings in this file will be written back as LF"


@dataclass
class EditPreview:
    """What an edit does to one file."""
    filepath: str
    match_line: int
    crlf_normalized: bool
    diff_text: str | None = None

    @property
    def headline(self) -> str:
        return f"{self.filepath}: search block matched at line {self.match_line}"

    @property
    def has_changes(self) -> bool:
        return self.diff_text is not None


def compute_diff(filepath: str, old_content: str, new_content: str) -> str | None:
    """Unified diff of the two contents, ignoring line-ending differences.

    Returns None when nothing but line endings changed.
    """
    old_lines = normalize_line_endings(old_content).splitlines()
    new_lines = new_content.splitlines()
    if old_lines == new_lines:
        return None
    return "\n".join(difflib.unified_diff(
        old_lines, new_lines,
        fromfile=f"a/{filepath}", tofile=f"b/{filepath}",
        lineterm="",
    ))


def build_preview(filepath: str, old_content: str, new_content: str,
                  search: str) -> EditPreview:
    """Describe an edit that ``perform_edit`` has already accepted."""
    normalized = normalize_line_endings(old_content)
    offset = find_unique_match(normalized, normalize_line_endings(search))
    return EditPreview(
        filepath=filepath,
        match_line=normalized.count("\n", 0, offset) + 1,
        crlf_normalized="\r\n" in old_content,
        diff_text=compute_diff(filepath, old_content, new_content),
    )


def _style_for(line: str) -> tuple[str, str] | None:
    for prefix, sgr, rich_style in _LINE_STYLES:
        if line.startswith(prefix):
            return sgr, rich_style
    return None


def colorize(diff_text: str) -> str:
    """ANSI-colour a unified diff."""
    out = []
    for line in diff_text.splitlines():
        style = _style_for(line)
        out.append(f"\033[{style[0]}m{line}\033[0m" if style else line)
    return "\n".join(out)


def to_rich_markup(diff_text: str) -> str:
    """Rich-markup version of a unified diff for the Textual viewer."""
    out = []
    for line in diff_text.splitlines():
        text = line.replace("[", "\\[")
        style = _style_for(line)
        out.append(f"[{style[1]}]{text}[/{style[1]}]" if style else text)
    return "\n".join(out)


def render_preview(preview: EditPreview, color: bool = True) -> str:
    parts = [preview.headline]
    if preview.crlf_normalized:
        parts.append(f"  note: {CRLF_NOTICE}")
    if preview.has_changes:
        parts.append(colorize(preview.diff_text) if color else preview.diff_text)
    else:
        parts.append("  No textual changes (line endings only)")
    return "\n".join(parts)


def show_preview(preview: EditPreview, color: bool = True) -> None:
    print(render_preview(preview, color=color))


def confirm_edit(preview: EditPreview, auto: bool = False) -> bool:
    """Ask whether the previewed edit should be written.

    Auto mode logs the diff and approves.
    """
    if auto:
        logger.info("[auto] %s\n%s", preview.headline, preview.diff_text or "")
        return True

    try:
        return _review_in_textual(preview)
    except Exception as e:
        logger.warning("[ApplyEdit] Textual review unavailable: %s", e)

    return _confirm_on_console(preview)


def _review_in_textual(preview: EditPreview) -> bool:
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Static

    class EditReviewApp(App[bool]):
        CSS = """
        #crlf-notice { color: $warning; padding: 0 1; }
        #diff { padding: 0 1; }
        """
        BINDINGS = [
            ("y", "decide(True)", "Apply edit"),
            ("n", "decide(False)", "Discard"),
            ("escape", "decide(False)", "Discard"),
        ]

        def compose(self) -> ComposeResult:
            yield Header()
            if preview.crlf_normalized:
                yield Static(CRLF_NOTICE, id="crlf-notice")
            with VerticalScroll():
                body = (to_rich_markup(preview.diff_text) if preview.has_changes
                        else "No textual changes (line endings only)")
                yield Static(body, id="diff")
            yield Footer()

        def on_mount(self) -> None:
            self.title = "apply-edit review"
            self.sub_title = preview.headline

        def action_decide(self, apply: bool) -> None:
            self.exit(apply)

    return EditReviewApp().run() is True


def _confirm_on_console(preview: EditPreview) -> bool:
    show_preview(preview)
    try:
        answer = input("Apply this edit? [y/N] ")
    except (EOFError, KeyboardInterrupt):
        return False
    return answer.strip().lower() in ("y", "yes")
