"""Search/replace editing — parse a SEARCH/REPLACE block and apply it."""

from .diff_parser import DiffParser, ParsedEdit, ParserState, parse_diff
from .edit_applier import find_unique_match, normalize_line_endings, perform_edit
from .file_io import read_text, safe_write
from .metrics import log_edit_metric, read_edit_stats

__all__ = [
    "DiffParser", "ParsedEdit", "ParserState", "parse_diff",
    "find_unique_match", "normalize_line_endings", "perform_edit",
    "read_text", "safe_write",
    "log_edit_metric", "read_edit_stats",
]
