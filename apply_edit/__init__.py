"""
apply_edit — apply a single SEARCH/REPLACE edit to a file.

Public API for library usage::

    from apply_edit import parse_diff, perform_edit

    search, replace = parse_diff(diff_text)
    new_content = perform_edit(content, search, replace)
"""

from .editing import ParsedEdit, parse_diff, perform_edit
from .errors import AmbiguousEdit, EditError, NoSearchBlockFound, SearchNotFound

__all__ = [
    "ParsedEdit", "parse_diff", "perform_edit",
    "EditError", "NoSearchBlockFound", "SearchNotFound", "AmbiguousEdit",
]
