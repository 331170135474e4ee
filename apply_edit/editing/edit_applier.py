"""
Edit applier — replaces the single exact occurrence of a search fragment
in file content, refusing missing or ambiguous matches.
"""

from __future__ import annotations

import logging

from ..errors import AmbiguousEdit, SearchNotFound

logger = logging.getLogger(__name__)


def normalize_line_endings(text: str) -> str:
    """Rewrite CRLF pairs as LF. Lone CR characters are left alone."""
    return text.replace("\r\n", "\n")


def find_unique_match(content: str, search: str) -> int:
    """Return the offset of the only occurrence of *search* in *content*.

    Both arguments are expected to be normalized already. An empty
    *search* occurs everywhere and is therefore always ambiguous.

    Raises
    ------
    SearchNotFound
        If *search* does not occur.
    AmbiguousEdit
        If *search* occurs again after the end of the first match.
    """
    index = content.find(search)
    if index == -1:
        raise SearchNotFound(search)

    if content.find(search, index + len(search)) != -1:
        raise AmbiguousEdit()

    return index


def perform_edit(content: str, search: str, replace: str) -> str:
    """Apply a search → replace edit to *content* and return the new text.

    *content* and *search* are matched with CRLF normalized to LF; the
    returned text keeps that normalization. *replace* is inserted verbatim.

    Raises
    ------
    SearchNotFound
        If the search fragment is missing. The error carries the search
        text exactly as supplied.
    AmbiguousEdit
        If the search fragment occurs more than once.
    """
    normalized_content = normalize_line_endings(content)
    normalized_search = normalize_line_endings(search)

    try:
        index = find_unique_match(normalized_content, normalized_search)
    except SearchNotFound:
        raise SearchNotFound(search) from None

    end = index + len(normalized_search)
    logger.debug(
        "[ApplyEdit] Search block matched at line %d (%d chars)",
        normalized_content.count("\n", 0, index) + 1,
        len(normalized_search),
    )

    return normalized_content[:index] + replace + normalized_content[end:]
