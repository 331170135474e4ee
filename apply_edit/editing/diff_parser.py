"""
Diff parser — turns a SEARCH/REPLACE block into the search and replace
fragments consumed by the edit applier.
"""

from __future__ import annotations

import enum
import logging
from typing import NamedTuple

from ..errors import NoSearchBlockFound

logger = logging.getLogger(__name__)

# Markers (matched as line prefixes)
SEARCH_MARKER = "<<<<<<< SEARCH"
SEPARATOR_MARKER = "======="
REPLACE_MARKER = ">>>>>>> REPLACE"

# Whitespace trimmed around the whole diff. Unlike str.strip(), the ASCII
# separators \x1c-\x1f are kept.
_TRIM_CHARS = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


class ParserState(enum.Enum):
    """Which fragment, if any, the parser is currently collecting."""
    IDLE = "idle"
    SEARCH = "search"
    REPLACE = "replace"


class ParsedEdit(NamedTuple):
    """A single search → replace edit."""
    search: str
    replace: str

    @property
    def is_deletion(self) -> bool:
        return self.replace == ""


class DiffParser:
    """Parse a single SEARCH/REPLACE block."""

    def parse(self, diff_text: str) -> ParsedEdit:
        """Extract the search and replace fragments from *diff_text*.

        Parameters
        ----------
        diff_text:
            The raw diff, typically read from stdin.

        Returns
        -------
        ParsedEdit
            The newline-joined search and replace fragments.

        Raises
        ------
        NoSearchBlockFound
            If no line was collected inside a SEARCH section.
        """
        search_lines: list[str] = []
        replace_lines: list[str] = []
        state = ParserState.IDLE

        for line in diff_text.strip(_TRIM_CHARS).split("\n"):
            if line.startswith(SEARCH_MARKER):
                if search_lines or replace_lines:
                    logger.debug(
                        "[ApplyEdit] New SEARCH marker, discarding %d search "
                        "and %d replace lines",
                        len(search_lines), len(replace_lines),
                    )
                search_lines = []
                replace_lines = []
                state = ParserState.SEARCH
            elif line.startswith(SEPARATOR_MARKER):
                state = ParserState.REPLACE
            elif line.startswith(REPLACE_MARKER):
                state = ParserState.IDLE
            elif state is ParserState.SEARCH:
                search_lines.append(line)
            elif state is ParserState.REPLACE:
                replace_lines.append(line)

        if not search_lines:
            logger.warning("[ApplyEdit] No search block found in diff")
            raise NoSearchBlockFound()

        if state is not ParserState.IDLE:
            logger.debug(
                "[ApplyEdit] Diff ended while collecting %s lines",
                state.value,
            )

        return ParsedEdit(
            search="\n".join(search_lines),
            replace="\n".join(replace_lines),
        )


def parse_diff(diff_text: str) -> ParsedEdit:
    """Shortcut for ``DiffParser().parse(diff_text)``."""
    return DiffParser().parse(diff_text)
