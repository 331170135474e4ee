"""
Errors raised by the diff parser and the edit applier.
"""


class EditError(Exception):
    """Base class for every edit that cannot be parsed or applied."""


class NoSearchBlockFound(EditError):
    """The diff has no lines inside a SEARCH section."""

    def __init__(self, message: str = "no search block found in diff") -> None:
        super().__init__(message)


class SearchNotFound(EditError):
    """The search fragment does not occur in the file content."""

    def __init__(self, search: str) -> None:
        self.search = search
        super().__init__(f"search block not found in file:\n{search}")


class AmbiguousEdit(EditError):
    """The search fragment occurs more than once in the file content."""

    def __init__(
        self,
        message: str = (
            "multiple occurrences of search block found - "
            "edit would be ambiguous"
        ),
    ) -> None:
        super().__init__(message)
