"""Exception hierarchy shared by the walker, the engine adapter and the CLI."""

from __future__ import annotations


class GrepXlsxError(Exception):
    """Base class for every error the search run reports."""


class FilesystemError(GrepXlsxError):
    """Raised when the directory tree cannot be traversed."""


class EngineError(GrepXlsxError):
    """Raised when the spreadsheet engine fails an operation."""

    def __init__(self, operation: str, cause: object) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class UsageError(GrepXlsxError):
    """Raised when the command line is missing required input."""
