from __future__ import annotations


class ContentPathError(Exception):
    """Base class for resolution failures."""


class DocumentNotFoundError(ContentPathError, LookupError):
    """No path mapping exists for a document-provider identifier."""


class InvalidDocumentIdError(DocumentNotFoundError, ValueError):
    """A document identifier carries a value that cannot be parsed."""


class ColumnUnreadableError(ContentPathError):
    """A provider row exists but the requested column is null or unreadable."""

    def __init__(self, column: str, message: str | None = None) -> None:
        super().__init__(message or f"Column {column!r} is null or unreadable")
        self.column = column


class UnsupportedUriError(ContentPathError):
    """A provider cannot serve the given URI."""


__all__ = [
    "ColumnUnreadableError",
    "ContentPathError",
    "DocumentNotFoundError",
    "InvalidDocumentIdError",
    "UnsupportedUriError",
]
