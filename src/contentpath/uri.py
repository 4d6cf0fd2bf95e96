from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

CONTENT_SCHEME = "content"
FILE_SCHEME = "file"

_DOCUMENT_SEGMENT = "document"
_TREE_SEGMENT = "tree"


@dataclass(frozen=True)
class ResourceId:
    """Parsed view of a provider-issued URI.

    ``path`` is the percent-decoded path component and ``document_id`` is only
    set for document-provider URIs (``content://<authority>/document/<id>`` or
    the ``tree/<tree-id>/document/<id>`` form).
    """

    scheme: str
    authority: str
    path: str
    raw: str
    document_id: str | None = None

    @property
    def is_content(self) -> bool:
        return self.scheme == CONTENT_SCHEME

    @property
    def is_file(self) -> bool:
        return self.scheme == FILE_SCHEME

    @property
    def is_document(self) -> bool:
        return self.document_id is not None

    def __str__(self) -> str:
        return self.raw


def _document_id(scheme: str, raw_path: str) -> str | None:
    if scheme != CONTENT_SCHEME:
        return None
    segments = [segment for segment in raw_path.split("/") if segment]
    if len(segments) == 2 and segments[0] == _DOCUMENT_SEGMENT:
        return unquote(segments[1])
    if len(segments) == 4 and segments[0] == _TREE_SEGMENT and segments[2] == _DOCUMENT_SEGMENT:
        return unquote(segments[3])
    return None


def parse_uri(value: str | ResourceId) -> ResourceId:
    if isinstance(value, ResourceId):
        return value
    raw = value.strip()
    parts = urlsplit(raw)
    scheme = parts.scheme.lower()
    return ResourceId(
        scheme=scheme,
        authority=parts.netloc,
        path=unquote(parts.path),
        raw=raw,
        document_id=_document_id(scheme, parts.path),
    )


def with_appended_id(base: str | ResourceId, row_id: int) -> ResourceId:
    if row_id < 0:
        raise ValueError(f"Row ids must be non-negative, got {row_id}")
    return parse_uri(f"{str(base).rstrip('/')}/{row_id}")


def file_uri(path: str | Path) -> ResourceId:
    return parse_uri(Path(path).expanduser().absolute().as_uri())


__all__ = [
    "CONTENT_SCHEME",
    "FILE_SCHEME",
    "ResourceId",
    "file_uri",
    "parse_uri",
    "with_appended_id",
]
