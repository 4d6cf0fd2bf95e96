from contentpath.classifier import ProviderKind, classify
from contentpath.errors import (
    ColumnUnreadableError,
    ContentPathError,
    DocumentNotFoundError,
    InvalidDocumentIdError,
    UnsupportedUriError,
)
from contentpath.resolver import PathResolver, open_resolver, resolve_path
from contentpath.uri import ResourceId, file_uri, parse_uri, with_appended_id

__all__ = [
    "ColumnUnreadableError",
    "ContentPathError",
    "DocumentNotFoundError",
    "InvalidDocumentIdError",
    "PathResolver",
    "ProviderKind",
    "ResourceId",
    "UnsupportedUriError",
    "classify",
    "file_uri",
    "open_resolver",
    "parse_uri",
    "resolve_path",
    "with_appended_id",
]
