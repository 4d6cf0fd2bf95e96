from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator

from dotenv import load_dotenv

from contentpath.classifier import CLOUD_PHOTO_AUTHORITIES, ProviderKind, classify
from contentpath.cloud import CloudFallbackStrategy, MetadataFactory
from contentpath.config import Settings, load_settings
from contentpath.documents import DocumentStrategy
from contentpath.errors import DocumentNotFoundError, InvalidDocumentIdError
from contentpath.generic import GenericSchemeStrategy
from contentpath.logging_utils import configure_contentpath_logging
from contentpath.providers.content import (
    ContentResolver,
    MediaStoreRegistrar,
    StaticStorageRoot,
    StorageRootProvider,
)
from contentpath.providers.exif import ExifMetadata
from contentpath.providers.sqlite_store import SqliteMediaStore, connect_store, init_store
from contentpath.rows import DATA_SELECTION, RowLookupStrategy
from contentpath.uri import ResourceId, parse_uri

logger = logging.getLogger(__name__)


class PathResolver:
    """Turn provider URIs into filesystem paths.

    ``resolve_path`` returns ``""`` when nothing could be resolved. The only
    error that reaches callers is ``InvalidDocumentIdError`` for a downloads
    document whose id is not a row number.
    """

    def __init__(
        self,
        content_resolver: ContentResolver,
        registrar: MediaStoreRegistrar,
        storage_root: StorageRootProvider,
        *,
        metadata_factory: MetadataFactory = ExifMetadata,
        document_uris: bool = True,
        materialize_missing_rows: bool = True,
        cloud_authorities: Iterable[str] = CLOUD_PHOTO_AUTHORITIES,
    ):
        self.document_uris = document_uris
        self.materialize_missing_rows = materialize_missing_rows
        self.cloud_authorities = frozenset(cloud_authorities)

        self.cloud = CloudFallbackStrategy(content_resolver, registrar, metadata_factory)
        self.rows = RowLookupStrategy(content_resolver, fallback=self.cloud)
        self.documents = DocumentStrategy(storage_root, self.rows)
        self.generic = GenericSchemeStrategy()

        self._strategies: dict[ProviderKind, Callable[[ResourceId], str]] = {
            ProviderKind.CLOUD_PHOTO_PROVIDER: self.cloud.resolve,
            ProviderKind.EXTERNAL_STORAGE_DOCUMENTS: self._resolve_document,
            ProviderKind.DOWNLOADS_DOCUMENTS: self._resolve_document,
            ProviderKind.MEDIA_DOCUMENTS: self._resolve_document,
            ProviderKind.MEDIA_STORE_DIRECT: self._resolve_media_store,
            ProviderKind.PLAIN_FILE: self.generic.resolve,
            ProviderKind.UNKNOWN: self.generic.resolve,
        }

    @classmethod
    def from_settings(cls, store: SqliteMediaStore, settings: Settings) -> PathResolver:
        return cls(
            store,
            store,
            StaticStorageRoot(settings.paths.external_storage_root),
            document_uris=settings.document_uris,
            materialize_missing_rows=settings.materialize_missing_rows,
            cloud_authorities=settings.cloud_authorities,
        )

    def classify(self, uri: str | ResourceId) -> ProviderKind:
        return classify(
            parse_uri(uri),
            document_uris=self.document_uris,
            cloud_authorities=self.cloud_authorities,
        )

    def resolve_path(self, uri: str | ResourceId) -> str:
        resource = parse_uri(uri)
        kind = self.classify(resource)
        return self._strategies[kind](resource)

    def _resolve_document(self, uri: ResourceId) -> str:
        try:
            return self.documents.resolve(uri)
        except InvalidDocumentIdError:
            raise
        except DocumentNotFoundError as exc:
            logger.debug("Falling back to raw path for %s: %s", uri, exc)
            return self.generic.extract(uri)

    def _resolve_media_store(self, uri: ResourceId) -> str:
        return self.rows.lookup(uri, DATA_SELECTION, escalate_missing=self.materialize_missing_rows)


@contextmanager
def open_resolver(settings: Settings | None = None) -> Iterator[PathResolver]:
    """Yield a resolver backed by the local SQLite media store."""
    if settings is None:
        load_dotenv()
        settings = load_settings()
    if settings.log_file is not None:
        configure_contentpath_logging(settings.log_file, level=settings.log_level)

    conn = connect_store(settings.paths.store_path)
    try:
        init_store(conn)
        store = SqliteMediaStore(conn, settings.paths.media_path)
        yield PathResolver.from_settings(store, settings)
    finally:
        conn.close()


def resolve_path(uri: str | ResourceId, resolver: PathResolver | None = None) -> str:
    if resolver is not None:
        return resolver.resolve_path(uri)
    with open_resolver() as default_resolver:
        return default_resolver.resolve_path(uri)


__all__ = ["PathResolver", "open_resolver", "resolve_path"]
