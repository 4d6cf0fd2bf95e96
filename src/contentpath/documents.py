from __future__ import annotations

import logging

from contentpath.classifier import (
    DOWNLOADS_AUTHORITY,
    EXTERNAL_STORAGE_AUTHORITY,
    MEDIA_DOCUMENTS_AUTHORITY,
)
from contentpath.errors import DocumentNotFoundError, InvalidDocumentIdError
from contentpath.providers.content import (
    AUDIO_CONTENT_URI,
    DATA_COLUMN,
    DOWNLOADS_CONTENT_URI,
    IMAGES_CONTENT_URI,
    VIDEO_CONTENT_URI,
    Selection,
    StorageRootProvider,
)
from contentpath.rows import DATA_SELECTION, RowLookupStrategy
from contentpath.uri import ResourceId, parse_uri, with_appended_id

logger = logging.getLogger(__name__)

PRIMARY_VOLUME = "primary"

_MEDIA_COLLECTIONS = {
    "image": IMAGES_CONTENT_URI,
    "video": VIDEO_CONTENT_URI,
    "audio": AUDIO_CONTENT_URI,
}


def split_document_id(document_id: str) -> tuple[str, str]:
    """Split ``type:value`` on the first colon.

    Ids without a colon (older downloads ids such as ``"12"``) are both type
    and value. An empty value, as in ``"primary:"``, comes back as ``""``.
    """
    doc_type, sep, value = document_id.partition(":")
    if not sep:
        return document_id, document_id
    return doc_type, value


class DocumentStrategy:
    def __init__(self, storage_root: StorageRootProvider, rows: RowLookupStrategy):
        self.storage_root = storage_root
        self.rows = rows

    def resolve_document(self, authority: str, document_id: str) -> str:
        doc_type, value = split_document_id(document_id)

        if authority == EXTERNAL_STORAGE_AUTHORITY:
            if doc_type.lower() != PRIMARY_VOLUME:
                raise DocumentNotFoundError(f"No mapping for storage volume {doc_type!r}")
            root = self.storage_root.external_storage_root().rstrip("/")
            return f"{root}/{value}" if value else root

        if authority == DOWNLOADS_AUTHORITY:
            try:
                row_id = int(value)
            except ValueError as exc:
                raise InvalidDocumentIdError(f"Download id is not an integer: {document_id!r}") from exc
            if row_id < 0:
                raise InvalidDocumentIdError(f"Download id is negative: {document_id!r}")
            return self.rows.lookup(with_appended_id(DOWNLOADS_CONTENT_URI, row_id), DATA_SELECTION)

        if authority == MEDIA_DOCUMENTS_AUTHORITY:
            if not value:
                raise DocumentNotFoundError(f"Media document id has no row id: {document_id!r}")
            collection = _MEDIA_COLLECTIONS.get(doc_type, IMAGES_CONTENT_URI)
            return self.rows.lookup(
                parse_uri(collection),
                Selection(column=DATA_COLUMN, where="_id=?", args=(value,)),
            )

        raise DocumentNotFoundError(f"No document mapping for authority {authority!r}")

    def resolve(self, uri: ResourceId) -> str:
        if uri.document_id is None:
            raise DocumentNotFoundError(f"Not a document URI: {uri}")
        return self.resolve_document(uri.authority, uri.document_id)


__all__ = ["DocumentStrategy", "PRIMARY_VOLUME", "split_document_id"]
