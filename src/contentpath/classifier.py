from __future__ import annotations

import logging
from enum import Enum

from contentpath.uri import ResourceId

logger = logging.getLogger(__name__)

EXTERNAL_STORAGE_AUTHORITY = "com.android.externalstorage.documents"
DOWNLOADS_AUTHORITY = "com.android.providers.downloads.documents"
MEDIA_DOCUMENTS_AUTHORITY = "com.android.providers.media.documents"
MEDIA_AUTHORITY = "media"

CLOUD_PHOTO_AUTHORITIES = frozenset(
    {
        "com.google.android.apps.photos.content",
        "com.google.android.apps.photos.contentprovider",
        "com.sec.android.gallery3d.provider",
    }
)


class ProviderKind(Enum):
    EXTERNAL_STORAGE_DOCUMENTS = "external_storage_documents"
    DOWNLOADS_DOCUMENTS = "downloads_documents"
    MEDIA_DOCUMENTS = "media_documents"
    CLOUD_PHOTO_PROVIDER = "cloud_photo_provider"
    MEDIA_STORE_DIRECT = "media_store_direct"
    PLAIN_FILE = "plain_file"
    UNKNOWN = "unknown"

    @property
    def is_document(self) -> bool:
        return self in _DOCUMENT_KINDS


_DOCUMENT_KINDS = frozenset(
    {
        ProviderKind.EXTERNAL_STORAGE_DOCUMENTS,
        ProviderKind.DOWNLOADS_DOCUMENTS,
        ProviderKind.MEDIA_DOCUMENTS,
    }
)

_DOCUMENT_AUTHORITIES = {
    EXTERNAL_STORAGE_AUTHORITY: ProviderKind.EXTERNAL_STORAGE_DOCUMENTS,
    DOWNLOADS_AUTHORITY: ProviderKind.DOWNLOADS_DOCUMENTS,
    MEDIA_DOCUMENTS_AUTHORITY: ProviderKind.MEDIA_DOCUMENTS,
}


def document_kind(authority: str) -> ProviderKind:
    return _DOCUMENT_AUTHORITIES.get(authority, ProviderKind.UNKNOWN)


def classify(
    resource: ResourceId,
    *,
    document_uris: bool = True,
    cloud_authorities: frozenset[str] = CLOUD_PHOTO_AUTHORITIES,
) -> ProviderKind:
    """Pick the lookup strategy for ``resource``.

    Cloud-photo authorities are checked first because their URIs also carry
    the ``content`` scheme. ``file:`` URIs always keep their path, whatever
    authority they name. Document URIs from authorities without a mapping
    come back as ``UNKNOWN`` so callers fall through to the raw path.
    """
    authority = resource.authority
    if (
        authority
        and authority != MEDIA_AUTHORITY
        and not resource.is_file
        and authority in cloud_authorities
    ):
        kind = ProviderKind.CLOUD_PHOTO_PROVIDER
    elif document_uris and resource.is_document:
        kind = document_kind(authority)
    elif resource.is_content:
        kind = ProviderKind.MEDIA_STORE_DIRECT
    elif resource.is_file:
        kind = ProviderKind.PLAIN_FILE
    else:
        kind = ProviderKind.UNKNOWN

    logger.debug("Classified %s as %s", resource, kind.value)
    return kind


__all__ = [
    "CLOUD_PHOTO_AUTHORITIES",
    "DOWNLOADS_AUTHORITY",
    "EXTERNAL_STORAGE_AUTHORITY",
    "MEDIA_AUTHORITY",
    "MEDIA_DOCUMENTS_AUTHORITY",
    "ProviderKind",
    "classify",
    "document_kind",
]
