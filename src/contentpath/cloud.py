from __future__ import annotations

import logging
from typing import Callable

from PIL import Image

from contentpath.providers.content import (
    ORIENTATION_COLUMN,
    ContentResolver,
    ImageMetadata,
    MediaStoreRegistrar,
)
from contentpath.providers.exif import TAG_ORIENTATION, ExifMetadata
from contentpath.rows import DATA_SELECTION, RowLookupStrategy
from contentpath.uri import ResourceId

logger = logging.getLogger(__name__)

MetadataFactory = Callable[[str], ImageMetadata]


class CloudFallbackStrategy:
    """Re-materialize a remote or stale image as a local media-store copy.

    The image is decoded, inserted as a new media-store row and the orientation
    of the original row is written onto the copy's EXIF data, since inserting
    re-encodes the pixels and drops it. Every failure collapses to ``None``.
    A row inserted before a later step fails stays in the store.
    """

    def __init__(
        self,
        content_resolver: ContentResolver,
        registrar: MediaStoreRegistrar,
        metadata_factory: MetadataFactory = ExifMetadata,
    ):
        self.content_resolver = content_resolver
        self.registrar = registrar
        self.metadata_factory = metadata_factory
        # No fallback here: a stale copy must not re-enter materialization.
        self._rows = RowLookupStrategy(content_resolver)

    def read_orientation(self, uri: ResourceId) -> int:
        try:
            cursor = self.content_resolver.query(uri, [ORIENTATION_COLUMN])
        except Exception as exc:  # noqa: BLE001
            logger.debug("Orientation query failed for %s: %s", uri, exc)
            return 0
        if cursor is None:
            return 0
        try:
            if not cursor.move_to_first():
                return 0
            return cursor.get_int(ORIENTATION_COLUMN)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Orientation unreadable for %s: %s", uri, exc)
            return 0
        finally:
            cursor.close()

    def materialize(self, uri: ResourceId) -> str | None:
        fresh: ResourceId | None = None
        try:
            orientation = self.read_orientation(uri)
            stream = self.content_resolver.open_input_stream(uri)
            try:
                with Image.open(stream) as image:
                    image.load()
                    fresh = self.registrar.insert_image(image)
                path = self._rows.lookup(fresh, DATA_SELECTION)
                if not path:
                    raise FileNotFoundError(f"Media store returned no path for {fresh}")
                metadata = self.metadata_factory(path)
                metadata.set_attribute(TAG_ORIENTATION, orientation)
                metadata.save_attributes()
            finally:
                stream.close()
        except Exception:  # noqa: BLE001
            logger.warning("Failed to materialize %s", uri, exc_info=True)
            if fresh is not None:
                logger.warning("Media-store row %s was created before the failure", fresh)
            return None

        logger.info("Materialized %s as %s (orientation=%s)", uri, path, orientation)
        return path

    def resolve(self, uri: ResourceId) -> str:
        return self.materialize(uri) or ""


__all__ = ["CloudFallbackStrategy", "MetadataFactory"]
