from contentpath.providers.content import (
    AUDIO_CONTENT_URI,
    DATA_COLUMN,
    DOWNLOADS_CONTENT_URI,
    ID_COLUMN,
    IMAGES_CONTENT_URI,
    ORIENTATION_COLUMN,
    VIDEO_CONTENT_URI,
    ContentResolver,
    ImageMetadata,
    MediaStoreRegistrar,
    RowCursor,
    Selection,
    StaticStorageRoot,
    StorageRootProvider,
)
from contentpath.providers.exif import TAG_ORIENTATION, ExifMetadata
from contentpath.providers.sqlite_store import SqliteMediaStore, connect_store, init_store

__all__ = [
    "AUDIO_CONTENT_URI",
    "ContentResolver",
    "DATA_COLUMN",
    "DOWNLOADS_CONTENT_URI",
    "ExifMetadata",
    "ID_COLUMN",
    "IMAGES_CONTENT_URI",
    "ImageMetadata",
    "MediaStoreRegistrar",
    "ORIENTATION_COLUMN",
    "RowCursor",
    "Selection",
    "SqliteMediaStore",
    "StaticStorageRoot",
    "StorageRootProvider",
    "TAG_ORIENTATION",
    "VIDEO_CONTENT_URI",
    "connect_store",
    "init_store",
]
