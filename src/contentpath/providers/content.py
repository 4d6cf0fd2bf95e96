from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Protocol, Sequence

from PIL import Image

from contentpath.uri import ResourceId

DATA_COLUMN = "_data"
ID_COLUMN = "_id"
ORIENTATION_COLUMN = "orientation"

IMAGES_CONTENT_URI = "content://media/external/images/media"
VIDEO_CONTENT_URI = "content://media/external/video/media"
AUDIO_CONTENT_URI = "content://media/external/audio/media"
DOWNLOADS_CONTENT_URI = "content://downloads/public_downloads"


@dataclass(frozen=True)
class Selection:
    column: str
    where: str | None = None
    args: tuple[str, ...] | None = None


class RowCursor(Protocol):
    def move_to_first(self) -> bool:
        ...

    def get_string(self, column: str) -> str:
        ...

    def get_int(self, column: str) -> int:
        ...

    def close(self) -> None:
        ...


class ContentResolver(Protocol):
    def query(
        self,
        uri: ResourceId,
        columns: Sequence[str],
        where: str | None = None,
        args: Sequence[str] | None = None,
    ) -> RowCursor | None:
        ...

    def open_input_stream(self, uri: ResourceId) -> BinaryIO:
        ...


class MediaStoreRegistrar(Protocol):
    def insert_image(self, image: Image.Image, *, title: str | None = None) -> ResourceId:
        ...


class ImageMetadata(Protocol):
    def get_attribute(self, key: str) -> Any:
        ...

    def set_attribute(self, key: str, value: Any) -> None:
        ...

    def save_attributes(self) -> None:
        ...


class StorageRootProvider(Protocol):
    def external_storage_root(self) -> str:
        ...


@dataclass(frozen=True)
class StaticStorageRoot:
    root: Path

    def external_storage_root(self) -> str:
        return str(self.root)


__all__ = [
    "AUDIO_CONTENT_URI",
    "ContentResolver",
    "DATA_COLUMN",
    "DOWNLOADS_CONTENT_URI",
    "ID_COLUMN",
    "IMAGES_CONTENT_URI",
    "ImageMetadata",
    "MediaStoreRegistrar",
    "ORIENTATION_COLUMN",
    "RowCursor",
    "Selection",
    "StaticStorageRoot",
    "StorageRootProvider",
    "VIDEO_CONTENT_URI",
]
