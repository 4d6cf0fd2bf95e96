from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

from PIL import ExifTags, Image

logger = logging.getLogger(__name__)

TAG_ORIENTATION = "Orientation"


def _tag_id(key: str | int) -> int:
    if isinstance(key, int):
        return key
    try:
        return int(ExifTags.Base[key])
    except KeyError as exc:
        raise ValueError(f"Unknown EXIF tag: {key}") from exc


class ExifMetadata:
    """EXIF container for an image file on disk.

    Attribute changes are held in memory until ``save_attributes`` rewrites the
    file. JPEG sources keep their quantization tables on rewrite.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        with Image.open(self.path) as img:
            self._format = img.format
            self._exif = img.getexif()

    def get_attribute(self, key: str | int) -> Any:
        return self._exif.get(_tag_id(key))

    def set_attribute(self, key: str | int, value: Any) -> None:
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            value = int(value)
        self._exif[_tag_id(key)] = value

    def save_attributes(self) -> None:
        data = self.path.read_bytes()
        with Image.open(io.BytesIO(data)) as img:
            options: dict[str, Any] = {"format": self._format, "exif": self._exif}
            if self._format == "JPEG":
                options["quality"] = "keep"
            img.save(self.path, **options)
        logger.debug("Saved EXIF attributes for %s", self.path)


__all__ = ["ExifMetadata", "TAG_ORIENTATION"]
