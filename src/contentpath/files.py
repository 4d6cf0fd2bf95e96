from __future__ import annotations

import locale
import logging
import os
from pathlib import Path

import requests

from contentpath.uri import ResourceId, file_uri

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_BYTES = 64 * 1024


def _default_charset() -> str:
    return locale.getpreferredencoding(False)


def download_file(
    url: str,
    local_path: str | Path,
    *,
    timeout: float = 60,
    session: requests.Session | None = None,
) -> ResourceId | None:
    """Stream ``url`` to ``local_path``; ``None`` unless the server answers 200."""
    http = session or requests
    target = Path(local_path)
    with http.get(url, stream=True, timeout=timeout) as response:
        if response.status_code != requests.codes.ok:
            logger.warning("Download of %s returned HTTP %s", url, response.status_code)
            return None
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as f:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                if chunk:
                    f.write(chunk)
    logger.info("Downloaded %s to %s", url, target)
    return file_uri(target)


def save_file(full_path: str | Path, content: str) -> Path:
    path = Path(full_path)
    path.write_text(content, encoding=_default_charset())
    return path


def read_file(path: str | Path) -> str:
    return Path(path).read_text(encoding=_default_charset())


def is_existing_readable_file(path: str | Path) -> bool:
    target = Path(path)
    return target.exists() and os.access(target, os.R_OK)


def get_file_extension(path: str) -> str:
    last_dot = path.rfind(".")
    last_sep = path.rfind(os.sep)
    if last_dot == -1 or last_sep >= last_dot:
        return ""
    return path[last_dot + 1 :]


__all__ = [
    "download_file",
    "get_file_extension",
    "is_existing_readable_file",
    "read_file",
    "save_file",
]
