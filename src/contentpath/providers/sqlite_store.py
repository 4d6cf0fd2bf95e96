from __future__ import annotations

import io
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import BinaryIO, Sequence

from PIL import Image

from contentpath.errors import ColumnUnreadableError, UnsupportedUriError
from contentpath.providers.content import (
    AUDIO_CONTENT_URI,
    DATA_COLUMN,
    DOWNLOADS_CONTENT_URI,
    ID_COLUMN,
    IMAGES_CONTENT_URI,
    ORIENTATION_COLUMN,
    VIDEO_CONTENT_URI,
)
from contentpath.uri import ResourceId, parse_uri, with_appended_id

logger = logging.getLogger(__name__)

COLLECTION_URIS = {
    "images": IMAGES_CONTENT_URI,
    "video": VIDEO_CONTENT_URI,
    "audio": AUDIO_CONTENT_URI,
    "downloads": DOWNLOADS_CONTENT_URI,
}
_COLLECTIONS_BY_URI = {uri: name for name, uri in COLLECTION_URIS.items()}
_STORE_AUTHORITIES = frozenset({"media", "downloads"})

QUERYABLE_COLUMNS = frozenset(
    {ID_COLUMN, DATA_COLUMN, ORIENTATION_COLUMN, "mime_type", "display_name", "date_added"}
)


def connect_store(path: Path | str, *, read_only: bool = False) -> sqlite3.Connection:
    if read_only:
        conn = sqlite3.connect(f"file:{Path(path)}?mode=ro", uri=True, check_same_thread=False)
    else:
        conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA busy_timeout=5000;")
    return conn


def init_store(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS media_rows (
            _id INTEGER PRIMARY KEY AUTOINCREMENT,
            collection TEXT NOT NULL CHECK (collection IN ('images', 'video', 'audio', 'downloads')),
            _data TEXT,
            orientation INTEGER,
            mime_type TEXT,
            display_name TEXT,
            date_added TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS provider_documents (
            _id INTEGER PRIMARY KEY AUTOINCREMENT,
            uri TEXT NOT NULL UNIQUE,
            _data TEXT,
            orientation INTEGER,
            mime_type TEXT,
            display_name TEXT,
            payload BLOB,
            date_added TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_media_rows_collection ON media_rows(collection)")
    conn.commit()


def _base_uri(uri: ResourceId) -> str:
    return f"{uri.scheme}://{uri.authority}{uri.path}".rstrip("/")


def _route(uri: ResourceId) -> tuple[str, str, list[object]]:
    base = _base_uri(uri)
    collection = _COLLECTIONS_BY_URI.get(base)
    if collection is not None:
        return "media_rows", "collection = ?", [collection]

    head, _, tail = base.rpartition("/")
    collection = _COLLECTIONS_BY_URI.get(head)
    if collection is not None and tail.isdigit():
        return "media_rows", "collection = ? AND _id = ?", [collection, int(tail)]

    if uri.is_content and uri.authority and uri.authority not in _STORE_AUTHORITIES:
        return "provider_documents", "uri = ?", [base]

    raise UnsupportedUriError(f"No content provider for {uri}")


def _route_single(uri: ResourceId) -> tuple[str, str, list[object]]:
    if _base_uri(uri) in _COLLECTIONS_BY_URI:
        raise UnsupportedUriError(f"Collection URIs do not name a single row: {uri}")
    return _route(uri)


class SqliteRowCursor:
    def __init__(self, cursor: sqlite3.Cursor):
        self._cursor = cursor
        self._row: sqlite3.Row | None = None
        self.closed = False

    def move_to_first(self) -> bool:
        self._row = self._cursor.fetchone()
        return self._row is not None

    def _value(self, column: str) -> object:
        if self._row is None:
            raise RuntimeError("Cursor is not positioned on a row")
        if column not in self._row.keys():
            raise ValueError(f"Column not in projection: {column}")
        value = self._row[column]
        if value is None:
            raise ColumnUnreadableError(column)
        return value

    def get_string(self, column: str) -> str:
        return str(self._value(column))

    def get_int(self, column: str) -> int:
        value = self._value(column)
        try:
            return int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError) as exc:
            raise ColumnUnreadableError(column, f"Column {column!r} is not an integer: {value!r}") from exc

    def close(self) -> None:
        if not self.closed:
            self._cursor.close()
            self.closed = True


class SqliteMediaStore:
    """Local content provider and media store backed by one SQLite file.

    ``media_rows`` holds the images / video / audio / downloads collections and
    ``provider_documents`` holds rows published under third-party authorities,
    optionally with their bytes inline.
    """

    def __init__(self, conn: sqlite3.Connection, media_dir: Path):
        self.conn = conn
        self.media_dir = media_dir

    def query(
        self,
        uri: ResourceId,
        columns: Sequence[str],
        where: str | None = None,
        args: Sequence[str] | None = None,
    ) -> SqliteRowCursor | None:
        unknown = [column for column in columns if column not in QUERYABLE_COLUMNS]
        if unknown or not columns:
            raise ValueError(f"Unsupported projection: {list(columns)}")
        try:
            table, route_where, params = _route(uri)
        except UnsupportedUriError:
            logger.debug("No provider rows for %s", uri)
            return None

        sql = f"SELECT {', '.join(columns)} FROM {table} WHERE {route_where}"
        if where:
            sql += f" AND ({where})"
        sql += " ORDER BY _id"
        return SqliteRowCursor(self.conn.execute(sql, [*params, *(args or ())]))

    def open_input_stream(self, uri: ResourceId) -> BinaryIO:
        if uri.is_file or not uri.scheme:
            return open(uri.path, "rb")
        try:
            table, route_where, params = _route_single(uri)
        except UnsupportedUriError as exc:
            raise FileNotFoundError(str(exc)) from exc

        payload_column = "payload" if table == "provider_documents" else "NULL AS payload"
        row = self.conn.execute(
            f"SELECT _data, {payload_column} FROM {table} WHERE {route_where}",
            params,
        ).fetchone()
        if row is None:
            raise FileNotFoundError(f"No row for {uri}")
        if row["payload"] is not None:
            return io.BytesIO(bytes(row["payload"]))
        if row["_data"]:
            return open(row["_data"], "rb")
        raise FileNotFoundError(f"Row for {uri} has no readable content")

    def insert_image(self, image: Image.Image, *, title: str | None = None) -> ResourceId:
        self.media_dir.mkdir(parents=True, exist_ok=True)
        target = self.media_dir / f"{uuid.uuid4().hex}.jpg"
        encoded = image if image.mode in {"RGB", "L"} else image.convert("RGB")
        encoded.save(target, format="JPEG")
        try:
            uri = self.add_media_row(
                "images",
                target,
                mime_type="image/jpeg",
                display_name=title or target.name,
            )
        except sqlite3.Error:
            target.unlink(missing_ok=True)
            raise
        logger.info("Inserted image %s at %s", uri, target)
        return uri

    def add_media_row(
        self,
        collection: str,
        data_path: str | Path | None,
        *,
        orientation: int | None = None,
        mime_type: str | None = None,
        display_name: str | None = None,
    ) -> ResourceId:
        if collection not in COLLECTION_URIS:
            raise ValueError(f"Unknown media collection: {collection}")
        cur = self.conn.execute(
            """
            INSERT INTO media_rows (collection, _data, orientation, mime_type, display_name)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                collection,
                str(data_path) if data_path is not None else None,
                orientation,
                mime_type,
                display_name,
            ),
        )
        self.conn.commit()
        return with_appended_id(COLLECTION_URIS[collection], int(cur.lastrowid))

    def publish_document(
        self,
        uri: str | ResourceId,
        *,
        payload: bytes | None = None,
        data_path: str | Path | None = None,
        orientation: int | None = None,
        mime_type: str | None = None,
        display_name: str | None = None,
    ) -> ResourceId:
        resource = parse_uri(uri)
        if not resource.is_content or not resource.authority or resource.authority in _STORE_AUTHORITIES:
            raise UnsupportedUriError(f"Documents must live under a third-party authority: {resource}")
        self.conn.execute(
            """
            INSERT INTO provider_documents (uri, _data, orientation, mime_type, display_name, payload)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(uri) DO UPDATE SET
                _data = excluded._data,
                orientation = excluded.orientation,
                mime_type = excluded.mime_type,
                display_name = excluded.display_name,
                payload = excluded.payload
            """,
            (
                _base_uri(resource),
                str(data_path) if data_path is not None else None,
                orientation,
                mime_type,
                display_name,
                payload,
            ),
        )
        self.conn.commit()
        return resource


__all__ = [
    "COLLECTION_URIS",
    "QUERYABLE_COLUMNS",
    "SqliteMediaStore",
    "SqliteRowCursor",
    "connect_store",
    "init_store",
]
