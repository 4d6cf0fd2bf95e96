from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from contentpath.files import (
    download_file,
    get_file_extension,
    is_existing_readable_file,
    read_file,
    save_file,
)


def _response(status_code: int, chunks: list[bytes]) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.iter_content.return_value = iter(chunks)
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


class FileExtensionTests(unittest.TestCase):
    def test_extension_after_last_dot(self) -> None:
        self.assertEqual(get_file_extension("/sdcard/a.tar.gz"), "gz")
        self.assertEqual(get_file_extension("photo.JPG"), "JPG")

    def test_no_extension(self) -> None:
        self.assertEqual(get_file_extension("/sdcard/README"), "")
        self.assertEqual(get_file_extension(f"/sdcard/dir.d{os.sep}file"), "")
        self.assertEqual(get_file_extension("trailing."), "")


class TextFileTests(unittest.TestCase):
    def test_save_then_read(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = save_file(Path(tmp) / "note.txt", "hello\nworld")

            self.assertEqual(read_file(path), "hello\nworld")
            self.assertTrue(is_existing_readable_file(path))

    def test_missing_file_is_not_readable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertFalse(is_existing_readable_file(Path(tmp) / "missing.txt"))


class DownloadFileTests(unittest.TestCase):
    def test_ok_response_is_streamed_to_disk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "nested" / "file.bin"
            response = _response(200, [b"abc", b"", b"def"])
            with patch("contentpath.files.requests.get", return_value=response) as mock_get:
                result = download_file("https://example.com/file.bin", target, timeout=5)

            mock_get.assert_called_once_with("https://example.com/file.bin", stream=True, timeout=5)
            self.assertIsNotNone(result)
            assert result is not None
            self.assertEqual(result.scheme, "file")
            self.assertEqual(result.path, str(target))
            self.assertEqual(target.read_bytes(), b"abcdef")

    def test_non_ok_response_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.bin"
            with patch("contentpath.files.requests.get", return_value=_response(404, [b"nope"])):
                result = download_file("https://example.com/missing", target)

            self.assertIsNone(result)
            self.assertFalse(target.exists())

    def test_session_is_used_when_given(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            session = MagicMock()
            session.get.return_value = _response(200, [b"x"])

            result = download_file("https://example.com/x", Path(tmp) / "x", session=session)

            session.get.assert_called_once()
            self.assertIsNotNone(result)


if __name__ == "__main__":
    unittest.main()
