from __future__ import annotations

import unittest

from contentpath.classifier import ProviderKind, classify
from contentpath.uri import parse_uri


def _kind(uri: str, **kwargs) -> ProviderKind:
    return classify(parse_uri(uri), **kwargs)


class ClassifyTests(unittest.TestCase):
    def test_cloud_photo_authority_wins_over_content_scheme(self) -> None:
        self.assertEqual(
            _kind("content://com.google.android.apps.photos.content/0/1/mediakey%3A%2Flocal/ORIGINAL"),
            ProviderKind.CLOUD_PHOTO_PROVIDER,
        )
        self.assertEqual(
            _kind("content://com.sec.android.gallery3d.provider/picasa/item/1"),
            ProviderKind.CLOUD_PHOTO_PROVIDER,
        )

    def test_authority_match_is_case_sensitive(self) -> None:
        self.assertEqual(
            _kind("content://COM.GOOGLE.ANDROID.APPS.PHOTOS.CONTENT/0/1"),
            ProviderKind.MEDIA_STORE_DIRECT,
        )

    def test_extra_cloud_authorities(self) -> None:
        self.assertEqual(
            _kind("content://media/external/images/media/1", cloud_authorities=frozenset({"media"})),
            ProviderKind.MEDIA_STORE_DIRECT,
        )
        self.assertEqual(
            _kind("content://org.example.cloud/p/1", cloud_authorities=frozenset({"org.example.cloud"})),
            ProviderKind.CLOUD_PHOTO_PROVIDER,
        )

    def test_file_scheme_ignores_cloud_authority(self) -> None:
        self.assertEqual(
            _kind("file://com.google.android.apps.photos.content/c.jpg"),
            ProviderKind.PLAIN_FILE,
        )

    def test_document_authorities(self) -> None:
        cases = {
            "content://com.android.externalstorage.documents/document/primary%3Aa.jpg": (
                ProviderKind.EXTERNAL_STORAGE_DOCUMENTS
            ),
            "content://com.android.providers.downloads.documents/document/msf%3A12": (
                ProviderKind.DOWNLOADS_DOCUMENTS
            ),
            "content://com.android.providers.media.documents/document/image%3A45": (
                ProviderKind.MEDIA_DOCUMENTS
            ),
        }
        for uri, expected in cases.items():
            with self.subTest(uri=uri):
                kind = _kind(uri)
                self.assertEqual(kind, expected)
                self.assertTrue(kind.is_document)

    def test_unmapped_document_authority_is_unknown(self) -> None:
        self.assertEqual(
            _kind("content://com.example.docs/document/abc"),
            ProviderKind.UNKNOWN,
        )

    def test_document_gate_disabled_falls_to_media_store(self) -> None:
        self.assertEqual(
            _kind(
                "content://com.android.providers.media.documents/document/image%3A45",
                document_uris=False,
            ),
            ProviderKind.MEDIA_STORE_DIRECT,
        )

    def test_schemes(self) -> None:
        self.assertEqual(_kind("content://media/external/images/media/3"), ProviderKind.MEDIA_STORE_DIRECT)
        self.assertEqual(_kind("CONTENT://media/external/images/media/3"), ProviderKind.MEDIA_STORE_DIRECT)
        self.assertEqual(_kind("file:///sdcard/a.jpg"), ProviderKind.PLAIN_FILE)
        self.assertEqual(_kind("/sdcard/a.jpg"), ProviderKind.UNKNOWN)
        self.assertEqual(_kind("https://example.com/a.jpg"), ProviderKind.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
