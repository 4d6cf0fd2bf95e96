from __future__ import annotations

from contentpath.uri import ResourceId


class GenericSchemeStrategy:
    def extract(self, uri: ResourceId) -> str:
        return uri.path

    def resolve(self, uri: ResourceId) -> str:
        return self.extract(uri)


__all__ = ["GenericSchemeStrategy"]
