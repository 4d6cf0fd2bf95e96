from __future__ import annotations

import logging
from typing import Protocol

from contentpath.errors import ColumnUnreadableError
from contentpath.providers.content import DATA_COLUMN, ContentResolver, Selection
from contentpath.uri import ResourceId

logger = logging.getLogger(__name__)

DATA_SELECTION = Selection(column=DATA_COLUMN)


class Materializer(Protocol):
    def materialize(self, uri: ResourceId) -> str | None:
        ...


class RowLookupStrategy:
    """Read one column of the first row a provider returns for a URI.

    A missing provider or an empty result yields ``""`` unless the caller
    asks for ``escalate_missing``. A row whose column is null is the
    media-gone-from-disk case: it is always handed to ``fallback`` with the
    queried URI instead of failing.
    """

    def __init__(self, content_resolver: ContentResolver, fallback: Materializer | None = None):
        self.content_resolver = content_resolver
        self.fallback = fallback

    def _escalate(self, uri: ResourceId) -> str:
        if self.fallback is None:
            return ""
        return self.fallback.materialize(uri) or ""

    def lookup(
        self,
        uri: ResourceId,
        selection: Selection = DATA_SELECTION,
        *,
        escalate_missing: bool = False,
    ) -> str:
        cursor = self.content_resolver.query(
            uri,
            [selection.column],
            selection.where,
            list(selection.args) if selection.args is not None else None,
        )
        if cursor is None:
            logger.debug("No provider answered for %s", uri)
            return self._escalate(uri) if escalate_missing else ""

        try:
            if not cursor.move_to_first():
                logger.debug("No rows for %s", uri)
                return self._escalate(uri) if escalate_missing else ""
            return cursor.get_string(selection.column)
        except ColumnUnreadableError as exc:
            logger.info("Unreadable %s for %s; re-materializing", exc.column, uri)
            return self._escalate(uri)
        finally:
            cursor.close()

    def resolve(self, uri: ResourceId) -> str:
        return self.lookup(uri, DATA_SELECTION)


__all__ = ["DATA_SELECTION", "Materializer", "RowLookupStrategy"]
