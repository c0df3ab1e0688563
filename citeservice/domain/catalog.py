"""Item resolver over a caller-supplied catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from citeservice.domain.item import BibliographicItem
from citeservice.normalize import Normalizer, normalize_csl_item


class Catalog:
    """Read-only lookup of bibliographic records by identifier.

    An identifier is valid when its record is present and non-empty.
    The underlying mapping is never mutated.
    """

    def __init__(
        self,
        records: Mapping[str, Any],
        normalizer: Normalizer | None = None,
    ):
        self._records = records
        self._normalizer = normalizer or normalize_csl_item

    def __contains__(self, item_id: object) -> bool:
        if not isinstance(item_id, str):
            return False
        return bool(self._records.get(item_id))

    def __len__(self) -> int:
        return sum(1 for key in self._records if key in self)

    def raw(self, item_id: str) -> dict | None:
        if item_id not in self:
            return None
        return self._records[item_id]

    def resolve(self, item_id: str) -> dict | None:
        """Engine-facing lookup: the normalized record, or None."""
        raw = self.raw(item_id)
        if raw is None:
            return None
        return self._normalizer(item_id, raw)

    def item(self, item_id: str) -> BibliographicItem | None:
        raw = self.raw(item_id)
        if raw is None:
            return None
        return BibliographicItem.from_csl(item_id, raw)

    def filter_valid(self, item_ids: Iterable[str]) -> list[str]:
        """Keep valid identifiers, preserving order and duplicates."""
        return [item_id for item_id in item_ids if item_id in self]
