"""Identifier collection across all markers."""

from __future__ import annotations

from collections.abc import Iterable

from citeservice.annotate.markers import CitationMarker
from citeservice.domain.catalog import Catalog


def collect_identifiers(markers: Iterable[CitationMarker], catalog: Catalog) -> list[str]:
    """Distinct catalog-valid identifiers in first-seen document order."""
    seen = dict.fromkeys(item_id for marker in markers for item_id in marker.ref_ids)
    return [item_id for item_id in seen if item_id in catalog]
