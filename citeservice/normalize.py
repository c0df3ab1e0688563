"""Glue between raw catalog records and the engine's CSL-JSON schema."""

from __future__ import annotations

from typing import Any, Callable

Normalizer = Callable[[str, dict], dict]


def normalize_csl_item(
    item_id: str, raw: dict[str, Any], default_type: str = "article-journal"
) -> dict[str, Any]:
    """Return an engine-ready copy of a raw record.

    The copy carries `id` set from the catalog key, has null fields
    removed and gets `default_type` when the record has no type.
    """
    item = {key: value for key, value in raw.items() if value is not None}
    item["id"] = item_id
    if not item.get("type"):
        item["type"] = default_type
    return item
