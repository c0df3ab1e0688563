"""Plain-text tooltip for citation markers."""

from __future__ import annotations

from collections.abc import Iterable

from citeservice.domain.catalog import Catalog
from citeservice.domain.item import BibliographicItem

UNKNOWN_AUTHOR = "Unknown"
NO_DATE = "n.d."


def tooltip_line(item: BibliographicItem) -> str:
    author = (item.authors[0].label() if item.authors else "") or UNKNOWN_AUTHOR
    year = item.year if item.year is not None else NO_DATE
    return f"{author} ({year}) — {item.title}"


def compose_tooltip(ref_ids: Iterable[str], catalog: Catalog) -> str:
    """One line per resolvable item: first author, year and title."""
    lines = []
    for item_id in ref_ids:
        item = catalog.item(item_id)
        if item is None:
            continue
        lines.append(tooltip_line(item))
    return "\n".join(lines)
