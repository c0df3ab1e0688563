"""Citation marker extraction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from bs4 import BeautifulSoup, Tag
from pydantic import TypeAdapter, ValidationError

from citeservice.config import MarkupConfig

logger = logging.getLogger(__name__)

_REF_IDS = TypeAdapter(list[str])


class MarkerStatus(str, Enum):
    PARSED = "parsed"
    MALFORMED = "malformed"


@dataclass(frozen=True, eq=False)
class CitationMarker:
    """One citation marker found in a document.

    Attributes:
        position: Index among extracted markers, in document order
        element: The marker element in the parsed tree
        status: Whether the identifier attribute parsed as a list of strings
        ref_ids: Parsed identifiers (empty when malformed)
    """

    position: int
    element: Tag
    status: MarkerStatus
    ref_ids: tuple[str, ...] = ()


def parse_ref_ids(raw: str) -> list[str] | None:
    """Parse a JSON-encoded identifier list.

    Returns:
        The identifiers, or None if `raw` is not a JSON array of strings
    """
    try:
        return _REF_IDS.validate_json(raw)
    except ValidationError:
        return None


def extract_markers(soup: BeautifulSoup, markup: MarkupConfig) -> list[CitationMarker]:
    """Find every citation marker carrying an identifier attribute.

    Markers without the attribute are skipped. Malformed attributes give a
    marker with status MALFORMED and no identifiers.
    """
    markers: list[CitationMarker] = []
    for element in soup.find_all(markup.marker_tag):
        raw = element.get(markup.ref_ids_attr)
        if not raw:
            continue

        ref_ids = parse_ref_ids(raw)
        if ref_ids is None:
            logger.debug("Malformed %s on marker %d: %r", markup.ref_ids_attr, len(markers), raw)
            markers.append(
                CitationMarker(len(markers), element, MarkerStatus.MALFORMED)
            )
            continue

        markers.append(
            CitationMarker(len(markers), element, MarkerStatus.PARSED, tuple(ref_ids))
        )

    return markers
