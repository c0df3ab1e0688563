"""Per-marker cluster rendering and annotation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from citeservice.annotate.markers import CitationMarker, MarkerStatus
from citeservice.annotate.tooltip import compose_tooltip
from citeservice.config import MarkupConfig
from citeservice.domain.catalog import Catalog
from citeservice.engine.base import CitationEngine

logger = logging.getLogger(__name__)


class UnannotatedReason(str, Enum):
    MALFORMED = "malformed"
    EMPTY = "empty"
    NO_VALID_IDS = "no_valid_ids"


@dataclass(frozen=True)
class Annotation:
    ref_ids: tuple[str, ...]
    rendered: str
    tooltip: str


@dataclass(frozen=True, eq=False)
class MarkerOutcome:
    """Result for one marker: an annotation or the reason it has none."""

    marker: CitationMarker
    annotation: Annotation | None = None
    reason: UnannotatedReason | None = None

    @property
    def annotated(self) -> bool:
        return self.annotation is not None


def render_marker(engine: CitationEngine, catalog: Catalog, marker: CitationMarker) -> MarkerOutcome:
    """Render the cluster and tooltip for one marker.

    Only catalog-valid identifiers are rendered, in marker order. The
    engine must already hold every valid identifier of the document.
    """
    if marker.status is MarkerStatus.MALFORMED:
        return MarkerOutcome(marker, reason=UnannotatedReason.MALFORMED)
    if not marker.ref_ids:
        return MarkerOutcome(marker, reason=UnannotatedReason.EMPTY)

    valid_ids = tuple(catalog.filter_valid(marker.ref_ids))
    if not valid_ids:
        return MarkerOutcome(marker, reason=UnannotatedReason.NO_VALID_IDS)

    dropped = len(marker.ref_ids) - len(valid_ids)
    if dropped:
        logger.debug("Marker %d: dropped %d unknown identifiers", marker.position, dropped)

    annotation = Annotation(
        ref_ids=valid_ids,
        rendered=engine.render_cluster(list(valid_ids)),
        tooltip=compose_tooltip(valid_ids, catalog),
    )
    return MarkerOutcome(marker, annotation=annotation)


def apply_annotations(outcomes: Iterable[MarkerOutcome], markup: MarkupConfig) -> int:
    """Write annotations onto their marker elements.

    Returns:
        Number of markers annotated
    """
    count = 0
    for outcome in outcomes:
        if outcome.annotation is None:
            continue
        element = outcome.marker.element
        element[markup.rendered_attr] = outcome.annotation.rendered
        element[markup.tooltip_attr] = outcome.annotation.tooltip
        count += 1
    return count
