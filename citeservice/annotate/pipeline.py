"""Document annotation pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Optional

from bs4 import BeautifulSoup

from citeservice.annotate.clusters import MarkerOutcome, apply_annotations, render_marker
from citeservice.annotate.collector import collect_identifiers
from citeservice.annotate.markers import extract_markers
from citeservice.annotate.sections import partition_sections
from citeservice.config import ServiceConfig
from citeservice.domain.catalog import Catalog
from citeservice.domain.section import SectionRecord
from citeservice.engine.factory import EngineFactory, engine_factory
from citeservice.normalize import normalize_csl_item

logger = logging.getLogger(__name__)


@dataclass
class AnnotationResult:
    """Sections of an annotated document plus per-marker outcomes."""

    sections: list[SectionRecord] = field(default_factory=list)
    outcomes: list[MarkerOutcome] = field(default_factory=list)
    loaded_ids: list[str] = field(default_factory=list)

    @property
    def annotated_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.annotated)

    @property
    def unannotated_count(self) -> int:
        return len(self.outcomes) - self.annotated_count

    def to_dict(self) -> dict:
        return {"sections": [section.to_dict() for section in self.sections]}


class AnnotationPipeline:
    """Annotate citation markers and split a document into sections.

    Steps, in order: extract markers, collect valid identifiers, bulk-load
    them into a fresh engine, render every marker, write annotations onto
    the tree, partition sections. Per-marker problems leave that marker
    unannotated; engine errors propagate to the caller.
    """

    def __init__(self, config: ServiceConfig, create_engine: Optional[EngineFactory] = None):
        """Initialize pipeline.

        Args:
            config: Service configuration
            create_engine: Engine factory (defaults to the configured citeproc engine)
        """
        self.config = config
        self.markup = config.markup
        self._create_engine = create_engine or engine_factory(config.engine)
        self._normalizer = partial(
            normalize_csl_item, default_type=config.engine.default_item_type
        )

    def annotate(
        self,
        document: str,
        records: Mapping[str, Any],
        style_xml: str,
        locale: Optional[str] = None,
    ) -> AnnotationResult:
        """Annotate one document.

        Args:
            document: Markup containing citation markers and sections
            records: Catalog of CSL-JSON records by identifier
            style_xml: CSL style definition
            locale: Optional locale override

        Returns:
            AnnotationResult with sections in document order

        Raises:
            CitationEngineError: If the engine cannot be created or fails
        """
        catalog = Catalog(records, normalizer=self._normalizer)
        engine = self._create_engine(style_xml, catalog.resolve, locale)

        soup = BeautifulSoup(document or "", self.markup.parser)
        markers = extract_markers(soup, self.markup)

        item_ids = collect_identifiers(markers, catalog)
        engine.load_items(item_ids)

        outcomes = [render_marker(engine, catalog, marker) for marker in markers]
        annotated = apply_annotations(outcomes, self.markup)
        sections = partition_sections(soup, self.markup)

        logger.info(
            "Annotated %d/%d citation markers (%d items loaded, %d sections)",
            annotated,
            len(markers),
            len(item_ids),
            len(sections),
        )
        for outcome in outcomes:
            if not outcome.annotated:
                logger.debug(
                    "Marker %d left unannotated: %s",
                    outcome.marker.position,
                    outcome.reason.value,
                )

        return AnnotationResult(sections=sections, outcomes=outcomes, loaded_ids=item_ids)
