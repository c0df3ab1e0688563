"""Standalone bibliography rendering."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from citeservice.config import ServiceConfig
from citeservice.engine.factory import EngineFactory, engine_factory
from citeservice.errors import CitationEngineError

logger = logging.getLogger(__name__)


class BibliographyRenderer:
    """Render a full bibliography for an item set.

    Items are handed to the engine verbatim. There is no partial result:
    an item the engine cannot load or any engine error aborts the render.
    The locale comes from the style, falling back to the configured default.
    """

    def __init__(self, config: ServiceConfig, create_engine: Optional[EngineFactory] = None):
        self.config = config
        self._create_engine = create_engine or engine_factory(config.engine)

    def render(self, items: Mapping[str, Any], style_xml: str) -> list[str]:
        """Render bibliography entries in style-defined order.

        Args:
            items: CSL-JSON records by identifier
            style_xml: CSL style definition

        Returns:
            Rendered entries as produced by the engine

        Raises:
            CitationEngineError: If an item is missing or cannot be rendered
        """
        engine = self._create_engine(style_xml, items.get, None, use_style_locale=True)
        engine.load_items(list(items))

        missing = [item_id for item_id in items if item_id not in engine.loaded_ids]
        if missing:
            raise CitationEngineError(f"Items could not be loaded: {', '.join(missing)}")

        entries = engine.render_bibliography()

        logger.info("Rendered bibliography with %d entries for %d items", len(entries), len(items))
        return entries
