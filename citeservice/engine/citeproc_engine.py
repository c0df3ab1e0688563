"""Citation style engine backed by citeproc-py."""

from __future__ import annotations

import copy
import io
import logging
from typing import Optional, Sequence

from citeproc import Citation, CitationItem
from citeproc import CitationStylesBibliography, CitationStylesStyle
from citeproc.formatter import html, plain
from citeproc.source.json import CiteProcJSON
from lxml import etree

from citeservice.engine.base import CitationEngine, ItemRetriever
from citeservice.errors import EngineStateError, StyleDefinitionError

logger = logging.getLogger(__name__)

CSL_NS = "http://purl.org/net/xbiblio/csl"

FORMATTERS = {
    "html": html,
    "plain": plain,
}


def strip_bom(style_xml: str) -> str:
    return style_xml.lstrip("\ufeff")


class CiteprocEngine(CitationEngine):
    """CSL engine using citeproc-py.

    The style is parsed once at construction. `load_items` builds a fresh
    citeproc bibliography from the retrieved records and registers every
    item in the given order, so numbering follows first-seen order.

    citeproc-py folds reference keys to lower case, so items are handed
    to it under generated keys (`item-0`, `item-1`, ...) and catalog ids
    are mapped onto those keys.
    """

    def __init__(
        self,
        style_xml: str,
        retrieve_item: ItemRetriever,
        locale: Optional[str] = None,
        default_locale: str = "en-US",
        supported_locale_prefixes: Sequence[str] = ("en",),
        output_format: str = "html",
        validate: bool = False,
        use_style_locale: bool = False,
    ):
        """Initialize engine.

        Args:
            style_xml: CSL style definition
            retrieve_item: Callback returning a CSL-JSON record or None
            locale: Locale override
            default_locale: Locale used when there is no override
            supported_locale_prefixes: Language prefixes the engine may load
            output_format: "html" or "plain"
            validate: Validate the style against the CSL schema
            use_style_locale: Prefer the style's default-locale over
                `default_locale` when there is no override

        Raises:
            StyleDefinitionError: If the style cannot be parsed
            UnsupportedLocaleError: If the resolved locale is not supported
        """
        super().__init__(retrieve_item, supported_locale_prefixes)
        if output_format not in FORMATTERS:
            raise ValueError(
                f"Unsupported output format: {output_format}. "
                f"Supported: {', '.join(FORMATTERS)}"
            )
        self._formatter = FORMATTERS[output_format]

        xml_bytes = strip_bom(style_xml).encode("utf-8")
        try:
            root = etree.fromstring(xml_bytes)
        except etree.XMLSyntaxError as e:
            raise StyleDefinitionError(f"Invalid CSL style XML: {e}") from e

        self._has_bibliography = root.find(f"{{{CSL_NS}}}bibliography") is not None
        style_locale = root.get("default-locale") if use_style_locale else None
        self.locale = self.retrieve_locale(locale or style_locale or default_locale)

        try:
            self._style = CitationStylesStyle(
                io.BytesIO(xml_bytes), locale=self.locale, validate=validate
            )
        except (ValueError, OSError, etree.LxmlError) as e:
            raise StyleDefinitionError(f"Could not load CSL style: {e}") from e

        self._bibliography: CitationStylesBibliography | None = None
        self._engine_keys: dict[str, str] = {}
        self.loaded_ids: list[str] = []

    def load_items(self, item_ids: Sequence[str]) -> None:
        records = []
        engine_keys: dict[str, str] = {}
        for item_id in dict.fromkeys(item_ids):
            record = self.retrieve_item(item_id)
            if record is None:
                logger.warning("Engine could not retrieve item %r", item_id)
                continue
            engine_key = f"item-{len(engine_keys)}"
            record = copy.deepcopy(record)
            record["id"] = engine_key
            records.append(record)
            engine_keys[item_id] = engine_key

        bibliography = CitationStylesBibliography(
            self._style, CiteProcJSON(records), self._formatter
        )
        if engine_keys:
            bibliography.register(
                Citation([CitationItem(key) for key in engine_keys.values()]),
                self._warn,
            )

        self._bibliography = bibliography
        self._engine_keys = engine_keys
        self.loaded_ids = list(engine_keys)
        logger.debug("Loaded %d items into citation engine", len(engine_keys))

    def render_cluster(self, item_ids: Sequence[str]) -> str:
        bibliography = self._require_loaded()
        citation = Citation([CitationItem(self._engine_key(item_id)) for item_id in item_ids])
        bibliography.register(citation, self._warn)
        return str(bibliography.cite(citation, self._warn))

    def render_bibliography(self) -> list[str]:
        bibliography = self._require_loaded()
        if not self._has_bibliography:
            raise StyleDefinitionError("CSL style does not define a bibliography")
        if not self.loaded_ids:
            return []

        bibliography.sort()
        return [str(entry) for entry in bibliography.bibliography()]

    def _require_loaded(self) -> CitationStylesBibliography:
        if self._bibliography is None:
            raise EngineStateError("Items must be loaded before rendering")
        return self._bibliography

    def _engine_key(self, item_id: str) -> str:
        try:
            return self._engine_keys[item_id]
        except KeyError:
            raise EngineStateError(f"Item {item_id!r} was not loaded") from None

    @staticmethod
    def _warn(citation_item) -> None:
        logger.warning("Reference with key %r not found in engine items", citation_item.key)
