"""Engine factory for creating per-request engine instances."""

from typing import Optional, Protocol

from citeservice.config import EngineConfig
from citeservice.engine.base import CitationEngine, ItemRetriever
from citeservice.engine.citeproc_engine import CiteprocEngine


class EngineFactory(Protocol):
    def __call__(
        self,
        style_xml: str,
        retrieve_item: ItemRetriever,
        locale: Optional[str] = None,
        *,
        use_style_locale: bool = False,
    ) -> CitationEngine: ...


def create_engine(
    config: EngineConfig,
    style_xml: str,
    retrieve_item: ItemRetriever,
    locale: Optional[str] = None,
    use_style_locale: bool = False,
) -> CitationEngine:
    """Create a fresh citation engine.

    Engines hold numbering and disambiguation state, so every request
    gets its own instance.

    Args:
        config: Engine configuration
        style_xml: CSL style definition
        retrieve_item: Item retrieval callback
        locale: Optional locale override
        use_style_locale: Fall back to the style's default-locale before
            the configured default

    Returns:
        CitationEngine ready for `load_items`
    """
    return CiteprocEngine(
        style_xml=style_xml,
        retrieve_item=retrieve_item,
        locale=locale,
        default_locale=config.default_locale,
        supported_locale_prefixes=config.supported_locale_prefixes,
        output_format=config.output_format,
        validate=config.validate_style,
        use_style_locale=use_style_locale,
    )


def engine_factory(config: EngineConfig) -> EngineFactory:
    """Bind `create_engine` to a configuration."""

    def factory(
        style_xml: str,
        retrieve_item: ItemRetriever,
        locale: Optional[str] = None,
        *,
        use_style_locale: bool = False,
    ) -> CitationEngine:
        return create_engine(config, style_xml, retrieve_item, locale, use_style_locale)

    return factory
