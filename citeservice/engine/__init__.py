"""Citation style engine adapters."""

from citeservice.engine.base import CitationEngine, ItemRetriever
from citeservice.engine.citeproc_engine import CiteprocEngine
from citeservice.engine.factory import EngineFactory, create_engine, engine_factory

__all__ = [
    "CitationEngine",
    "CiteprocEngine",
    "EngineFactory",
    "ItemRetriever",
    "create_engine",
    "engine_factory",
]
