"""Citation rendering service for structured editor documents."""

__version__ = "0.1.0"

from citeservice.config import ServiceConfig, load_config
from citeservice.domain import BibliographicItem, Catalog, SectionRecord
from citeservice.annotate import AnnotationPipeline, AnnotationResult
from citeservice.bibliography import BibliographyRenderer
from citeservice.engine import CitationEngine, CiteprocEngine, create_engine

__all__ = [
    # Configuration
    "ServiceConfig",
    "load_config",
    # Domain
    "BibliographicItem",
    "Catalog",
    "SectionRecord",
    # Pipelines
    "AnnotationPipeline",
    "AnnotationResult",
    "BibliographyRenderer",
    # Engine
    "CitationEngine",
    "CiteprocEngine",
    "create_engine",
]
