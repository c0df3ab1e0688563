"""FastAPI dependencies for dependency injection."""

import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from citeservice.annotate.pipeline import AnnotationPipeline
from citeservice.bibliography import BibliographyRenderer
from citeservice.config import ServiceConfig, load_config
from citeservice.engine.factory import EngineFactory, engine_factory

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"


@lru_cache
def get_config() -> ServiceConfig:
    """Get cached configuration.

    Uses CITESERVICE_CONFIG when set, otherwise the packaged config.yaml.

    Returns:
        Service configuration
    """
    config_path = os.getenv("CITESERVICE_CONFIG") or DEFAULT_CONFIG_PATH
    return load_config(config_path)


def get_engine_factory(config: ServiceConfig = Depends(get_config)) -> EngineFactory:
    """Get a factory that builds a fresh engine per call."""
    return engine_factory(config.engine)


# ========== Pipelines ==========


def get_annotation_pipeline(
    config: ServiceConfig = Depends(get_config),
    create_engine: EngineFactory = Depends(get_engine_factory),
) -> AnnotationPipeline:
    return AnnotationPipeline(config, create_engine=create_engine)


def get_bibliography_renderer(
    config: ServiceConfig = Depends(get_config),
    create_engine: EngineFactory = Depends(get_engine_factory),
) -> BibliographyRenderer:
    return BibliographyRenderer(config, create_engine=create_engine)
