"""Shared fixtures for citeservice tests."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from citeservice.config import ServiceConfig
from citeservice.engine.base import CitationEngine
from citeservice.errors import EngineStateError

FIXTURES = Path(__file__).parent / "fixtures"

SMITH_CATALOG = {
    "1": {
        "type": "article-journal",
        "author": [{"family": "Smith", "given": "J"}],
        "issued": {"date-parts": [[2020]]},
        "title": "X",
    },
    "2": {
        "type": "book",
        "author": [{"family": "Doe", "given": "Ann"}, {"family": "Roe", "given": "B"}],
        "issued": {"date-parts": [[1999, 5]]},
        "title": "Y",
    },
    "3": {
        "type": "report",
        "title": "Z",
    },
}


class RecordingEngine(CitationEngine):
    """Fake engine that numbers items by load order and records every call."""

    def __init__(self, style_xml, retrieve_item, locale=None, use_style_locale=False):
        super().__init__(retrieve_item)
        self.style_xml = style_xml
        self.locale = locale
        self.use_style_locale = use_style_locale
        self.loaded_ids: list[str] | None = None
        self.calls: list[tuple] = []

    def load_items(self, item_ids):
        self.calls.append(("load", list(item_ids)))
        self.loaded_ids = [i for i in item_ids if self.retrieve_item(i) is not None]

    def render_cluster(self, item_ids):
        if self.loaded_ids is None:
            raise EngineStateError("Items must be loaded before rendering")
        self.calls.append(("cluster", list(item_ids)))
        numbers = [str(self.loaded_ids.index(i) + 1) for i in item_ids]
        return "[" + ",".join(numbers) + "]"

    def render_bibliography(self):
        if self.loaded_ids is None:
            raise EngineStateError("Items must be loaded before rendering")
        self.calls.append(("bibliography",))
        return [f"{i}. {self.retrieve_item(i)['title']}" for i in self.loaded_ids]


@pytest.fixture
def config():
    return ServiceConfig()


@pytest.fixture
def catalog_records():
    return copy.deepcopy(SMITH_CATALOG)


@pytest.fixture
def engines():
    """Engines created by `fake_engine_factory`, in creation order."""
    return []


@pytest.fixture
def fake_engine_factory(engines):
    def factory(style_xml, retrieve_item, locale=None, *, use_style_locale=False):
        engine = RecordingEngine(style_xml, retrieve_item, locale, use_style_locale)
        engines.append(engine)
        return engine

    return factory


@pytest.fixture
def title_style():
    return (FIXTURES / "title.csl").read_text(encoding="utf-8")


@pytest.fixture
def numeric_style():
    return (FIXTURES / "numeric.csl").read_text(encoding="utf-8")
