"""Tests for the citeproc-py engine adapter."""

from __future__ import annotations

import re

import pytest

from citeservice.config import EngineConfig
from citeservice.domain.catalog import Catalog
from citeservice.engine.citeproc_engine import CiteprocEngine, strip_bom
from citeservice.engine.factory import create_engine
from citeservice.errors import (
    EngineStateError,
    StyleDefinitionError,
    UnsupportedLocaleError,
)


@pytest.fixture
def catalog(catalog_records):
    return Catalog(catalog_records)


class TestEngineConstruction:
    """Test style and locale handling."""

    def test_annotation_locale_ignores_style(self, title_style, catalog):
        style = title_style.replace('default-locale="en-US"', 'default-locale="en-GB"')
        engine = CiteprocEngine(style, catalog.resolve)

        assert engine.locale == "en-US"

    def test_bibliography_locale_comes_from_style(self, title_style, catalog):
        style = title_style.replace('default-locale="en-US"', 'default-locale="en-GB"')
        engine = CiteprocEngine(style, catalog.resolve, use_style_locale=True)

        assert engine.locale == "en-GB"

    def test_locale_override(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve, locale="en-GB")

        assert engine.locale == "en-GB"

    def test_unsupported_locale_override(self, title_style, catalog):
        with pytest.raises(UnsupportedLocaleError, match="de-DE"):
            CiteprocEngine(title_style, catalog.resolve, locale="de-DE")

    def test_foreign_style_locale_renders_in_default(self, title_style, catalog):
        style = title_style.replace('default-locale="en-US"', 'default-locale="fr-FR"')
        engine = CiteprocEngine(style, catalog.resolve)
        engine.load_items(["1"])

        assert engine.locale == "en-US"
        assert "X" in engine.render_cluster(["1"])

    def test_unsupported_style_locale_for_bibliography(self, title_style, catalog):
        style = title_style.replace('default-locale="en-US"', 'default-locale="fr-FR"')

        with pytest.raises(UnsupportedLocaleError, match="fr-FR"):
            CiteprocEngine(style, catalog.resolve, use_style_locale=True)

    def test_invalid_xml(self, catalog):
        with pytest.raises(StyleDefinitionError):
            CiteprocEngine("<style><unclosed></style>", catalog.resolve)

    def test_bom_is_stripped(self, title_style, catalog):
        engine = CiteprocEngine("\ufeff" + title_style, catalog.resolve)
        engine.load_items(["1"])

        assert "X" in engine.render_cluster(["1"])

    def test_strip_bom_only_leading(self):
        assert strip_bom("\ufeff<a/>") == "<a/>"
        assert strip_bom("<a/>") == "<a/>"

    def test_unknown_output_format(self, title_style, catalog):
        with pytest.raises(ValueError, match="output format"):
            CiteprocEngine(title_style, catalog.resolve, output_format="rtf")

    def test_factory_passes_style_locale_flag(self, title_style, catalog):
        style = title_style.replace('default-locale="en-US"', 'default-locale="en-GB"')

        assert create_engine(EngineConfig(), style, catalog.resolve).locale == "en-US"
        assert create_engine(EngineConfig(), style, catalog.resolve, use_style_locale=True).locale == "en-GB"

    def test_factory_uses_engine_config(self, title_style, catalog):
        engine = create_engine(
            EngineConfig(supported_locale_prefixes=["fr"], default_locale="fr-FR"),
            title_style.replace(' default-locale="en-US"', ""),
            catalog.resolve,
        )

        assert engine.locale == "fr-FR"


class TestEngineRendering:
    """Test rendering against citeproc-py."""

    def test_render_before_load(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)

        with pytest.raises(EngineStateError):
            engine.render_cluster(["1"])
        with pytest.raises(EngineStateError):
            engine.render_bibliography()

    def test_cluster_contains_item_titles(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items(["1", "2"])

        rendered = engine.render_cluster(["1", "2"])

        assert rendered
        assert "X" in rendered
        assert "Y" in rendered

    def test_load_skips_unresolvable_and_duplicate_ids(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items(["2", "missing", "1", "2"])

        assert engine.loaded_ids == ["2", "1"]

    def test_load_replaces_item_set(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items(["1", "2", "3"])
        engine.load_items(["3"])

        assert engine.loaded_ids == ["3"]
        assert len(engine.render_bibliography()) == 1

    def test_bibliography_one_entry_per_item(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items(["1", "2"])

        entries = engine.render_bibliography()

        assert len(entries) == 2
        assert any("X" in entry for entry in entries)
        assert any("Y" in entry for entry in entries)

    def test_bibliography_is_repeatable(self, title_style, catalog):
        def render():
            engine = CiteprocEngine(title_style, catalog.resolve)
            engine.load_items(["2", "1"])
            return engine.render_bibliography()

        assert render() == render()

    def test_empty_bibliography(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items([])

        assert engine.render_bibliography() == []

    def test_style_without_bibliography(self, title_style, catalog):
        start = title_style.index("<bibliography>")
        end = title_style.index("</bibliography>") + len("</bibliography>")
        engine = CiteprocEngine(title_style[:start] + title_style[end:], catalog.resolve)
        engine.load_items(["1"])

        with pytest.raises(StyleDefinitionError):
            engine.render_bibliography()

    def test_retrieved_records_are_not_mutated(self, title_style):
        records = {"a": {"type": "book", "title": "A"}}
        engine = CiteprocEngine(title_style, lambda key: records.get(key))
        engine.load_items(["a"])
        engine.render_cluster(["a"])

        assert records == {"a": {"type": "book", "title": "A"}}

    def test_ids_differing_only_in_case_stay_distinct(self, title_style):
        catalog = Catalog({"a": {"title": "Lower"}, "A": {"title": "Upper"}})
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items(["a", "A"])

        lower = engine.render_cluster(["a"])
        upper = engine.render_cluster(["A"])

        assert "Lower" in lower and "Upper" not in lower
        assert "Upper" in upper and "Lower" not in upper
        assert engine.loaded_ids == ["a", "A"]
        entries = engine.render_bibliography()
        assert len(entries) == 2
        assert any("Lower" in entry for entry in entries)
        assert any("Upper" in entry for entry in entries)

    def test_cluster_with_unloaded_id(self, title_style, catalog):
        engine = CiteprocEngine(title_style, catalog.resolve)
        engine.load_items(["1"])

        with pytest.raises(EngineStateError, match="2"):
            engine.render_cluster(["2"])


class TestCitationNumbering:
    """Test citation-number assignment through citeproc-py."""

    @pytest.fixture
    def engine(self, numeric_style, catalog):
        engine = CiteprocEngine(numeric_style, catalog.resolve)
        engine.load_items(["3", "2", "1"])
        return engine

    def test_numbers_follow_load_order(self, engine):
        assert engine.render_cluster(["3"]) == "[1]"
        assert engine.render_cluster(["2"]) == "[2]"

    def test_multi_item_cluster(self, engine):
        rendered = engine.render_cluster(["1", "3"])

        assert set(re.findall(r"\d+", rendered)) == {"1", "3"}

    def test_bibliography_numbered_in_load_order(self, engine):
        entries = engine.render_bibliography()

        assert len(entries) == 3
        assert entries[0].startswith("[1]")
        assert "Z" in entries[0]
        assert entries[2].startswith("[3]")
        assert "X" in entries[2]
