"""
Options model tests

InkyOptions construction, merging and the dispatch table.
"""

import dataclasses

import pytest

from inky.models import ComponentKind, DEFAULT_COMPONENTS, InkyOptions


class TestDefaults:
    def test_defaults(self):
        options = InkyOptions()

        assert options.column_count == 12
        assert dict(options.components) == DEFAULT_COMPONENTS
        assert dict(options.parser_options) == {}

    def test_every_kind_has_a_default_tag(self):
        assert set(DEFAULT_COMPONENTS) == {kind.value for kind in ComponentKind}


class TestOverrides:
    def test_partial_override_merged(self):
        options = InkyOptions(components={"menuItem": "li-item"})

        assert options.components["menuItem"] == "li-item"
        assert options.components["menu"] == "menu"

    def test_from_mapping(self):
        options = InkyOptions.options_fromMapping(
            {"columnCount": 16, "components": {"button": "btn"}, "cheerio": {"decode_entities": True}}
        )

        assert options.column_count == 16
        assert options.tag_get(ComponentKind.BUTTON) == "btn"
        assert options.parser_options["decode_entities"] is True

    def test_parser_options_preferred_over_alias(self):
        options = InkyOptions.options_fromMapping(
            {"parserOptions": {"features": "html.parser"}, "cheerio": {"features": "lxml"}}
        )

        assert options.parser_options["features"] == "html.parser"

    def test_from_none(self):
        assert InkyOptions.options_fromMapping(None).column_count == 12

    def test_numbers_not_validated(self):
        assert InkyOptions(column_count=-3).column_count == -3


class TestImmutability:
    def test_frozen(self):
        options = InkyOptions()

        with pytest.raises(dataclasses.FrozenInstanceError):
            options.column_count = 4

    def test_components_read_only(self):
        options = InkyOptions()

        with pytest.raises(TypeError):
            options.components["row"] = "line"

    def test_caller_mapping_not_shared(self):
        overrides = {"row": "line"}
        options = InkyOptions(components=overrides)
        overrides["row"] = "other"

        assert options.components["row"] == "line"


class TestDispatchTable:
    def test_kinds_by_tag(self):
        table = InkyOptions().kinds_byTag()

        assert table["item"] is ComponentKind.MENU_ITEM
        assert table["block-grid"] is ComponentKind.BLOCK_GRID
        assert table["h-line"] is ComponentKind.H_LINE
        assert len(table) == 13

    def test_tags_lower_cased(self):
        table = InkyOptions(components={"callout": "Note"}).kinds_byTag()

        assert table["note"] is ComponentKind.CALLOUT
        assert "callout" not in table

    def test_unknown_keys_skipped(self):
        options = InkyOptions(components={"column": "col"})

        assert options.keys_unknown() == ["column"]
        assert "col" not in options.kinds_byTag()
