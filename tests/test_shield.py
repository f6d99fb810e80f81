"""
Raw shield tests

Extraction and reinjection of <raw> blocks, independent of the tree parser.
"""

from inky.config import AppSettings
from inky.lib.shield import RawShield


class TestRawExtract:
    """raws_extract()"""

    def test_no_raw_blocks(self):
        shielded = RawShield().raws_extract("<p>nothing to see</p>")

        assert shielded.text == "<p>nothing to see</p>"
        assert shielded.raws == []

    def test_single_block(self):
        shielded = RawShield().raws_extract("<raw><%= test %></raw>")

        assert shielded.text == "###RAW0###"
        assert shielded.raws == ["<%= test %>"]

    def test_blocks_numbered_left_to_right(self):
        shielded = RawShield().raws_extract("<h1><raw>a</raw></h1><h2>< raw >b</ raw ></h2><raw>c</raw>")

        assert shielded.text == "<h1>###RAW0###</h1><h2>###RAW1###</h2>###RAW2###"
        assert shielded.raws == ["a", "b", "c"]

    def test_case_insensitive_markers(self):
        shielded = RawShield().raws_extract("<RAW>x</Raw>")

        assert shielded.raws == ["x"]

    def test_multiline_content(self):
        shielded = RawShield().raws_extract("<raw>{% if a %}\n<b>\n{% endif %}</raw>")

        assert shielded.raws == ["{% if a %}\n<b>\n{% endif %}"]

    def test_non_greedy(self):
        """Each block ends at its own closing marker"""
        shielded = RawShield().raws_extract("<raw>1</raw>mid<raw>2</raw>")

        assert shielded.text == "###RAW0###mid###RAW1###"


class TestRawReinject:
    """raws_reinject()"""

    def test_round_trip(self):
        shield = RawShield()
        source = "<h1><raw><%= test %></raw></h1><h2>< raw >!!!</ raw ></h2>"
        shielded = shield.raws_extract(source)

        assert shield.raws_reinject(shielded.text, shielded.raws) == "<h1><%= test %></h1><h2>!!!</h2>"

    def test_raw_content_not_rescanned(self):
        """A raw block that looks like a placeholder is restored literally"""
        shield = RawShield()

        assert shield.raws_reinject("###RAW0###|###RAW1###", ["###RAW1###", "b"]) == "###RAW1###|b"

    def test_unknown_placeholder_left_alone(self):
        assert RawShield().raws_reinject("###RAW5###", ["a"]) == "###RAW5###"

    def test_double_digit_indexes(self):
        raws = [str(i) for i in range(12)]
        text = "".join(f"[###RAW{i}###]" for i in range(12))

        assert RawShield().raws_reinject(text, raws) == "".join(f"[{i}]" for i in range(12))

    def test_custom_placeholders(self):
        settings = AppSettings(raw_placeholder_prefix="@@R", raw_placeholder_suffix="@@")
        shield = RawShield(settings)
        shielded = shield.raws_extract("<raw>x</raw>")

        assert shielded.text == "@@R0@@"
        assert shield.raws_reinject(shielded.text, shielded.raws) == "x"


class TestPlaceholderSettings:
    def test_placeholder_round_trip(self):
        settings = AppSettings()

        assert settings.rawIndex_extract(settings.rawPlaceHolder_make(7)) == 7

    def test_not_a_placeholder(self):
        settings = AppSettings()

        assert settings.rawIndex_extract("###RAWx###") is None
        assert settings.rawIndex_extract("hello") is None
