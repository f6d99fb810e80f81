"""
Void element normalization tests

Pure text transforms; no tree parser involved.
"""

import pytest

from inky.lib.voids import output_canonicalize, voids_normalize


class TestVoidsNormalize:
    """voids_normalize()"""

    def test_image_self_closed(self):
        assert voids_normalize('<img src="x" class="thumbnail">') == '<img src="x" class="thumbnail" />'

    def test_bare_break(self):
        assert voids_normalize("a<br>b") == "a<br />b"

    def test_case_insensitive(self):
        assert voids_normalize('<IMG SRC="x">') == '<IMG SRC="x" />'

    @pytest.mark.parametrize("markup", ["<br/>", "<br />", '<img src="x"/>', '<img src="x" />'])
    def test_already_self_closed(self, markup):
        assert voids_normalize(markup) == markup

    def test_idempotent(self):
        source = '<p>a<br>b<hr class="x"><img src="y"></p>'
        once = voids_normalize(source)

        assert voids_normalize(once) == once

    def test_paired_form_left_for_canonicalizer(self):
        assert voids_normalize('<img src="x"></img>') == '<img src="x"></img>'

    @pytest.mark.parametrize("markup", ["<columns>", "<colgroup>", "<bread>", "<item>"])
    def test_similar_names_untouched(self, markup):
        assert voids_normalize(markup) == markup


class TestOutputCanonicalize:
    """output_canonicalize()"""

    def test_self_closed_cell_expanded(self):
        assert output_canonicalize('<th class="expander"/>') == '<th class="expander"></th>'

    def test_bare_self_closed_expanded(self):
        assert output_canonicalize("<td/>") == "<td></td>"

    def test_void_kept_self_closed(self):
        assert output_canonicalize('<img src="x"/>') == '<img src="x"/>'

    def test_paired_void_collapsed(self):
        assert output_canonicalize('<img src="x"></img>') == '<img src="x" />'

    def test_paired_void_with_whitespace_collapsed(self):
        assert output_canonicalize("<br>\n  </br>") == "<br />"

    def test_open_void_closed(self):
        assert output_canonicalize('<hr class="x">') == '<hr class="x" />'

    def test_mixed(self):
        assert output_canonicalize('<td/><br/><img src="x"></img>') == '<td></td><br/><img src="x" />'

    def test_idempotent(self):
        once = output_canonicalize('<td/><img src="x"><span class="a"/>')

        assert output_canonicalize(once) == once
