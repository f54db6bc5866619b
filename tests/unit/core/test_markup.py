"""Tests for the HTML helpers."""

from __future__ import annotations

import pytest

from sectionlinks.core.markup import end_tag, escape, start_tag, strip_tags


class TestStripTags:
    """Tests for strip_tags()."""

    def test_removes_tags(self) -> None:
        assert strip_tags("<b>Bold</b> <i class='x'>topic</i>") == "Bold topic"

    def test_plain_text_unchanged(self) -> None:
        assert strip_tags("R&amp;D") == "R&amp;D"

    def test_only_tags(self) -> None:
        assert strip_tags("<span></span>") == ""


class TestEscape:
    """Tests for escape()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("R&D Section", "R&amp;D Section"),
            ("<b>", "&lt;b&gt;"),
            ('Say "hi"', "Say &quot;hi&quot;"),
            ("Don't", "Don&#039;t"),
            ("plain", "plain"),
        ],
    )
    def test_encodes_special_characters(self, text: str, expected: str) -> None:
        assert escape(text) == expected

    def test_numeric_entities_survive(self) -> None:
        assert escape("It&#8217;s &#x2019;") == "It&#8217;s &#x2019;"

    def test_named_entities_are_encoded(self) -> None:
        assert escape("R&amp;D") == "R&amp;amp;D"


class TestTags:
    """Tests for start_tag() and end_tag()."""

    def test_start_tag(self) -> None:
        markup = start_tag("a", {"class": "autolink", "title": 'Say "hi"', "href": "/s?id=1"})
        assert markup == '<a class="autolink" title="Say &quot;hi&quot;" href="/s?id=1">'

    def test_none_attributes_skipped(self) -> None:
        assert start_tag("a", {"class": "autolink", "title": None}) == '<a class="autolink">'

    def test_non_string_values(self) -> None:
        assert start_tag("a", {"data-section": 12}) == '<a data-section="12">'

    def test_no_attributes(self) -> None:
        assert start_tag("nolink", {}) == "<nolink>"

    def test_end_tag(self) -> None:
        assert end_tag("a") == "</a>"
