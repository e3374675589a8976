"""
Unit tests for the JSON format strategy.
"""

import pytest

from sprout.formats.base import SourceError, registry
from sprout.formats.json import JSONStrategy, format_attributes, split_element


class TestJSONStrategy:
    def setup_method(self):
        self.strategy = JSONStrategy()

    def test_name(self):
        assert self.strategy.name == "json"

    def test_extensions(self):
        assert ".json" in self.strategy.extensions

    def test_registered(self):
        assert isinstance(registry.get_by_extension("json"), JSONStrategy)

    def test_detect(self):
        assert self.strategy.detect('  ["html"]')
        assert not self.strategy.detect("html\n  body")

    def test_single_element(self):
        assert self.strategy.build('["br"]').string() == "<br></br>"

    def test_nested_elements(self):
        doc = self.strategy.build(
            '["html", {"lang": "en"}, ["body", ["p", "one"], ["p", "two"]]]'
        )
        assert doc.string() == '<html lang="en"><body><p>one</p><p>two</p></body></html>'

    def test_null_merges(self):
        doc = self.strategy.build('["p", ["br", null]]')
        assert doc.string() == "<p><br></p>"

    def test_strings_concatenate(self):
        assert self.strategy.build('["p", "a", "b"]').string() == "<p>ab</p>"

    def test_mixed_children_rejected(self):
        with pytest.raises(SourceError, match="<p> children"):
            self.strategy.build('["p", "text", ["b"]]')

    def test_invalid_json(self):
        with pytest.raises(SourceError, match="invalid JSON"):
            self.strategy.build('["p",')

    def test_not_an_element(self):
        with pytest.raises(SourceError, match="element array"):
            self.strategy.build('{"p": 1}')


class TestHelpers:
    def test_format_attributes(self):
        assert format_attributes({"id": "x", "disabled": True, "n": 3}) == 'id="x" disabled n="3"'

    def test_false_drops_key(self):
        assert format_attributes({"hidden": False, "id": "x"}) == 'id="x"'

    def test_false_value_from_json(self):
        doc = JSONStrategy().build('["input", {"disabled": false, "checked": true}]')
        assert doc.string() == "<input checked></input>"

    def test_format_attributes_empty(self):
        assert format_attributes({}) == ""

    def test_split_element(self):
        assert split_element(["a", {"href": "/"}, "go"]) == ("a", 'href="/"', ["go"])

    def test_split_element_without_attributes(self):
        assert split_element(["a", ["b"]]) == ("a", "", [["b"]])
