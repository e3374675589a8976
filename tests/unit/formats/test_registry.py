"""
Unit tests for the format registry.
"""

from sprout.dom import Node, root
from sprout.formats.base import FormatRegistry, FormatStrategy


class StubStrategy(FormatStrategy):
    def __init__(self, name, extensions, marker=None):
        self._name = name
        self._extensions = extensions
        self._marker = marker

    @property
    def name(self):
        return self._name

    @property
    def extensions(self):
        return self._extensions

    def detect(self, content):
        return self._marker is not None and content.startswith(self._marker)

    def build(self, content) -> Node:
        return root(self._name)


class TestFormatRegistry:
    def setup_method(self):
        self.registry = FormatRegistry()
        self.first = StubStrategy("first", [".a", ".shared"], marker="!")
        self.second = StubStrategy("second", [".b", ".shared"], marker="!")
        self.registry.register(self.first)
        self.registry.register(self.second)

    def test_names_in_registration_order(self):
        assert self.registry.names == ["first", "second"]

    def test_get_by_name(self):
        assert self.registry.get_by_name("second") is self.second
        assert self.registry.get_by_name("third") is None

    def test_get_by_extension_normalizes(self):
        assert self.registry.get_by_extension("B") is self.second
        assert self.registry.get_by_extension(".b") is self.second

    def test_earliest_registration_wins_extension(self):
        assert self.registry.get_by_extension("shared") is self.first

    def test_detect_by_filename(self):
        assert self.registry.detect("!", "page.B") is self.second

    def test_detect_by_content(self):
        assert self.registry.detect("!hello", None) is self.first
        assert self.registry.detect("!hello", "no-extension") is self.first

    def test_detect_unknown_extension_falls_back_to_content(self):
        assert self.registry.detect("!x", "page.txt") is self.first

    def test_detect_nothing(self):
        assert self.registry.detect("plain", "page.txt") is None
