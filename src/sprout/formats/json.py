"""
JSON format strategy.

JsonML-style element arrays: ["name", {attributes}?, child, ...].
Children are element arrays, text strings, or a lone null for an empty
element. Attribute objects become `key="value"` pairs in key order; a value
of true or null becomes a bare key, and a false value drops the key. No
escaping is applied.
"""

from __future__ import annotations

import json

from ..dom import Node, root
from .base import FormatStrategy, SourceError, registry


class JSONStrategy(FormatStrategy):
    """JSON element-array builder."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def extensions(self) -> list[str]:
        return [".json"]

    def detect(self, content: str) -> bool:
        """A JSON document describing markup always opens with an array."""
        return content.lstrip().startswith("[")

    def build(self, content: str) -> Node:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SourceError(f"invalid JSON: {e.msg}", e.lineno) from e

        name, attributes, children = split_element(data)
        document = root(name, attributes)
        self._fill(document, children)
        return document

    def _fill(self, node: Node, children: list) -> None:
        """Apply one element's children to an already created node."""
        if not children:
            return
        if children == [None]:
            node.merge()
        elif all(isinstance(child, str) for child in children):
            node.text("".join(children))
        elif all(isinstance(child, list) for child in children):
            for child in children:
                name, attributes, grandchildren = split_element(child)
                self._fill(node.add(name, attributes), grandchildren)
        else:
            raise SourceError(
                f"<{node.name}> children must be all elements, all text, or a single null"
            )


def split_element(data: object) -> tuple[str, str, list]:
    """Return (name, attribute string, children) for an element array."""
    if not isinstance(data, list) or not data or not isinstance(data[0], str):
        raise SourceError(f"expected an element array like [\"name\", ...], got {data!r:.50}")

    name, rest = data[0], data[1:]
    attributes = ""
    if rest and isinstance(rest[0], dict):
        attributes = format_attributes(rest[0])
        rest = rest[1:]
    return name, attributes, rest


def format_attributes(attrs: dict) -> str:
    """Render an attribute object as a pre-formatted attribute string."""
    parts = []
    for key, value in attrs.items():
        if value is False:
            continue
        if value is None or value is True:
            parts.append(key)
        else:
            parts.append(f'{key}="{value}"')
    return " ".join(parts)


registry.register(JSONStrategy())
