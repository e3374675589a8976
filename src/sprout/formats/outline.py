"""
Outline format strategy.

One element per line, nested by indentation:

    html lang="en"
      body
        ul @list
          li class="item" *3 | Hello
        br /

A line is `name [attributes] [@label] [*count] [/] [| text]`. The trailing
modifiers map directly onto the builder: `@label` marks, `*count` repeats the
finished element, `/` merges it into an empty element, and text after the
marker fills it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..config import get_config
from ..dom import Node, root
from .base import FormatStrategy, SourceError, registry

HEAD_PATTERN = re.compile(r"^(?P<name>[^\s@*/|]+)(?P<rest>.*)$")
LABEL_PATTERN = re.compile(r"^@(\S+)$")
COUNT_PATTERN = re.compile(r"^\*(\d+)$")


@dataclass
class OutlineLine:
    """One parsed element line."""
    name: str
    attributes: str = ""
    label: str | None = None
    count: int = 1
    empty: bool = False
    text: str | None = None


class OutlineStrategy(FormatStrategy):
    """Indentation-based outline builder."""

    @property
    def name(self) -> str:
        return "outline"

    @property
    def extensions(self) -> list[str]:
        return [".sprout", ".outline"]

    def build(self, content: str) -> Node:
        """
        Build the tree top-down, keeping a stack of open elements.

        An element is finished when a line at the same or a shallower depth
        appears (or input ends); only then is its repetition applied, so the
        repeated copies include the whole subtree.
        """
        cfg = get_config().outline
        width = max(1, cfg.indent_width)

        document: Node | None = None
        stack: list[tuple[Node, int]] = []  # (open element, repeat count)

        for lineno, line in enumerate(content.splitlines(), start=1):
            body = line.lstrip(" ")
            if not body.strip() or (cfg.comment_prefix and body.startswith(cfg.comment_prefix)):
                continue
            if body[0] == "\t":
                raise SourceError("tabs are not allowed in indentation", lineno)

            indent = len(line) - len(body)
            if indent % width:
                raise SourceError(
                    f"indentation of {indent} is not a multiple of {width}", lineno
                )
            level = indent // width

            if level > len(stack):
                raise SourceError("indentation jumps more than one level", lineno)
            if level == 0 and document is not None:
                raise SourceError("only one top-level element is allowed", lineno)

            while len(stack) > level:
                self._finish(*stack.pop())

            parsed = parse_line(body, cfg.text_marker, lineno)

            if level == 0:
                if parsed.count != 1:
                    raise SourceError("the top-level element cannot repeat", lineno)
                node = document = root(parsed.name, parsed.attributes)
            else:
                parent = stack[-1][0]
                if not isinstance(parent.content, list):
                    raise SourceError(
                        f"<{parent.name}> has text or is empty and cannot hold children",
                        lineno,
                    )
                node = parent.add(parsed.name, parsed.attributes)

            if parsed.label is not None:
                node.mark(parsed.label)
            if parsed.empty:
                node.merge()
            elif parsed.text is not None:
                node.text(parsed.text)

            stack.append((node, parsed.count))

        while stack:
            self._finish(*stack.pop())

        if document is None:
            raise SourceError("document has no elements")
        return document

    def _finish(self, node: Node, count: int) -> None:
        if count > 1:
            node.times(count)


def parse_line(body: str, text_marker: str, lineno: int | None = None) -> OutlineLine:
    """Split an unindented outline line into its element parts."""
    head, sep, text = body.partition(text_marker)
    # Marker at end of line, its trailing space stripped: empty text
    bare_marker = text_marker.rstrip()
    if not sep and bare_marker.strip() and body.rstrip().endswith(bare_marker):
        head, sep, text = body.rstrip()[: -len(bare_marker)], bare_marker, ""
    head = head.strip()

    match = HEAD_PATTERN.match(head)
    if not match:
        raise SourceError("missing element name", lineno)

    parsed = OutlineLine(name=match.group("name"))
    if sep:
        parsed.text = text

    # Peel modifiers off the end; whatever is left is the attribute string
    rest = match.group("rest").strip()
    seen: set[str] = set()
    while rest:
        parts = rest.rsplit(None, 1)
        token = parts[-1]
        if token == "/":
            kind = "/"
            parsed.empty = True
        elif label := LABEL_PATTERN.match(token):
            kind = "@"
            parsed.label = label.group(1)
        elif count := COUNT_PATTERN.match(token):
            kind = "*"
            parsed.count = int(count.group(1))
        else:
            break
        if kind in seen:
            raise SourceError(f"repeated {kind!r} modifier", lineno)
        seen.add(kind)
        rest = parts[0] if len(parts) == 2 else ""

    parsed.attributes = rest

    if parsed.count < 1:
        raise SourceError("repeat count must be at least 1", lineno)
    if parsed.empty and parsed.text is not None:
        raise SourceError(f"empty element <{parsed.name}> cannot have text", lineno)

    return parsed


registry.register(OutlineStrategy())
