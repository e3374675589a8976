"""
DOM - Document Object Model for Sprout

A markup document is a tree of Nodes. Each node is one element: a tag name,
an opaque attribute string, and content that is either a list of child
nodes, a text string, or nothing at all (an empty element).

Key invariant: a parent owns its children through its child list; the
child's link back to its parent is a weak reference used only for upward
navigation.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from functools import partial


class SproutError(Exception):
    """Base class for all Sprout errors."""


class NodeNotFoundError(SproutError, LookupError):
    """Raised when upward navigation has nowhere to go."""


class InvalidArgumentError(SproutError, ValueError):
    """Raised when an operation receives an argument it cannot honor."""


@dataclass(eq=False)
class Node:
    """A markup element in the document tree."""
    name: str
    attributes: str = ""
    content: list[Node] | str | None = field(default_factory=list, init=False, repr=False)
    label: str | None = field(default=None, init=False)
    _parent: weakref.ref[Node] | None = field(default=None, init=False, repr=False)

    @classmethod
    def create(cls, name: str, attributes: str = "") -> Node:
        """Create a detached node."""
        return cls(name, attributes)

    def __getattr__(self, name: str) -> Callable[..., Node]:
        # Only reached for names Node does not define: node.div() == node.add("div")
        if name.startswith("_"):
            raise AttributeError(name)
        return partial(self.add, name)

    def __str__(self) -> str:
        return self.string()

    @property
    def parent(self) -> Node | None:
        """The node this one was most recently inserted into, if still alive."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def children(self) -> list[Node]:
        """Child nodes, or an empty list when content is text or empty."""
        if isinstance(self.content, list):
            return list(self.content)
        return []

    def add(self, name: str, attributes: str = "") -> Node:
        """Create a child, insert it, and return the child for chaining."""
        node = type(self)(name, attributes)
        self.insert(node)
        return node

    def insert(self, *nodes: Node) -> Node:
        """
        Append nodes as children, in order, and return self.

        Text or empty content is discarded first. No identity or cycle check
        is made: a node may end up under several parents, in which case its
        parent link follows the latest insertion.
        """
        if not isinstance(self.content, list):
            self.content = []
        for node in nodes:
            node._parent = weakref.ref(self)
            self.content.append(node)
        return self

    def text(self, value: str) -> Node:
        """Replace content with literal text."""
        self.content = value
        return self

    def merge(self) -> Node:
        """Turn this node into an empty element (start-tag only)."""
        self.content = None
        return self

    def mark(self, label: str) -> Node:
        """Attach a label that to() can climb back to."""
        self.label = label
        return self

    def up(self) -> Node:
        """Return the parent node."""
        parent = self.parent
        if parent is None:
            raise NodeNotFoundError("Parent node does not exist")
        return parent

    def root(self) -> Node:
        """Return the topmost ancestor (self when parentless)."""
        node = self._rise(lambda n: n.parent is None)
        assert node is not None  # the chain always ends at a parentless node
        return node

    def to(self, label: str) -> Node:
        """Return self or the nearest ancestor marked with label."""
        node = self._rise(lambda n: n.label == label)
        if node is None:
            raise NodeNotFoundError(f'Node with label "{label}" not found')
        return node

    def times(self, count: int, label: str | None = None) -> Node:
        """
        Repeat a node so it appears count times under its parent.

        The repeated node is self, or the nearest ancestor marked with label.
        The same object is inserted again rather than copied, so every
        occurrence renders identically, including later edits. Returns the
        parent.
        """
        if count < 1:
            raise InvalidArgumentError("Number of times must be positive")

        child = self if label is None else self.to(label)
        parent = child.up()

        for _ in range(count - 1):
            parent.insert(child)

        return parent

    def ancestors(self) -> Iterator[Node]:
        """Yield self, then each parent up to the root."""
        node: Node | None = self
        while node is not None:
            yield node
            node = node.parent

    def string(self) -> str:
        """Render this node and its subtree as markup."""
        if isinstance(self.content, str):
            return self._enclose(self.content)
        if isinstance(self.content, list):
            return self._enclose("".join(child.string() for child in self.content))
        return self._start()

    def _start(self) -> str:
        if self.attributes:
            return f"<{self.name} {self.attributes}>"
        return f"<{self.name}>"

    def _end(self) -> str:
        return f"</{self.name}>"

    def _enclose(self, inner: str) -> str:
        return self._start() + inner + self._end()

    def _rise(self, predicate: Callable[[Node], bool]) -> Node | None:
        """First node from self toward the root matching predicate."""
        for node in self.ancestors():
            if predicate(node):
                return node
        return None


def root(name: str, attributes: str = "") -> Node:
    """
    Start a new document rooted at an element.

    Children only hold a weak link to their parent, so keep the returned node
    in a variable while navigating: in `root("a").add("b").root()` nothing
    holds "a", it is collected, and `.root()` returns "b".
    """
    return Node(name, attributes)
