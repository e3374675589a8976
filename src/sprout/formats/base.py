"""
Base format interface and registry.

Each format strategy turns one kind of source text into a Node tree, driving
the fluent builder API rather than poking at node internals. The registry
manages format detection and selection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..dom import Node, SproutError


class SourceError(SproutError, ValueError):
    """Malformed source text, with the 1-based line it was found on."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class FormatStrategy(ABC):
    """A source language that can be turned into markup."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name accepted by --type."""

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """Lowercase file suffixes, dot included."""

    def detect(self, content: str) -> bool:
        """Claim extensionless input by sniffing it. Off unless overridden."""
        return False

    @abstractmethod
    def build(self, content: str) -> Node:
        """Build the tree and return its root; SourceError on bad input."""


class FormatRegistry:
    """Known source formats, looked up by name, extension or content."""

    def __init__(self):
        self._strategies: list[FormatStrategy] = []

    def register(self, strategy: FormatStrategy) -> None:
        self._strategies.append(strategy)

    @property
    def names(self) -> list[str]:
        """Format names in registration order, for --type."""
        return [strategy.name for strategy in self._strategies]

    def get_by_name(self, name: str) -> FormatStrategy | None:
        for strategy in self._strategies:
            if strategy.name == name:
                return strategy
        return None

    def get_by_extension(self, ext: str) -> FormatStrategy | None:
        """Accepts 'json' or '.json', any case; the earliest registration wins."""
        ext = "." + ext.lower().lstrip(".")
        for strategy in self._strategies:
            if ext in strategy.extensions:
                return strategy
        return None

    def detect(self, content: str, filename: str | None = None) -> FormatStrategy | None:
        """
        Pick a format for content: the filename extension decides when it is
        known, otherwise the first strategy whose detect() accepts the content.
        Returns None when nothing claims it.
        """
        if filename and "." in filename:
            strategy = self.get_by_extension(filename.rsplit(".", 1)[-1])
            if strategy:
                return strategy

        for strategy in self._strategies:
            if strategy.detect(content):
                return strategy
        return None


# Global registry instance
registry = FormatRegistry()
