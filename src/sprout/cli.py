"""
CLI interface for Sprout.

Builds a markup tree from an outline or JSON source and prints the rendered
markup. Pipe-friendly: reads stdin when no file is given.
"""

from __future__ import annotations

import argparse
import sys

from .config import get_config
from .dom import Node, SproutError
from .formats import json as _json  # noqa: F401 - ensure json format is registered
from .formats import outline as _outline  # noqa: F401 - ensure outline format is registered
from .formats.base import FormatStrategy, registry


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    cfg = get_config()

    parser = argparse.ArgumentParser(
        prog="sprout",
        description="Build markup from an outline and print it",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--type",
        "-t",
        dest="format_type",
        type=str,
        help=f"Force source format by name or extension (one of: {', '.join(registry.names)})",
    )

    parser.add_argument(
        "--limit",
        "-l",
        type=int,
        default=cfg.output.limit,
        help=f"Max characters of markup to print, 0 for no limit (default: {cfg.output.limit})",
    )

    parser.add_argument(
        "--no-newline",
        "-n",
        action="store_false",
        dest="trailing_newline",
        default=cfg.output.trailing_newline,
        help="Do not print a trailing newline after the markup",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[str, str | None]:
    """Read content from file or stdin. Returns (content, filename)."""
    if filepath:
        with open(filepath, encoding="utf-8") as f:
            return f.read(), filepath
    return sys.stdin.read(), None


def get_strategy(
    content: str,
    filename: str | None,
    force_type: str | None,
) -> FormatStrategy:
    """Get format strategy via override, detection, or fallback to outline."""
    if force_type:
        strategy = registry.get_by_name(force_type) or registry.get_by_extension(force_type)
        if strategy:
            return strategy
        raise ValueError(
            f"Unknown format type: {force_type} (known: {', '.join(registry.names)})"
        )

    strategy = registry.detect(content, filename)
    if strategy:
        return strategy

    fallback = registry.get_by_name("outline")
    if fallback:
        return fallback

    raise RuntimeError("No format strategy available")


def build(
    content: str,
    filename: str | None = None,
    format_type: str | None = None,
) -> Node:
    """Build a markup tree from source content."""
    strategy = get_strategy(content, filename, format_type)
    return strategy.build(content)


def apply_output_limit(output: str, limit: int) -> tuple[str, str | None]:
    """
    Cut output to limit characters.

    Returns (output, note) where note explains the cut, or None if the
    output fit.
    """
    if limit <= 0 or len(output) <= limit:
        return output, None

    note = (
        f"[OUTPUT TRUNCATED: {len(output):,} chars exceeds --limit {limit:,}]\n"
        f"Raise limit: --limit {len(output)} or --limit 0 for no limit"
    )
    return output[:limit], note


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    try:
        content, filename = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        document = build(content, filename, parsed.format_type)
    except (SproutError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output, note = apply_output_limit(document.string(), parsed.limit)
    if note:
        print(note, file=sys.stderr)

    print(output, end="\n" if parsed.trailing_newline else "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
