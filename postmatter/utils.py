"""Utility functions for Postmatter.

This module contains string and path helpers shared by the parser, the
loader and the CLI.

Key functions:
    slugify: Convert titles or filenames to URL slugs.
    strip_date_prefix: Drop a YYYY-MM-DD- prefix from a filename stem.
    first_paragraph: Extract the first prose paragraph of a markdown body.
    is_markdown: Check if a path is a Markdown file.
    is_internal_path: Check if a path lives under an ignored directory.
    now_with_offset: Current local time with its UTC offset attached.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path


def strip_date_prefix(name: str) -> str:
    """Remove a leading YYYY-MM-DD- prefix from a filename stem.

    Args:
        name: Filename stem.

    Returns:
        The stem without its date prefix, or unchanged if there is none.
    """
    parts = name.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        return "-".join(parts[3:])
    return name


def slugify(name: str) -> str:
    """Convert a title or filename stem to a slug, dropping any date prefix.

    Args:
        name: Title or filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("Functional Patterns in Flutter!")
        'functional-patterns-in-flutter'

        >>> slugify("2023-02-01-hello-world")
        'hello-world'
    """
    cleaned = strip_date_prefix(name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def first_paragraph(text: str) -> str:
    """Extract the first prose paragraph from markdown text.

    Skips headings, images, fenced code and horizontal rules, then
    collapses whitespace.

    Args:
        text: Markdown text content.

    Returns:
        The first paragraph as a single line, or an empty string.
    """
    in_fence = False
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(("```", "~~~")):
            in_fence = not in_fence
            if current:
                paragraphs.append("\n".join(current))
                current = []
            continue
        if in_fence:
            continue
        if not stripped:
            if current:
                paragraphs.append("\n".join(current))
                current = []
            continue
        current.append(stripped)
    if current:
        paragraphs.append("\n".join(current))

    for para in paragraphs:
        if para.startswith(("#", "![", "---", "***", "<")):
            continue
        return " ".join(para.split())
    return ""


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md or .markdown extension (case-insensitive).
    """
    return path.suffix.lower() in (".md", ".markdown")


def is_internal_path(path: Path) -> bool:
    """Check if a path is internal (a component starts with ``_`` or ``.``).

    Args:
        path: Path to check, relative to the content directory.

    Returns:
        True if any directory component is hidden or underscore-prefixed.
    """
    return any(part.startswith(("_", ".")) for part in path.parts[:-1])


def now_with_offset() -> datetime:
    """Return the current local time, truncated to seconds, with its UTC offset."""
    return datetime.now().astimezone().replace(microsecond=0)
