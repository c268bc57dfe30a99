"""Markdown body outline for Postmatter.

The body of a ContentDocument is stored verbatim and never interpreted.
When a caller needs its structure (to index headings, list code samples
or check links) this module breaks it into block elements using mistune's
AST renderer. Code block contents are returned as text only.

Key classes:
- Block: One top-level block element (heading, paragraph, code, ...).
- Link: A ``[text](url)`` hyperlink found anywhere in the body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import mistune

BLOCK_KINDS = {
    "heading": "heading",
    "paragraph": "paragraph",
    "block_code": "code",
    "block_quote": "quote",
    "list": "list",
    "thematic_break": "rule",
    "block_html": "html",
    "table": "table",
}

# Children of these tokens are separate lines rather than inline runs.
_LINE_CONTAINERS = {"block_quote", "list", "list_item", "table", "table_head", "table_body"}


@dataclass(frozen=True)
class Block:
    """A top-level markdown block element.

    Attributes:
        kind: One of heading, paragraph, code, quote, list, rule, html, table.
        text: Plain text of the block; raw source for code and html.
        level: Heading level (1-6), headings only.
        language: Language from a fenced code block's info string.
        annotation: Rest of the info string, e.g. ``{1,3}``.
    """

    kind: str
    text: str
    level: int | None = None
    language: str | None = None
    annotation: str | None = None


@dataclass(frozen=True)
class Link:
    """A hyperlink in the body."""

    text: str
    url: str
    title: str | None = None


def _parse_tokens(body: str) -> list[dict[str, Any]]:
    markdown = mistune.create_markdown(renderer="ast", plugins=["strikethrough", "table"])
    return markdown(body)


def split_info(info: str | None) -> tuple[str | None, str | None]:
    """Split a fenced code info string into language and annotation.

    Args:
        info: Text after the opening fence, e.g. ``dart {1,3}``.

    Returns:
        Tuple of (language, annotation); either may be None.

    Examples:
        >>> split_info("dart {1,3}")
        ('dart', '{1,3}')
    """
    if not info or not info.strip():
        return None, None
    parts = info.strip().split(None, 1)
    language = parts[0]
    annotation = parts[1].strip() if len(parts) > 1 else None
    if language.startswith("{"):
        return None, info.strip()
    return language, annotation or None


def _plain_text(token: dict[str, Any]) -> str:
    kind = token.get("type")
    if kind == "softbreak":
        return " "
    if kind == "linebreak":
        return "\n"
    children = token.get("children")
    if children:
        separator = "\n" if kind in _LINE_CONTAINERS else ""
        parts = [_plain_text(child) for child in children]
        return separator.join(part for part in parts if part or not separator)
    return token.get("raw", "")


def _to_block(token: dict[str, Any]) -> Block | None:
    kind = BLOCK_KINDS.get(token.get("type", ""))
    if kind is None:
        return None
    attrs = token.get("attrs") or {}
    if kind == "code":
        language, annotation = split_info(attrs.get("info"))
        return Block(
            kind=kind,
            text=token.get("raw", ""),
            language=language,
            annotation=annotation,
        )
    if kind == "html":
        return Block(kind=kind, text=token.get("raw", ""))
    if kind == "rule":
        return Block(kind=kind, text="")
    level = attrs.get("level") if kind == "heading" else None
    return Block(kind=kind, text=_plain_text(token).strip(), level=level)


def outline(body: str) -> list[Block]:
    """Break a markdown body into its top-level block elements.

    Args:
        body: Markdown text.

    Returns:
        Blocks in document order. Blank lines are dropped.
    """
    blocks: list[Block] = []
    for token in _parse_tokens(body):
        block = _to_block(token)
        if block is not None:
            blocks.append(block)
    return blocks


def headings(body: str) -> list[Block]:
    return [block for block in outline(body) if block.kind == "heading"]


def code_blocks(body: str) -> list[Block]:
    return [block for block in outline(body) if block.kind == "code"]


def links(body: str) -> list[Link]:
    """Collect every hyperlink in the body, in document order.

    Args:
        body: Markdown text.

    Returns:
        List of Link objects. Images are not included.
    """
    found: list[Link] = []

    def walk(tokens: list[dict[str, Any]]) -> None:
        for token in tokens:
            if token.get("type") == "link":
                attrs = token.get("attrs") or {}
                found.append(
                    Link(
                        text=_plain_text(token),
                        url=attrs.get("url", ""),
                        title=attrs.get("title"),
                    )
                )
                continue
            walk(token.get("children") or [])

    walk(_parse_tokens(body))
    return found
