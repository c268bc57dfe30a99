"""Content document model for Postmatter.

A ContentDocument is the parsed form of one markdown file: the three
recognized front matter fields, any unrecognized keys, and the body text
exactly as it appeared after the closing delimiter.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .utils import first_paragraph, slugify


@dataclass(frozen=True)
class ContentDocument:
    """Represents a content file with its metadata and body.

    Attributes:
        title: Human-readable headline.
        published_at: Authored publish time, timezone-aware.
        draft: Whether the document is declared a draft.
        body: Markdown body, verbatim. Never interpreted by this package.
        extra: Unrecognized front matter keys, preserved as parsed.
    """

    title: str
    published_at: datetime
    draft: bool = False
    body: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def published(self) -> bool:
        return not self.draft

    @property
    def slug(self) -> str:
        return slugify(self.title)

    @property
    def excerpt(self) -> str:
        """First prose paragraph of the body."""
        return first_paragraph(self.body)

    def with_changes(self, **changes: Any) -> ContentDocument:
        """Return a copy of this document with the given fields replaced.

        Args:
            **changes: Field names mapped to their new values.

        Returns:
            A new ContentDocument; this one is left untouched.
        """
        return dataclasses.replace(self, **changes)
