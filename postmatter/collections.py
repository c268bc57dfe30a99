from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .document import ContentDocument


class DocumentCollection(Sequence[ContentDocument]):
    """Lightweight helper for working with lists of ContentDocuments."""

    def __init__(self, documents: Iterable[ContentDocument]):
        self._documents = list(documents)

    def __iter__(self) -> Iterator[ContentDocument]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        return self._documents[item]

    def drafts(self) -> DocumentCollection:
        return DocumentCollection(d for d in self._documents if d.draft)

    def published(self) -> DocumentCollection:
        return DocumentCollection(d for d in self._documents if not d.draft)

    def sorted(self, reverse: bool = True) -> DocumentCollection:
        """Sort documents by publish time, then by title.

        Publish times with different UTC offsets compare by the instant
        they denote.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new DocumentCollection with sorted documents.
        """

        def sort_key(d: ContentDocument):
            return (d.published_at, d.title.lower())

        return DocumentCollection(sorted(self._documents, key=sort_key, reverse=reverse))

    def latest(self, count: int = 5) -> DocumentCollection:
        return DocumentCollection(self.sorted()[:count])

    def find(self, slug: str) -> ContentDocument | None:
        for document in self._documents:
            if document.slug == slug:
                return document
        return None

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"DocumentCollection({len(self._documents)} documents)"
