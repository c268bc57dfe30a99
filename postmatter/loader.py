"""Content directory loading for Postmatter.

This module discovers markdown files under a content directory and parses
each one independently. A file that fails to parse does not stop the
others: its error is collected with the file path attached so the caller
can decide whether to reject the whole build or skip the document.

Key classes:
- FileDocumentLoader: Discovers content files on disk.
- LoadResult: Parsed documents plus per-file errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .collections import DocumentCollection
from .document import ContentDocument
from .errors import DocumentError
from .frontmatter import FrontmatterValidator
from .parser import load
from .utils import is_internal_path, is_markdown

logger = logging.getLogger(__name__)


class FileDocumentLoader:
    """Finds content files in a directory.

    Attributes:
        content_dir: Directory containing content files.
    """

    def __init__(self, content_dir: Path):
        """Initialize the loader.

        Args:
            content_dir: Path to the content directory.
        """
        self.content_dir = Path(content_dir)

    def iter_files(self) -> list[Path]:
        """Return all markdown files, sorted by path.

        Files inside directories starting with ``_`` or ``.`` are skipped.

        Returns:
            List of paths to content files.
        """
        files: list[Path] = []
        if not self.content_dir.is_dir():
            logger.debug("Content directory %s does not exist", self.content_dir)
            return files
        for path in self.content_dir.rglob("*"):
            if path.is_dir():
                continue
            rel = path.relative_to(self.content_dir)
            if is_internal_path(rel):
                logger.debug("Skipping internal file %s", rel)
                continue
            if is_markdown(path):
                files.append(path)
        return sorted(files)


@dataclass
class LoadResult:
    """Result of loading a content directory.

    Attributes:
        documents: Successfully parsed documents.
        errors: One DocumentError per file that failed, with source_path set.
        paths: Source path of each document, keyed by position in documents.
    """

    documents: DocumentCollection
    errors: list[DocumentError] = field(default_factory=list)
    paths: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def items(self) -> list[tuple[Path, ContentDocument]]:
        """Pair each document with the path it was loaded from."""
        return list(zip(self.paths, self.documents))


def load_directory(
    content_dir: Path,
    include_drafts: bool = False,
    loader=None,
    validator: FrontmatterValidator | None = None,
) -> LoadResult:
    """Parse every content file under a directory.

    Args:
        content_dir: Directory to scan.
        include_drafts: Whether draft documents are kept in the result.
        loader: Optional DocumentLoader; defaults to FileDocumentLoader.
        validator: Optional validator with extra recognized fields.

    Returns:
        LoadResult with parsed documents and collected errors.
    """
    loader = loader or FileDocumentLoader(content_dir)
    documents: list[ContentDocument] = []
    paths: list[Path] = []
    errors: list[DocumentError] = []
    for path in loader.iter_files():
        try:
            document = load(path, validator)
        except DocumentError as exc:
            logger.warning("Could not parse %s", exc)
            errors.append(exc)
            continue
        if document.draft and not include_drafts:
            logger.debug("Skipping draft %s", path)
            continue
        documents.append(document)
        paths.append(path)
    return LoadResult(documents=DocumentCollection(documents), errors=errors, paths=paths)
