"""Postmatter content document toolkit.

This package parses markdown content files with a YAML front matter block
(title, date, draft flag) into immutable ContentDocument values that a
static site generator can index and render.

The main entry points are parse() and load() in the parser module. The CLI
module provides commands for validating, listing and scaffolding posts.

Architecture:
- errors: Typed failures carrying field, line and source path.
- frontmatter: Splits the metadata block and validates recognized fields.
- parser: parse/serialize/load/dump for single documents.
- blocks: Optional outline of the markdown body (headings, code, links).
- loader/collections: Batch loading and filtering of a content directory.
"""

from .document import ContentDocument
from .errors import (
    DocumentError,
    MalformedField,
    MalformedMetadata,
    MissingMetadataBlock,
    MissingRequiredField,
)
from .parser import dump, load, parse, serialize

__all__ = [
    "ContentDocument",
    "DocumentError",
    "MalformedField",
    "MalformedMetadata",
    "MissingMetadataBlock",
    "MissingRequiredField",
    "__version__",
    "dump",
    "load",
    "parse",
    "serialize",
]
__version__ = "0.1.0"
