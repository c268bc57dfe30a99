"""Parsing and serialization of content documents.

parse() and serialize() are pure functions over strings. load() and dump()
are the file-level wrappers; errors raised by load() carry the path of the
file that failed.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import yaml

from .document import ContentDocument
from .errors import DocumentError
from .frontmatter import (
    DELIMITER,
    FrontmatterValidator,
    default_validator,
    load_metadata,
    split,
)

DOCUMENT_FIELDS = {f.name for f in dataclasses.fields(ContentDocument)} - {"body", "extra"}


def parse(text: str, validator: FrontmatterValidator | None = None) -> ContentDocument:
    """Parse raw file text into a ContentDocument.

    Args:
        text: Raw contents of one content file.
        validator: Optional validator with extra recognized fields.

    Returns:
        The parsed document.

    Raises:
        MissingMetadataBlock: If the ``---`` delimiter pair is missing.
        MalformedMetadata: If the block is not a YAML mapping.
        MissingRequiredField: If ``title`` or ``date`` is absent.
        MalformedField: If a recognized field has an invalid value.
    """
    validator = validator or default_validator
    block = split(text)
    data, lines = load_metadata(block)
    values, extra = validator.validate(data, lines, block_line=block.start_line)
    # Fields registered beyond the document's own attributes land in extra
    for attribute in [name for name in values if name not in DOCUMENT_FIELDS]:
        value = values.pop(attribute)
        if value is not None:
            extra[attribute] = value
    return ContentDocument(body=block.body, extra=extra, **values)


def serialize(
    document: ContentDocument, validator: FrontmatterValidator | None = None
) -> str:
    """Render a ContentDocument back to file text.

    Recognized fields come first in a fixed order, followed by the
    unrecognized keys in their original order, then the body verbatim.

    Args:
        document: Document to serialize.
        validator: Optional validator matching the one used to parse.

    Returns:
        Text that parse() turns back into an equal document.
    """
    validator = validator or default_validator
    lines = [DELIMITER]
    for field_parser in validator.fields:
        if field_parser.attribute in DOCUMENT_FIELDS:
            value = getattr(document, field_parser.attribute)
        elif field_parser.attribute in document.extra:
            value = document.extra[field_parser.attribute]
        else:
            continue
        lines.append(f"{field_parser.name}: {field_parser.format(value)}")
    recognized = {field_parser.attribute for field_parser in validator.fields}
    extra = {key: value for key, value in document.extra.items() if key not in recognized}
    if extra:
        dumped = yaml.safe_dump(
            extra,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        lines.append(dumped.rstrip("\n"))
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n" + document.body


def load(path: Path, validator: FrontmatterValidator | None = None) -> ContentDocument:
    """Read and parse a content file.

    Args:
        path: Path to a UTF-8 markdown file.
        validator: Optional validator with extra recognized fields.

    Returns:
        The parsed document.

    Raises:
        DocumentError: With source_path set to ``path``.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError(f"not valid UTF-8: {exc.reason}", source_path=path) from exc
    except OSError as exc:
        raise DocumentError(
            f"could not read file: {exc.strerror or exc}", source_path=path
        ) from exc
    try:
        return parse(text, validator)
    except DocumentError as exc:
        exc.with_path(path)
        raise


def dump(
    document: ContentDocument,
    path: Path,
    validator: FrontmatterValidator | None = None,
) -> None:
    """Write a document to disk as UTF-8.

    Args:
        document: Document to write.
        path: Destination file; parent directories are created.
        validator: Optional validator matching the one used to parse.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(document, validator), encoding="utf-8")
