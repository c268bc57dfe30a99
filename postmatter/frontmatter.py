"""Front matter handling for Postmatter.

This module locates the ``---`` delimited metadata block at the top of a
content file, loads it as YAML and validates the recognized fields. Each
field is handled by its own parser class; FrontmatterValidator combines
them and keeps every unrecognized key for the caller.

Key classes:
- MetadataBlock: The raw block text, the body and their line positions.
- TitleField, DateField, DraftField: Parsers for the recognized keys.
- FrontmatterValidator: Runs the field parsers over a loaded mapping.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import yaml

from .errors import (
    MalformedField,
    MalformedMetadata,
    MissingMetadataBlock,
    MissingRequiredField,
)

if TYPE_CHECKING:
    from .protocols import FieldParser

DELIMITER = "---"
BOM = "\ufeff"

# PyYAML folds these inside double-quoted scalars unless escaped
YAML_LINE_BREAKS = {"\x85": "\\u0085", "\u2028": "\\u2028", "\u2029": "\\u2029"}


@dataclass(frozen=True)
class MetadataBlock:
    """The front matter block split out of a content file.

    Attributes:
        source: YAML text between the delimiters.
        body: Everything after the closing delimiter line, verbatim.
        start_line: 1-based line of the opening delimiter.
        end_line: 1-based line of the closing delimiter.
    """

    source: str
    body: str
    start_line: int
    end_line: int

    def file_line(self, yaml_line: int) -> int:
        """Map a 0-based line inside the block to a 1-based file line."""
        return self.start_line + 1 + yaml_line


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r\n") == DELIMITER


def split(text: str) -> MetadataBlock:
    """Split raw file text into its metadata block and body.

    The first line must be exactly ``---``; the block ends at the next
    line that is exactly ``---``. Lines end at ``\\n`` only.

    Args:
        text: Raw file contents.

    Returns:
        MetadataBlock with the YAML source and the verbatim body.

    Raises:
        MissingMetadataBlock: If either delimiter line is missing.
    """
    if text.startswith(BOM):
        text = text[len(BOM) :]
    lines = [line for line in re.split(r"(?<=\n)", text) if line]
    if not lines or not _is_delimiter(lines[0]):
        raise MissingMetadataBlock("document does not start with '---'", line=1)
    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            return MetadataBlock(
                source="".join(lines[1:index]),
                body="".join(lines[index + 1 :]),
                start_line=1,
                end_line=index + 1,
            )
    raise MissingMetadataBlock("no closing '---' delimiter", line=1)


def load_metadata(block: MetadataBlock) -> tuple[dict[Any, Any], dict[Any, int]]:
    """Load the block as a YAML mapping and record where each key sits.

    Args:
        block: Block returned by split().

    Returns:
        Tuple of (mapping, key -> 1-based file line).

    Raises:
        MalformedMetadata: If the YAML is invalid or not a mapping.
    """
    try:
        node = yaml.compose(block.source, Loader=yaml.SafeLoader)
        data = yaml.safe_load(block.source)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = block.file_line(mark.line) if mark is not None else None
        reason = getattr(exc, "problem", None) or str(exc)
        raise MalformedMetadata(reason, line=line) from exc

    if data is None:
        return {}, {}
    if not isinstance(data, dict):
        raise MalformedMetadata(
            f"expected key/value pairs, got {type(data).__name__}",
            line=block.start_line + 1,
        )

    lines: dict[Any, int] = {}
    if isinstance(node, yaml.MappingNode):
        for key_node, _ in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                lines[key_node.value] = block.file_line(key_node.start_mark.line)
    return data, lines


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 style timestamp string.

    Args:
        value: Timestamp such as ``2023-02-01T16:00:00-08:00``.

    Returns:
        datetime parsed from the string (may be naive).

    Raises:
        ValueError: If the string is not an ISO 8601 timestamp.
    """
    cleaned = value.strip()
    if cleaned[-1:] in ("Z", "z"):
        cleaned = cleaned[:-1] + "+00:00"
    return datetime.fromisoformat(cleaned)


class TitleField:
    """Required, non-empty string headline."""

    name = "title"
    attribute = "title"
    required = True
    default = None

    def parse(self, value: Any, line: int | None) -> str:
        if not isinstance(value, str):
            raise MalformedField(
                self.name, f"expected a string, got {type(value).__name__}", line=line
            )
        if not value.strip():
            raise MalformedField(self.name, "must not be empty", line=line)
        return value

    def format(self, value: str) -> str:
        quoted = json.dumps(value, ensure_ascii=False)
        for char, escape in YAML_LINE_BREAKS.items():
            quoted = quoted.replace(char, escape)
        return quoted


class DateField:
    """Required publish timestamp with a time of day and UTC offset.

    YAML turns unquoted timestamps into datetime objects on its own;
    quoted ones arrive as strings and are parsed here.
    """

    name = "date"
    attribute = "published_at"
    required = True
    default = None

    def parse(self, value: Any, line: int | None) -> datetime:
        if isinstance(value, datetime):
            timestamp = value
        elif isinstance(value, date):
            raise MalformedField(self.name, "date has no time of day", line=line)
        elif isinstance(value, str):
            try:
                timestamp = parse_timestamp(value)
            except ValueError:
                raise MalformedField(
                    self.name, f"not a valid timestamp: {value!r}", line=line
                ) from None
        else:
            raise MalformedField(
                self.name,
                f"expected a timestamp, got {type(value).__name__}",
                line=line,
            )
        if timestamp.tzinfo is None or timestamp.utcoffset() is None:
            raise MalformedField(self.name, "timestamp has no UTC offset", line=line)
        return timestamp

    def format(self, value: datetime) -> str:
        return value.isoformat()


class DraftField:
    """Optional boolean draft flag, false when omitted."""

    name = "draft"
    attribute = "draft"
    required = False
    default = False

    def parse(self, value: Any, line: int | None) -> bool:
        if not isinstance(value, bool):
            raise MalformedField(self.name, "expected true or false", line=line)
        return value

    def format(self, value: bool) -> str:
        return "true" if value else "false"


class FrontmatterValidator:
    """Combines field parsers into one validation pass.

    Fields are checked in registration order, so the first missing or
    malformed field is the one reported.
    """

    def __init__(self, fields: list[FieldParser] | None = None):
        """Initialize with a list of field parsers.

        Args:
            fields: FieldParser implementations. If None, uses title,
                date and draft.
        """
        if fields is None:
            self._fields = [TitleField(), DateField(), DraftField()]
        else:
            self._fields = list(fields)

    @property
    def fields(self) -> list[FieldParser]:
        return list(self._fields)

    def add_field(self, field_parser: FieldParser) -> None:
        """Register another recognized key.

        Args:
            field_parser: A FieldParser implementation.
        """
        self._fields.append(field_parser)

    def validate(
        self,
        data: dict[Any, Any],
        lines: dict[Any, int],
        block_line: int = 1,
    ) -> tuple[dict[str, Any], dict[Any, Any]]:
        """Validate recognized fields and collect the rest.

        Args:
            data: Mapping loaded from the block.
            lines: Key to file line mapping from load_metadata().
            block_line: Line reported for missing fields.

        Returns:
            Tuple of (attribute -> typed value, unrecognized keys).

        Raises:
            MissingRequiredField: If a required key is absent.
            MalformedField: If a key is present but invalid.
        """
        values: dict[str, Any] = {}
        for field_parser in self._fields:
            if field_parser.name not in data:
                if field_parser.required:
                    raise MissingRequiredField(field_parser.name, line=block_line)
                values[field_parser.attribute] = field_parser.default
                continue
            values[field_parser.attribute] = field_parser.parse(
                data[field_parser.name], lines.get(field_parser.name)
            )
        known = {field_parser.name for field_parser in self._fields}
        extra = {key: value for key, value in data.items() if key not in known}
        return values, extra


default_validator = FrontmatterValidator()
