"""Error types raised while parsing content documents.

Every failure is a DocumentError subclass so callers can catch the whole
family at once, or a specific kind when they care which field was wrong.

Key classes:
- MissingMetadataBlock: No opening/closing ``---`` delimiter pair.
- MalformedMetadata: The block is not a YAML mapping.
- MissingRequiredField: ``title`` or ``date`` absent.
- MalformedField: A recognized field is present but invalid.
"""

from __future__ import annotations

from pathlib import Path


class DocumentError(Exception):
    """Error while parsing a content document, with location context.

    Attributes:
        message: Human-readable error message.
        line: 1-based line number in the source text, if known.
        source_path: Path to the file being parsed, if parsed from disk.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        source_path: Path | None = None,
    ):
        self.message = message
        self.line = line
        self.source_path = source_path
        super().__init__(message)

    def with_path(self, source_path: Path) -> DocumentError:
        """Attach the source file path and return the same error."""
        self.source_path = source_path
        return self

    @property
    def location(self) -> str:
        """Return ``path:line``, ``path`` or ``line N`` depending on what is known."""
        if self.source_path is not None and self.line is not None:
            return f"{self.source_path}:{self.line}"
        if self.source_path is not None:
            return str(self.source_path)
        if self.line is not None:
            return f"line {self.line}"
        return ""

    def __str__(self) -> str:
        location = self.location
        return f"{location}: {self.message}" if location else self.message


class MissingMetadataBlock(DocumentError):
    """No front matter block delimited by two ``---`` lines."""

    def __init__(self, reason: str = "no front matter block found", line: int | None = None):
        super().__init__(reason, line=line)


class MalformedMetadata(DocumentError):
    """The front matter block could not be read as a YAML mapping."""

    def __init__(self, reason: str, line: int | None = None):
        self.reason = reason
        super().__init__(f"malformed front matter: {reason}", line=line)


class MissingRequiredField(DocumentError):
    """A required front matter field is absent."""

    def __init__(self, field: str, line: int | None = None):
        self.field = field
        super().__init__(f"missing required field '{field}'", line=line)


class MalformedField(DocumentError):
    """A front matter field is present but cannot be used."""

    def __init__(self, field: str, reason: str, line: int | None = None):
        self.field = field
        self.reason = reason
        super().__init__(f"malformed field '{field}': {reason}", line=line)
