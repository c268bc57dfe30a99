"""Protocol definitions for Postmatter.

This module defines the interfaces used to plug new front matter fields
and new document sources into the parser and loader without modifying
them.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FieldParser(Protocol):
    """Protocol for a recognized front matter field.

    Each implementation owns one key: it converts the raw YAML value into
    the typed document attribute and formats it back for serialization.
    """

    name: str
    attribute: str
    required: bool
    default: Any

    @abstractmethod
    def parse(self, value: Any, line: int | None) -> Any:
        """Convert a raw front matter value.

        Args:
            value: Value as loaded by YAML.
            line: 1-based line of the key in the source file, if known.

        Returns:
            The typed value stored on the document.

        Raises:
            MalformedField: If the value cannot be used.
        """
        ...

    @abstractmethod
    def format(self, value: Any) -> str:
        """Format a typed value as a YAML scalar."""
        ...


@runtime_checkable
class DocumentLoader(Protocol):
    """Protocol for discovering content files."""

    @abstractmethod
    def iter_files(self) -> list[Path]:
        """Return paths to all candidate content files."""
        ...
