"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces the application layer depends
on, enabling isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading answer files and writing results."""

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file."""
        ...

    def write_text(self, content: str, path: Path) -> None:
        """Write a UTF-8 text file, creating parent directories."""
        ...

    def read_json(self, path: Path) -> dict[str, object]:
        """Read a JSON object from a file."""
        ...

    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        """Write a JSON object to a file, creating parent directories."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""
        ...
