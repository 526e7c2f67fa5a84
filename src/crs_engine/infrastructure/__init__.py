"""Concrete infrastructure implementations and shared helpers."""

from .filesystem import LocalFileSystem
from .validation import IncomingDataError, validate_as, validate_json_as

__all__ = [
    "IncomingDataError",
    "LocalFileSystem",
    "validate_as",
    "validate_json_as",
]
