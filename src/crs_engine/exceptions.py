"""Custom exceptions for the CRS engine.

The scoring domain never raises: it substitutes category defaults. These
exceptions belong to the layers around it (intake, configuration).
"""

from __future__ import annotations


class CrsEngineError(Exception):
    """Base exception for all CRS engine errors."""

    pass


class CandidateFileNotFoundError(CrsEngineError):
    """Raised when a candidate answer file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Candidate answer file not found: {path}")


class CandidateInputValidationError(CrsEngineError):
    """Raised when collected answers cannot form a candidate profile.

    The message names the first offending field so a collection surface can
    ask the question again.
    """

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid candidate answers in {source}: {detail}")


class ConfigFileNotFoundError(CrsEngineError):
    """Raised when an explicitly requested config file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(CrsEngineError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(CrsEngineError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} failed validation: {detail}")


class SecondLanguageScheduleError(CrsEngineError, ValueError):
    """Raised when an unknown second-language schedule is configured."""

    def __init__(self, value: str, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"Unknown second-language schedule {value!r}. Expected one of: {', '.join(allowed)}."
        )
