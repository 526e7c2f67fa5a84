"""Typed parsing and validation for engine config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .domain.points import SecondLanguageSchedule
from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class EngineConfigFile:
    """Validated engine config values loaded from a TOML file."""

    second_language_schedule: SecondLanguageSchedule | None = None
    total_cap: int | None = None
    log_level: str | None = None


class _EngineSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    second_language_schedule: SecondLanguageSchedule | None = None
    total_cap: int | None = None
    log_level: str | None = None

    @field_validator("second_language_schedule", mode="before")
    @classmethod
    def _normalise_schedule(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("total_cap")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError
        return level


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    engine: _EngineSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def format_validation_error(exc: ValidationError) -> str:
    """Render the first pydantic error as ``location: message``."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_engine_config_file(*, path: Path, fs: FileSystem) -> EngineConfigFile:
    """Load and validate an engine TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), format_validation_error(exc)) from exc

    section = model.engine
    return EngineConfigFile(
        second_language_schedule=section.second_language_schedule,
        total_cap=section.total_cap,
        log_level=section.log_level,
    )
