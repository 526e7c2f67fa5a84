"""Centralised, injectable configuration for the CRS engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import EngineConfigFile
from .domain.points import SecondLanguageSchedule
from .exceptions import SecondLanguageScheduleError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class LogLevelEnvVarError(ValueError):
    """Raised when an environment variable must be a logging level name."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be one of: {', '.join(sorted(_LOG_LEVELS))}.")


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for score calculations.

    Load from environment with `EngineConfig.from_env()` or construct directly for testing.
    """

    second_language_schedule: SecondLanguageSchedule = SecondLanguageSchedule.FORM
    # Caller-side cap on the reported total; the engine itself never clamps.
    total_cap: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            EngineConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            second_language_schedule=parse_second_language_schedule(
                os.getenv("CRS_SECOND_LANGUAGE_SCHEDULE", "form")
            ),
            total_cap=_parse_optional_positive_int(
                os.getenv("CRS_TOTAL_CAP", ""),
                env_name="CRS_TOTAL_CAP",
            ),
            log_level=_parse_log_level(
                os.getenv("CRS_LOG_LEVEL", "INFO"),
                env_name="CRS_LOG_LEVEL",
            ),
        )

    def with_overrides(
        self,
        *,
        second_language_schedule: SecondLanguageSchedule | None = None,
        total_cap: int | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            second_language_schedule=self.second_language_schedule
            if second_language_schedule is None
            else second_language_schedule,
            total_cap=self.total_cap if total_cap is None else total_cap,
        )

    def with_file_overrides(self, file_config: EngineConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            second_language_schedule=self.second_language_schedule
            if file_config.second_language_schedule is None
            else file_config.second_language_schedule,
            total_cap=self.total_cap if file_config.total_cap is None else file_config.total_cap,
            log_level=self.log_level if file_config.log_level is None else file_config.log_level,
        )


def parse_second_language_schedule(value: str) -> SecondLanguageSchedule:
    """Parse a schedule name, defaulting blank values to the form schedule."""
    text = value.strip().lower()
    if not text:
        return SecondLanguageSchedule.FORM
    try:
        return SecondLanguageSchedule(text)
    except ValueError as exc:
        allowed = tuple(schedule.value for schedule in SecondLanguageSchedule)
        raise SecondLanguageScheduleError(text, allowed) from exc


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_log_level(value: str, *, env_name: str) -> str:
    text = value.strip().upper() or "INFO"
    if text not in _LOG_LEVELS:
        raise LogLevelEnvVarError(env_name)
    return text
