"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .config import EngineConfig
from .infrastructure import LocalFileSystem


def build_cli_dependencies(*, config: EngineConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Engine configuration (unused by the local filesystem today).
    """
    _ = config
    return CliDependencies(fs=LocalFileSystem())


app = create_app(build_cli_dependencies)
