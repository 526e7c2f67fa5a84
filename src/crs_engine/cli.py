"""CLI for the CRS engine.

Commands:
- score: Score a JSON answer file and print the category breakdown
- normalize: Convert one test's raw scores to CLB levels
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from . import __version__
from .application.calculate import CalculationResult, run_calculation
from .application.intake import build_proficiency_profile
from .config import EngineConfig
from .config_file import load_engine_config_file
from .domain.language import SKILLS, LanguageTest
from .domain.points import SecondLanguageSchedule
from .exceptions import CrsEngineError
from .protocols import FileSystem


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: EngineConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: EngineConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, *, config: EngineConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the crs-score entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"crs-score {__version__}")
        raise typer.Exit()


def _breakdown_table(result: CalculationResult) -> Table:
    table = Table(title="CRS score breakdown")
    table.add_column("Category")
    table.add_column("Points", justify="right")
    for category, points in result.breakdown.categories.items():
        table.add_row(category, str(points))
    table.add_row("[bold]total[/bold]", f"[bold]{result.breakdown.total}[/bold]")
    return table


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Comprehensive Ranking System (CRS) score calculator",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_file: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file overriding environment settings",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = EngineConfig.from_env()
        if config_file is not None:
            deps = deps_builder(config=config)
            try:
                file_config = load_engine_config_file(path=config_file, fs=deps.fs)
            except CrsEngineError as exc:
                raise typer.BadParameter(str(exc), param_hint="--config") from exc
            config = config.with_file_overrides(file_config)
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def score(
        ctx: typer.Context,
        profile_path: Annotated[
            Path,
            typer.Option(
                "--input",
                "-i",
                help="JSON file of collected candidate answers",
            ),
        ],
        out_path: Annotated[
            Path | None,
            typer.Option(
                "--output",
                "-o",
                help="Write the breakdown as JSON to this path",
            ),
        ] = None,
        schedule: Annotated[
            SecondLanguageSchedule | None,
            typer.Option(
                "--second-language-schedule",
                help="Second official language point schedule",
            ),
        ] = None,
        cap: Annotated[
            int | None,
            typer.Option(
                "--cap",
                min=1,
                help="Cap the reported total (the breakdown stays unclamped)",
            ),
        ] = None,
    ) -> None:
        """Score a candidate answer file."""
        state = _get_context(ctx)
        config = state.config
        if schedule is not None or cap is not None:
            config = config.with_overrides(second_language_schedule=schedule, total_cap=cap)

        deps = state.build_dependencies(config=config)
        try:
            result = run_calculation(
                profile_path=profile_path,
                config=config,
                fs=deps.fs,
                out_path=out_path,
            )
        except CrsEngineError as exc:
            rprint(f"[red]✗ {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from exc

        rprint(_breakdown_table(result))
        rprint(f"[green]✓ CRS score:[/green] {result.reported_total}")
        if result.output_path is not None:
            rprint(f"  Breakdown: {result.output_path}")

    @app.command(name="normalize")
    def normalize_command(
        test: Annotated[
            LanguageTest,
            typer.Option("--test", "-t", case_sensitive=False, help="Language test taken"),
        ],
        speaking: Annotated[float, typer.Option("--speaking", help="Speaking raw score")],
        listening: Annotated[float, typer.Option("--listening", help="Listening raw score")],
        reading: Annotated[float, typer.Option("--reading", help="Reading raw score")],
        writing: Annotated[float, typer.Option("--writing", help="Writing raw score")],
    ) -> None:
        """Convert raw test scores to CLB levels."""
        try:
            profile = build_proficiency_profile(
                test,
                {
                    "speaking": speaking,
                    "listening": listening,
                    "reading": reading,
                    "writing": writing,
                },
                source="command-line scores",
            )
        except CrsEngineError as exc:
            rprint(f"[red]✗ {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from exc

        rprint(f"[green]✓ {test.value} → CLB:[/green]")
        for skill in SKILLS:
            rprint(f"  {skill.value}: {profile.for_skill(skill)}")

    _ = (main, score, normalize_command)

    return app
