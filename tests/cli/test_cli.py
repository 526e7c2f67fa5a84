"""Tests for CLI wiring and overrides."""

import re
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from crs_engine import cli
from crs_engine.application.calculate import CalculationResult
from crs_engine.cli import CliDependencies
from crs_engine.config import EngineConfig
from crs_engine.domain.points import SecondLanguageSchedule
from crs_engine.protocols import FileSystem
from tests.fakes import InMemoryFileSystem
from tests.support.answers import make_answers

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


def _patch_config(monkeypatch: pytest.MonkeyPatch, config: EngineConfig | None = None) -> None:
    def fake_from_env(cls: type[EngineConfig], dotenv_path: str | None = None) -> EngineConfig:
        _ = (cls, dotenv_path)
        return config or EngineConfig()

    monkeypatch.setattr(cli.EngineConfig, "from_env", classmethod(fake_from_env))


def _build_app_with_fs(fs: InMemoryFileSystem) -> typer.Typer:
    def build(*, config: EngineConfig) -> CliDependencies:
        _ = config
        return CliDependencies(fs=fs)

    return cli.create_app(build)


def test_cli_version_option_prints_package_version(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)
    monkeypatch.setattr(cli, "__version__", "9.9.9", raising=False)

    result = runner.invoke(_build_app_with_fs(InMemoryFileSystem()), ["--version"])

    assert result.exit_code == 0
    assert "9.9.9" in _strip_ansi(result.output)


def test_cli_score_prints_breakdown(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)
    fs = InMemoryFileSystem()
    fs.write_json(make_answers(), Path("candidate.json"))

    result = runner.invoke(_build_app_with_fs(fs), ["score", "--input", "candidate.json"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "first_language" in output
    assert "CRS score: 382" in output


def test_cli_score_writes_output(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)
    fs = InMemoryFileSystem()
    fs.write_json(make_answers(provincial_nomination=True), Path("candidate.json"))

    result = runner.invoke(
        _build_app_with_fs(fs),
        ["score", "-i", "candidate.json", "-o", "out/score.json"],
    )

    assert result.exit_code == 0, result.output
    assert fs.read_json(Path("out/score.json"))["total"] == 982


def test_cli_score_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch, EngineConfig(total_cap=1300))
    captured: dict[str, EngineConfig] = {}

    def fake_run_calculation(
        *,
        profile_path: Path,
        config: EngineConfig,
        fs: FileSystem,
        out_path: Path | None = None,
    ) -> CalculationResult:
        _ = (profile_path, fs, out_path)
        captured["config"] = config
        raise typer.Exit()

    monkeypatch.setattr(cli, "run_calculation", fake_run_calculation)

    result = runner.invoke(
        _build_app_with_fs(InMemoryFileSystem()),
        [
            "score",
            "-i",
            "candidate.json",
            "--second-language-schedule",
            "conversational",
            "--cap",
            "1200",
        ],
    )

    assert result.exit_code == 0, result.output
    config = captured["config"]
    assert config.second_language_schedule is SecondLanguageSchedule.CONVERSATIONAL
    assert config.total_cap == 1200


def test_cli_score_reports_invalid_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)
    fs = InMemoryFileSystem()
    fs.write_json(make_answers(age=12), Path("candidate.json"))

    result = runner.invoke(_build_app_with_fs(fs), ["score", "-i", "candidate.json"])

    assert result.exit_code == 1
    assert "age" in _strip_ansi(result.output)


def test_cli_score_missing_file(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)

    result = runner.invoke(
        _build_app_with_fs(InMemoryFileSystem()), ["score", "-i", "missing.json"]
    )

    assert result.exit_code == 1
    assert "not found" in _strip_ansi(result.output)


def test_cli_config_file_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)
    fs = InMemoryFileSystem()
    fs.write_text("schema_version = 1\n\n[engine]\ntotal_cap = 400\n", Path("engine.toml"))
    fs.write_json(make_answers(), Path("candidate.json"))

    result = runner.invoke(
        _build_app_with_fs(fs),
        ["--config", "engine.toml", "score", "-i", "candidate.json"],
    )

    assert result.exit_code == 0, result.output
    assert "CRS score: 382" in _strip_ansi(result.output)

    capped = runner.invoke(
        _build_app_with_fs(fs),
        ["--config", "engine.toml", "score", "-i", "candidate.json", "--cap", "300"],
    )

    assert capped.exit_code == 0, capped.output
    assert "CRS score: 300" in _strip_ansi(capped.output)


def test_cli_invalid_config_file_is_a_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)

    result = runner.invoke(
        _build_app_with_fs(InMemoryFileSystem()),
        ["--config", "missing.toml", "score", "-i", "candidate.json"],
    )

    assert result.exit_code == 2


def test_cli_normalize(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)

    result = runner.invoke(
        _build_app_with_fs(InMemoryFileSystem()),
        [
            "normalize",
            "--test",
            "tef",
            "--speaking",
            "393",
            "--listening",
            "280",
            "--reading",
            "181",
            "--writing",
            "100",
        ],
    )

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "speaking: 10" in output
    assert "listening: 8" in output
    assert "reading: 6" in output
    assert "writing: 3" in output


@pytest.mark.parametrize("test", ["celpip", "ielts"])
def test_cli_normalize_rejects_nan(monkeypatch: pytest.MonkeyPatch, test: str) -> None:
    _patch_config(monkeypatch)

    result = runner.invoke(
        _build_app_with_fs(InMemoryFileSystem()),
        [
            "normalize",
            "-t",
            test,
            "--speaking",
            "nan",
            "--listening",
            "7",
            "--reading",
            "7",
            "--writing",
            "7",
        ],
    )

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    output = _strip_ansi(result.output)
    assert "scores.speaking" in output
    assert "→ CLB" not in output


def test_cli_normalize_rejects_out_of_range_score(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_config(monkeypatch)

    result = runner.invoke(
        _build_app_with_fs(InMemoryFileSystem()),
        [
            "normalize",
            "-t",
            "CELPIP",
            "--speaking",
            "13",
            "--listening",
            "7",
            "--reading",
            "7",
            "--writing",
            "7",
        ],
    )

    assert result.exit_code == 1
    assert "outside" in _strip_ansi(result.output)
