"""Tests for shared observability logging."""

import logging
import time

import pytest

from crs_engine.observability.logging import get_logger


def test_get_logger_formats_utc_timestamps(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fixed = time.struct_time((2020, 1, 2, 3, 4, 5, 3, 2, 0))

    def fake_gmtime(_: float | None = None) -> time.struct_time:
        return fixed

    monkeypatch.setattr(time, "gmtime", fake_gmtime)

    name = "crs_engine.test.logging"
    logger = get_logger(name)
    logger.info("Hello")

    captured = capsys.readouterr()
    assert "2020-01-02T03:04:05+0000 INFO crs_engine.test.logging: Hello" in captured.err


def test_get_logger_is_singleton_per_name() -> None:
    name = "crs_engine.test.logging.singleton"
    logger = get_logger(name)
    logger_again = get_logger(name, level=logging.DEBUG)

    assert logger is logger_again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_get_logger_reapplies_level_on_each_call(capsys: pytest.CaptureFixture[str]) -> None:
    name = "crs_engine.test.logging.relevel"
    get_logger(name, level="WARNING").info("hidden")
    get_logger(name, level="INFO").info("shown")

    captured = capsys.readouterr()
    assert "hidden" not in captured.err
    assert "shown" in captured.err


def test_get_logger_accepts_level_name() -> None:
    logger = get_logger("crs_engine.test.logging.level", level="WARNING")

    assert logger.level == logging.WARNING
    assert logger.propagate is False
