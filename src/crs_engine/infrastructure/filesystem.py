"""Local filesystem implementation.

Usage example:
    from pathlib import Path

    from crs_engine.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    fs.write_json({"total": 382}, Path("out/score.json"))
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import override

from ..protocols import FileSystem
from .validation import IncomingDataError, validate_json_as


class LocalFileSystem(FileSystem):
    """Local filesystem implementation."""

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @override
    def write_text(self, content: str, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    @override
    def read_json(self, path: Path) -> dict[str, object]:
        payload = path.read_text(encoding="utf-8")
        try:
            return validate_json_as(dict[str, object], payload)
        except IncomingDataError as exc:
            raise RuntimeError("JSON file must contain an object.") from exc

    @override
    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(dict(data), ensure_ascii=False, indent=2), encoding="utf-8")

    @override
    def exists(self, path: Path) -> bool:
        return path.exists()
