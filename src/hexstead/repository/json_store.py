"""JSON file store for Hexstead save blobs."""

from __future__ import annotations

import re
from pathlib import Path

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStore:
    """Persist each blob as ``<key>.json`` under a base directory."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"invalid store key: {key!r}")
        return self.base_path / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write the blob through a temporary file so readers never see half a save."""

        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()

    def keys(self) -> list[str]:
        """Return every key currently persisted, sorted."""

        return sorted(path.stem for path in self.base_path.glob("*.json"))

    def clear(self) -> None:
        for key in self.keys():
            self.delete(key)
