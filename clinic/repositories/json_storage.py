"""
JSON file persistence adapter.

A single JSON document maps each key to its serialized blob:

    {"Doctors": "[...]", "Appointments": "[...]"}
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
import os

from .base import StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage:
    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return payload

    def load(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"value under {key!r} is not a string blob")
        return value

    def save(self, key: str, value: str) -> None:
        try:
            payload = self._read()
        except StorageError:
            # Arquivo corrompido: sobrescreve com um documento novo
            logger.warning("Discarding unreadable storage file %s", self.path)
            payload = {}
        payload[key] = value
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
