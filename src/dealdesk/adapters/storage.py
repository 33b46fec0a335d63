# src/dealdesk/adapters/storage.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.errors import PersistenceError
from dealdesk.domain.inputs import InputRecord

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "realEstateCalculatorData"


class CorruptStorageError(PersistenceError):
    """The storage file exists but does not hold a JSON object."""


class JsonFileInputStorage:
    """
    Local JSON file acting as a small key-value store.

    The file holds one object mapping storage keys to serialized records, so
    several tools can share a file without clobbering each other's entries.
    A file that no longer decodes is moved aside to `<name>.corrupt` on the
    next write, so later edits are stored again.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_name(self.path.name + ".corrupt")

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"cannot read {self.path}: {e}") from e
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(f"corrupt storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CorruptStorageError(f"corrupt storage file {self.path}: expected an object")
        return data

    def _read_for_write(self) -> dict[str, Any]:
        try:
            return self._read_all()
        except CorruptStorageError as e:
            self._set_aside(str(e))
            return {}

    def _set_aside(self, reason: str) -> None:
        try:
            os.replace(self.path, self.corrupt_path)
        except OSError as e:
            raise PersistenceError(f"cannot move corrupt file {self.path} aside: {e}") from e
        logger.warning(
            "input_storage_corrupt_file_moved",
            extra={"context": {"reason": reason, "moved_to": str(self.corrupt_path)}},
        )

    def _write_all(self, data: dict[str, Any]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}") from e

    def load(self) -> InputRecord | None:
        payload = self._read_all().get(self.key)
        if payload is None:
            return None
        return InputRecord.from_payload(payload)

    def save(self, record: InputRecord) -> None:
        data = self._read_for_write()
        data[self.key] = record.to_payload()
        self._write_all(data)

    def clear(self) -> None:
        data = self._read_for_write()
        if self.key not in data:
            return
        del data[self.key]
        if data:
            self._write_all(data)
            return
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"cannot remove {self.path}: {e}") from e
