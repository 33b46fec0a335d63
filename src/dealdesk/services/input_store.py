# src/dealdesk/services/input_store.py
from __future__ import annotations

from typing import Literal

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.errors import PersistenceError
from dealdesk.domain.inputs import InputRecord, resolve_field_name
from dealdesk.domain.ports import InputStorage

logger = get_logger(__name__)

StorageOp = Literal["load", "save", "clear"]


class InputStore:
    """
    Single source of truth for the current calculator inputs.

    Storage is read once, here in the constructor. Every edit writes the whole
    record back; reset() clears the stored copy. Storage failures never block
    an edit: they are logged and the latest one per operation is kept in
    `warnings` until a later write succeeds.
    """

    def __init__(self, storage: InputStorage) -> None:
        self._storage = storage
        self._warnings: dict[StorageOp, str] = {}
        self._record = self._load()

    def _load(self) -> InputRecord:
        try:
            stored = self._storage.load()
        except PersistenceError as e:
            self._warn("load", f"Saved inputs could not be loaded: {e}")
            return InputRecord.defaults()
        if stored is None:
            return InputRecord.defaults()
        logger.debug("input_storage_loaded")
        return stored

    def _warn(self, op: StorageOp, message: str) -> None:
        logger.warning(f"input_storage_{op}_failed", extra={"context": {"warning": message}})
        self._warnings[op] = message

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings.values())

    def get_snapshot(self) -> InputRecord:
        return self._record

    def get_field(self, name: str) -> str:
        return getattr(self._record, resolve_field_name(name))

    def set_field(self, name: str, text: str) -> InputRecord:
        self._record = self._record.with_field(name, text)
        try:
            self._storage.save(self._record)
        except PersistenceError as e:
            self._warn("save", f"Inputs could not be saved: {e}")
        else:
            # the stored copy now matches memory again
            self._warnings.clear()
        return self._record

    def reset(self) -> InputRecord:
        self._record = InputRecord.defaults()
        try:
            self._storage.clear()
        except PersistenceError as e:
            self._warn("clear", f"Saved inputs could not be erased: {e}")
        else:
            self._warnings.clear()
        return self._record
