# src/dealdesk/domain/ports.py
from __future__ import annotations

from typing import Callable, Protocol

from dealdesk.domain.inputs import InputRecord


# ----------------------------
# Input persistence
# ----------------------------

class InputStorage(Protocol):
    """
    Durable storage for the single current InputRecord, under one fixed key.

    Implementations raise PersistenceError when the medium fails.
    """

    def load(self) -> InputRecord | None:
        ...

    def save(self, record: InputRecord) -> None:
        ...

    def clear(self) -> None:
        ...


# ----------------------------
# Report delivery
# ----------------------------

class DownloadSink(Protocol):
    def deliver(self, content: bytes, filename: str, media_type: str = "text/html") -> None:
        ...


# ----------------------------
# Deferred work
# ----------------------------

class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        ...
