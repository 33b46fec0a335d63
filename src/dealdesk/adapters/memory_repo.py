from typing import Any

from dealdesk.domain.inputs import InputRecord
from dealdesk.domain.ports import DownloadSink, InputStorage


class InMemoryInputStorage(InputStorage):
    def __init__(self, initial: InputRecord | None = None) -> None:
        self._record = initial
        self.saves = 0
        self.clears = 0

    def load(self) -> InputRecord | None:
        return self._record

    def save(self, record: InputRecord) -> None:
        self._record = record
        self.saves += 1

    def clear(self) -> None:
        self._record = None
        self.clears += 1


class InMemoryDownloadSink(DownloadSink):
    def __init__(self) -> None:
        self._items: list[dict[str, Any]] = []

    def deliver(self, content: bytes, filename: str, media_type: str = "text/html") -> None:
        self._items.append({"content": content, "filename": filename, "media_type": media_type})

    @property
    def last(self) -> dict[str, Any] | None:
        return self._items[-1] if self._items else None
