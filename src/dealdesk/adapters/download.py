# src/dealdesk/adapters/download.py
from __future__ import annotations

from pathlib import Path

from dealdesk.domain.errors import ExportError


class FileDownloadSink:
    """Saves delivered documents into a directory, overwriting same-named files."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.last_path: Path | None = None

    def deliver(self, content: bytes, filename: str, media_type: str = "text/html") -> None:
        name = Path(filename).name
        if not name:
            raise ExportError(f"invalid download filename: {filename!r}")
        target = self.directory / name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise ExportError(f"cannot save {target}: {e}") from e
        self.last_path = target
