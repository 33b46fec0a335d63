# src/dealdesk/services/exporter.py
from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.analysis.derive import derive_metrics
from dealdesk.domain.inputs import InputRecord
from dealdesk.domain.metrics import MetricsResult
from dealdesk.domain.ports import Cancellable, DownloadSink, Scheduler
from dealdesk.services.report import REPORT_FILENAME, REPORT_MEDIA_TYPE, render_report

logger = get_logger(__name__)

DEFAULT_CLEAR_AFTER_SECONDS = 3.0
FALLBACK_ERROR_MESSAGE = "Failed to generate report"


@dataclass(frozen=True)
class ReportStatus:
    loading: bool = False
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class ExportOutcome:
    ok: bool
    filename: str
    error: str | None = None
    size_bytes: int = 0


class ReportExporter:
    """
    Renders the deal report and hands it to a DownloadSink.

    `status` mirrors what a UI would show: success and error never coexist,
    and a success flag clears itself after `clear_after` seconds unless a new
    export starts first.
    """

    def __init__(
        self,
        sink: DownloadSink,
        scheduler: Scheduler,
        *,
        clear_after: float = DEFAULT_CLEAR_AFTER_SECONDS,
        filename: str = REPORT_FILENAME,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._sink = sink
        self._scheduler = scheduler
        self._clear_after = clear_after
        self._filename = filename
        self._clock = clock

        self._lock = threading.Lock()
        self._status = ReportStatus()
        self._pending_clear: Cancellable | None = None
        self._generation = 0

    @property
    def status(self) -> ReportStatus:
        with self._lock:
            return self._status

    def _build_document(self, record: InputRecord, metrics: MetricsResult | None) -> bytes:
        if metrics is None:
            metrics = derive_metrics(record)
        return render_report(record, metrics, self._clock()).encode("utf-8")

    def export(
        self,
        record: InputRecord,
        metrics: MetricsResult | None = None,
        *,
        sink: DownloadSink | None = None,
    ) -> ExportOutcome:
        """Deliver the report to `sink`, or to the configured sink when none is given."""
        target = sink if sink is not None else self._sink
        with self._lock:
            self._cancel_pending_clear()
            self._generation += 1
            generation = self._generation
            self._status = ReportStatus(loading=True)

        try:
            document = self._build_document(record, metrics)
            target.deliver(document, self._filename, REPORT_MEDIA_TYPE)
        except Exception as e:
            message = str(e) or FALLBACK_ERROR_MESSAGE
            logger.exception("report_export_failed", extra={"context": {"error": message}})
            with self._lock:
                if generation == self._generation:
                    self._status = ReportStatus(error=message)
            return ExportOutcome(ok=False, filename=self._filename, error=message)

        with self._lock:
            if generation == self._generation:
                self._status = ReportStatus(success=True)
                self._pending_clear = self._scheduler.call_later(
                    self._clear_after, lambda: self._clear_success(generation)
                )

        logger.info(
            "report_exported",
            extra={"context": {"filename": self._filename, "size_bytes": len(document)}},
        )
        return ExportOutcome(ok=True, filename=self._filename, size_bytes=len(document))

    def _cancel_pending_clear(self) -> None:
        if self._pending_clear is not None:
            self._pending_clear.cancel()
            self._pending_clear = None

    def _clear_success(self, generation: int) -> None:
        with self._lock:
            # a newer export owns the status now
            if generation != self._generation:
                return
            self._pending_clear = None
            if self._status.success:
                self._status = replace(self._status, success=False)
