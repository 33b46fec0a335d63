# src/dealdesk/services/calculator.py
from __future__ import annotations

from dealdesk.adapters.config import AppConfig
from dealdesk.adapters.download import FileDownloadSink
from dealdesk.adapters.logging_utils import get_logger
from dealdesk.adapters.memory_repo import InMemoryInputStorage
from dealdesk.adapters.scheduler import ThreadingScheduler
from dealdesk.adapters.sql_repo import SqlInputStorage
from dealdesk.adapters.storage import JsonFileInputStorage
from dealdesk.analysis.derive import derive_metrics
from dealdesk.domain.errors import PersistenceError
from dealdesk.domain.inputs import InputRecord
from dealdesk.domain.metrics import MetricsResult
from dealdesk.domain.ports import DownloadSink, InputStorage
from dealdesk.services.exporter import ExportOutcome, ReportExporter, ReportStatus
from dealdesk.services.input_store import InputStore

logger = get_logger(__name__)


class DealCalculator:
    """Inputs in, metrics and reports out. Metrics are derived fresh on every call."""

    def __init__(self, store: InputStore, exporter: ReportExporter) -> None:
        self.store = store
        self.exporter = exporter

    def snapshot(self) -> InputRecord:
        return self.store.get_snapshot()

    def set_field(self, name: str, text: str) -> InputRecord:
        return self.store.set_field(name, text)

    def reset(self) -> InputRecord:
        return self.store.reset()

    def metrics(self) -> MetricsResult:
        return derive_metrics(self.store.get_snapshot())

    def export_report(self, sink: DownloadSink | None = None) -> ExportOutcome:
        record = self.store.get_snapshot()
        return self.exporter.export(record, derive_metrics(record), sink=sink)

    def report_status(self) -> ReportStatus:
        return self.exporter.status

    @property
    def warnings(self) -> list[str]:
        return self.store.warnings


def build_storage(cfg: AppConfig) -> InputStorage:
    if cfg.STORAGE_BACKEND == "memory":
        return InMemoryInputStorage()
    if cfg.STORAGE_BACKEND == "sql":
        try:
            return SqlInputStorage(cfg.DB_URI, key=cfg.STORAGE_KEY)
        except PersistenceError as e:
            # in-memory only: edits are lost on restart
            logger.warning("input_storage_unavailable", extra={"context": {"error": str(e)}})
            return InMemoryInputStorage()
    return JsonFileInputStorage(cfg.STORAGE_PATH, key=cfg.STORAGE_KEY)


def build_calculator(cfg: AppConfig) -> DealCalculator:
    logger.info(
        "calculator_init",
        extra={"context": {"env": cfg.ENV, "storage_backend": cfg.STORAGE_BACKEND}},
    )
    exporter = ReportExporter(
        FileDownloadSink(cfg.EXPORT_DIR),
        ThreadingScheduler(),
        clear_after=cfg.SUCCESS_CLEAR_SECONDS,
        filename=cfg.REPORT_FILENAME,
    )
    return DealCalculator(InputStore(build_storage(cfg)), exporter)
