# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from dealdesk.adapters.memory_repo import InMemoryDownloadSink, InMemoryInputStorage
from dealdesk.api.http import app, get_calculator
from dealdesk.domain.inputs import InputRecord
from dealdesk.services.calculator import DealCalculator
from dealdesk.services.exporter import ReportExporter
from dealdesk.services.input_store import InputStore


class _Call:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by advance() instead of wall-clock time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.calls: list[_Call] = []

    def call_later(self, delay, callback):
        call = _Call(self.now + delay, callback)
        self.calls.append(call)
        return call

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for call in list(self.calls):
            if not call.cancelled and not call.fired and call.due <= self.now:
                call.fired = True
                call.callback()

    @property
    def pending(self) -> list[_Call]:
        return [c for c in self.calls if not c.cancelled and not c.fired]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sink():
    return InMemoryDownloadSink()


@pytest.fixture
def storage():
    return InMemoryInputStorage()


@pytest.fixture
def exporter(sink, scheduler):
    return ReportExporter(sink, scheduler, clear_after=3.0)


@pytest.fixture
def calculator(storage, exporter):
    return DealCalculator(InputStore(storage), exporter)


@pytest.fixture
def scenario_record():
    return InputRecord(
        purchase_price="100000",
        rehab="20000",
        assignment_fee="10000",
        arv="180000",
        arv_percentage_goal="70",
        cash_to_seller="5000",
        rental_income="1500",
        piti="800",
    )


@pytest.fixture
def client(calculator):
    app.dependency_overrides[get_calculator] = lambda: calculator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
