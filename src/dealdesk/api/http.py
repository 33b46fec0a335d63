# src/dealdesk/api/http.py
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import Response

from dealdesk.adapters.config import config
from dealdesk.adapters.memory_repo import InMemoryDownloadSink
from dealdesk.analysis.formatting import format_currency, format_percent
from dealdesk.domain.errors import UnknownFieldError
from dealdesk.domain.metrics import MetricsResult
from dealdesk.services.calculator import DealCalculator, build_calculator
from .schemas import (
    ExportResponse,
    FieldUpdate,
    InputsResponse,
    MetricsResponse,
    ReportStatusResponse,
)

app = FastAPI(title="dealdesk")

_CURRENCY_FIELDS = (
    "total_entry_fee",
    "total_investment",
    "pml_at_8",
    "pml_at_10",
    "pml_at_12",
    "monthly_expenses",
    "monthly_cash_flow",
    "yearly_noi",
    "annual_rent",
)
_PERCENT_FIELDS = ("arv_percentage_goal", "actual_arv_pct", "cash_on_cash", "yield_pct")


@lru_cache(maxsize=1)
def get_calculator() -> DealCalculator:
    # single local user: one calculator per process
    return build_calculator(config)


def _inputs_response(calc: DealCalculator) -> InputsResponse:
    return InputsResponse(inputs=calc.snapshot().to_payload(), warnings=calc.warnings)


def _formatted(m: MetricsResult) -> dict[str, str]:
    out = {name: format_currency(getattr(m, name)) for name in _CURRENCY_FIELDS}
    out.update({name: format_percent(getattr(m, name)) for name in _PERCENT_FIELDS})
    return out


@app.get("/inputs", response_model=InputsResponse)
def get_inputs(calc: DealCalculator = Depends(get_calculator)) -> InputsResponse:
    return _inputs_response(calc)


@app.put("/inputs/{field}", response_model=InputsResponse)
def set_input(
    field: str,
    body: FieldUpdate,
    calc: DealCalculator = Depends(get_calculator),
) -> InputsResponse:
    try:
        calc.set_field(field, body.value)
    except UnknownFieldError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return _inputs_response(calc)


@app.delete("/inputs", response_model=InputsResponse)
def reset_inputs(calc: DealCalculator = Depends(get_calculator)) -> InputsResponse:
    calc.reset()
    return _inputs_response(calc)


@app.get("/metrics", response_model=MetricsResponse)
def get_metrics(calc: DealCalculator = Depends(get_calculator)) -> MetricsResponse:
    m = calc.metrics()
    return MetricsResponse.from_metrics(m, _formatted(m))


@app.post("/report/export", response_model=ExportResponse)
def export_report(calc: DealCalculator = Depends(get_calculator)) -> ExportResponse:
    """Export through the configured sink; failures come back as ok=false, not a 5xx."""
    outcome = calc.export_report()
    return ExportResponse.from_outcome(outcome, calc.report_status())


@app.get("/report/status", response_model=ReportStatusResponse)
def report_status(calc: DealCalculator = Depends(get_calculator)) -> ReportStatusResponse:
    return ReportStatusResponse.from_status(calc.report_status())


@app.get("/report")
def download_report(calc: DealCalculator = Depends(get_calculator)) -> Response:
    """The HTTP response is the download: same document, sent as an attachment."""
    sink = InMemoryDownloadSink()
    outcome = calc.export_report(sink=sink)
    if not outcome.ok or sink.last is None:
        raise HTTPException(status_code=500, detail=outcome.error or "Failed to generate report")
    delivered = sink.last
    return Response(
        content=delivered["content"],
        media_type=delivered["media_type"],
        headers={"Content-Disposition": f'attachment; filename="{delivered["filename"]}"'},
    )
