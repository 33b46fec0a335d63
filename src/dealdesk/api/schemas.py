# src/dealdesk/api/schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from dealdesk.domain.grading import DealGrade
from dealdesk.domain.metrics import MetricsResult
from dealdesk.services.exporter import ExportOutcome, ReportStatus


class FieldUpdate(BaseModel):
    """Body for PUT /inputs/{field}. Any text is accepted; coercion happens later."""
    value: str = ""


class InputsResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    inputs: dict[str, str]
    warnings: list[str] = []


class GradeItem(BaseModel):
    strategy: Literal["wholesale", "long_term_rental", "short_term_rental"]
    title: str
    band: Literal["excellent", "good", "fair", "low"]
    label: str
    display_label: str
    css_class: str
    color: str
    value: float
    progress: float

    @classmethod
    def from_grade(cls, grade: DealGrade) -> "GradeItem":
        return cls(
            strategy=grade.strategy,
            title=grade.title,
            band=grade.band.value,
            label=grade.label,
            display_label=grade.display_label,
            css_class=grade.band.css_class,
            color=grade.band.color,
            value=grade.value,
            progress=grade.progress,
        )


class MetricsResponse(BaseModel):
    total_entry_fee: float
    total_investment: float
    arv_percentage_goal: float
    actual_arv_pct: float
    meets_arv_goal: bool
    arv_message: str

    pml_at_8: float
    pml_at_10: float
    pml_at_12: float

    monthly_expenses: float
    monthly_cash_flow: float
    yearly_noi: float
    cash_on_cash: float
    annual_rent: float
    purchase_plus_rehab: float
    yield_pct: float

    grades: list[GradeItem]

    # display strings, same formatting as the report
    formatted: dict[str, str] = {}

    @classmethod
    def from_metrics(cls, m: MetricsResult, formatted: dict[str, str]) -> "MetricsResponse":
        return cls(
            total_entry_fee=m.total_entry_fee,
            total_investment=m.total_investment,
            arv_percentage_goal=m.arv_percentage_goal,
            actual_arv_pct=m.actual_arv_pct,
            meets_arv_goal=m.meets_arv_goal,
            arv_message=m.arv_message,
            pml_at_8=m.pml_at_8,
            pml_at_10=m.pml_at_10,
            pml_at_12=m.pml_at_12,
            monthly_expenses=m.monthly_expenses,
            monthly_cash_flow=m.monthly_cash_flow,
            yearly_noi=m.yearly_noi,
            cash_on_cash=m.cash_on_cash,
            annual_rent=m.annual_rent,
            purchase_plus_rehab=m.purchase_plus_rehab,
            yield_pct=m.yield_pct,
            grades=[GradeItem.from_grade(g) for g in m.grades.values()],
            formatted=formatted,
        )


class ReportStatusResponse(BaseModel):
    loading: bool
    success: bool
    error: str | None = None

    @classmethod
    def from_status(cls, status: ReportStatus) -> "ReportStatusResponse":
        return cls(loading=status.loading, success=status.success, error=status.error)


class ExportResponse(BaseModel):
    ok: bool
    filename: str
    error: str | None = None
    size_bytes: int = 0
    status: ReportStatusResponse

    @classmethod
    def from_outcome(cls, outcome: ExportOutcome, status: ReportStatus) -> "ExportResponse":
        return cls(
            ok=outcome.ok,
            filename=outcome.filename,
            error=outcome.error,
            size_bytes=outcome.size_bytes,
            status=ReportStatusResponse.from_status(status),
        )
