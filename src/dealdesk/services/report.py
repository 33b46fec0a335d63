# src/dealdesk/services/report.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from dealdesk.analysis.derive import coerce_amount
from dealdesk.analysis.formatting import format_currency, format_percent, format_report_date
from dealdesk.domain.grading import GradeBand
from dealdesk.domain.inputs import InputRecord
from dealdesk.domain.metrics import MetricsResult

REPORT_TITLE = "Real Estate Deal Analysis"
REPORT_FILENAME = "Real_Estate_Deal_Analysis.html"
REPORT_MEDIA_TYPE = "text/html"
REPORT_TEMPLATE = "report.html"

TEMPLATES_DIR = Path(__file__).parent / "templates"

ENTRY_FEE_ROWS: tuple[tuple[str, str], ...] = (
    ("Cash to Seller", "cash_to_seller"),
    ("Arrears", "arrears"),
    ("Acquisition Cost", "acquisition_cost"),
    ("Assignment Fee", "assignment_fee"),
    ("Closing Cost", "closing_cost"),
    ("Rehab", "rehab"),
    ("Holding Costs", "holding_costs"),
    ("Marketing", "marketing"),
)

CASH_FLOW_INPUT_ROWS: tuple[tuple[str, str], ...] = (
    ("Monthly Rental Income", "rental_income"),
    ("Monthly Equity to Seller", "equity_to_seller"),
    ("Monthly PML Cost", "pml_cost"),
    ("Monthly PITI", "piti"),
    ("War Chest", "war_chest"),
    ("Insurance", "insurance"),
    ("Taxes", "taxes"),
    ("Other Expenses", "other_expenses"),
)


@dataclass(frozen=True)
class ReportRow:
    label: str
    value: str
    total: bool = False
    css_class: str | None = None


def _build_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["currency"] = format_currency
    env.filters["percent"] = format_percent
    env.filters["report_date"] = format_report_date
    return env


_env = _build_env()


def _amount(record: InputRecord, name: str) -> str:
    return format_currency(coerce_amount(getattr(record, name)))


def _input_rows(record: InputRecord, fields: tuple[tuple[str, str], ...]) -> list[ReportRow]:
    return [ReportRow(label, _amount(record, name)) for label, name in fields]


def build_report_context(
    record: InputRecord,
    metrics: MetricsResult,
    generated_at: datetime,
) -> dict[str, object]:
    """Everything the report template reads, with values already formatted."""
    property_rows = [
        ReportRow("Purchase Price", _amount(record, "purchase_price")),
        ReportRow("After Repair Value (ARV)", _amount(record, "arv")),
        ReportRow("Total Investment", format_currency(metrics.total_investment)),
        ReportRow("ARV Percentage Goal", format_percent(metrics.arv_percentage_goal)),
        ReportRow("Actual ARV Percentage", format_percent(metrics.actual_arv_pct)),
    ]

    entry_fee_rows = _input_rows(record, ENTRY_FEE_ROWS)
    entry_fee_rows.append(
        ReportRow("Total Entry Fee", format_currency(metrics.total_entry_fee), total=True)
    )

    pml_rows = [
        ReportRow("Monthly PML at 8%", format_currency(metrics.pml_at_8)),
        ReportRow("Monthly PML at 10%", format_currency(metrics.pml_at_10)),
        ReportRow("Monthly PML at 12%", format_currency(metrics.pml_at_12)),
    ]

    cash_flow_rows = _input_rows(record, CASH_FLOW_INPUT_ROWS)
    cash_flow_rows += [
        ReportRow("Total Monthly Expenses", format_currency(metrics.monthly_expenses), total=True),
        ReportRow("Monthly Cash Flow", format_currency(metrics.monthly_cash_flow), total=True),
        ReportRow("Yearly NOI", format_currency(metrics.yearly_noi), total=True),
        ReportRow("Cash on Cash Return", format_percent(metrics.cash_on_cash), total=True),
        ReportRow("Yield", format_percent(metrics.yield_pct), total=True),
    ]

    grade_rows = [
        ReportRow(g.title, g.display_label, css_class=g.band.css_class)
        for g in metrics.grades.values()
    ]

    return {
        "title": REPORT_TITLE,
        "generated_at": generated_at,
        "metrics": metrics,
        "bands": list(GradeBand),
        "property_rows": property_rows,
        "entry_fee_rows": entry_fee_rows,
        "pml_rows": pml_rows,
        "cash_flow_rows": cash_flow_rows,
        "grade_rows": grade_rows,
    }


def render_report(record: InputRecord, metrics: MetricsResult, generated_at: datetime) -> str:
    """
    Build the standalone HTML report for one deal.

    The template carries its own <style> block and references nothing
    external, so the output can be opened offline or printed as-is.
    """
    template = _env.get_template(REPORT_TEMPLATE)
    return template.render(**build_report_context(record, metrics, generated_at))
