# src/dealdesk/analysis/derive.py
from __future__ import annotations

import math
import re

from dealdesk.domain.grading import LONG_TERM_RENTAL, SHORT_TERM_RENTAL, WHOLESALE
from dealdesk.domain.inputs import InputRecord
from dealdesk.domain.metrics import (
    ARV_GOAL_MET_MESSAGE,
    ARV_GOAL_MISSED_MESSAGE,
    MetricsResult,
)

DEFAULT_ARV_PERCENTAGE_GOAL = 70.0

# Annual private-money-loan rates quoted alongside every deal
PML_RATES = (0.08, 0.10, 0.12)

# leading decimal literal, same prefix a browser parseFloat would accept
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def coerce_amount(text: str | None, default: float = 0.0) -> float:
    """
    Read a number out of free text.

    "1500" -> 1500.0, "  12.5k" -> 12.5, "" / "abc" / None -> default.
    Overflowing literals ("1e999") also fall back to `default`.
    """
    if not text:
        return default
    m = _LEADING_NUMBER.match(text)
    if m is None:
        return default
    value = float(m.group(1))
    if not math.isfinite(value):
        return default
    return value


def coerce_goal(text: str | None) -> float:
    return coerce_amount(text, default=DEFAULT_ARV_PERCENTAGE_GOAL)


def _sum_fields(record: InputRecord, *names: str) -> float:
    return sum(coerce_amount(getattr(record, name)) for name in names)


def derive_metrics(record: InputRecord) -> MetricsResult:
    """
    Map one input snapshot to every derived number and grade.

    Pure and deterministic; callers invoke it whenever they need fresh
    metrics, nothing is cached between edits.
    """
    purchase_price = coerce_amount(record.purchase_price)
    arv = coerce_amount(record.arv)
    arv_percentage_goal = coerce_goal(record.arv_percentage_goal)
    rehab = coerce_amount(record.rehab)
    assignment_fee = coerce_amount(record.assignment_fee)
    rental_income = coerce_amount(record.rental_income)

    total_entry_fee = _sum_fields(
        record,
        "cash_to_seller",
        "arrears",
        "acquisition_cost",
        "assignment_fee",
        "closing_cost",
        "rehab",
        "holding_costs",
        "marketing",
    )

    # --- purchase vs ARV ---
    total_investment = purchase_price + rehab + assignment_fee
    actual_arv_pct = (total_investment / arv) * 100 if arv > 0 else 0.0
    meets_arv_goal = actual_arv_pct <= arv_percentage_goal

    # --- PML estimates ---
    pml_at_8, pml_at_10, pml_at_12 = (total_entry_fee * rate / 12 for rate in PML_RATES)

    # --- cash flow ---
    monthly_expenses = _sum_fields(
        record,
        "equity_to_seller",
        "pml_cost",
        "piti",
        "war_chest",
        "insurance",
        "taxes",
        "other_expenses",
    )
    monthly_cash_flow = rental_income - monthly_expenses
    yearly_noi = monthly_cash_flow * 12
    cash_on_cash = (yearly_noi / total_entry_fee) * 100 if total_entry_fee > 0 else 0.0

    annual_rent = rental_income * 12
    purchase_plus_rehab = purchase_price + rehab + assignment_fee
    yield_pct = (annual_rent / purchase_plus_rehab) * 100 if purchase_plus_rehab > 0 else 0.0

    grades = {
        WHOLESALE.strategy: WHOLESALE.grade(assignment_fee),
        LONG_TERM_RENTAL.strategy: LONG_TERM_RENTAL.grade(cash_on_cash),
        SHORT_TERM_RENTAL.strategy: SHORT_TERM_RENTAL.grade(cash_on_cash),
    }

    return MetricsResult(
        total_entry_fee=total_entry_fee,
        total_investment=total_investment,
        arv_percentage_goal=arv_percentage_goal,
        actual_arv_pct=actual_arv_pct,
        meets_arv_goal=meets_arv_goal,
        arv_message=ARV_GOAL_MET_MESSAGE if meets_arv_goal else ARV_GOAL_MISSED_MESSAGE,
        pml_at_8=pml_at_8,
        pml_at_10=pml_at_10,
        pml_at_12=pml_at_12,
        monthly_expenses=monthly_expenses,
        monthly_cash_flow=monthly_cash_flow,
        yearly_noi=yearly_noi,
        cash_on_cash=cash_on_cash,
        annual_rent=annual_rent,
        purchase_plus_rehab=purchase_plus_rehab,
        yield_pct=yield_pct,
        grades=grades,
    )
