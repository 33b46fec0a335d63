# src/dealdesk/domain/metrics.py
from __future__ import annotations

from dataclasses import dataclass, field

from dealdesk.domain.grading import DealGrade, Strategy

ARV_GOAL_MET_MESSAGE = "More room for profit"
ARV_GOAL_MISSED_MESSAGE = "Must reduce to hit Percentage of ARV Goal"


@dataclass(frozen=True)
class MetricsResult:
    """
    Everything derived from one InputRecord snapshot.

    Percentages are in percentage points (56.0 means 56%), money is in
    dollars, monthly unless the name says otherwise.
    """
    # Entry fee / purchase
    total_entry_fee: float
    total_investment: float
    arv_percentage_goal: float
    actual_arv_pct: float
    meets_arv_goal: bool
    arv_message: str

    # Private money loan estimates (monthly)
    pml_at_8: float
    pml_at_10: float
    pml_at_12: float

    # Cash flow
    monthly_expenses: float
    monthly_cash_flow: float
    yearly_noi: float
    cash_on_cash: float
    annual_rent: float
    purchase_plus_rehab: float
    yield_pct: float

    grades: dict[Strategy, DealGrade] = field(default_factory=dict)

    @property
    def wholesale(self) -> DealGrade:
        return self.grades["wholesale"]

    @property
    def long_term_rental(self) -> DealGrade:
        return self.grades["long_term_rental"]

    @property
    def short_term_rental(self) -> DealGrade:
        return self.grades["short_term_rental"]
