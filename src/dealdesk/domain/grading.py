# src/dealdesk/domain/grading.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

Strategy = Literal["wholesale", "long_term_rental", "short_term_rental"]


class GradeBand(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    LOW = "low"

    @property
    def css_class(self) -> str:
        return _CSS_CLASS[self]

    @property
    def color(self) -> str:
        return _BAR_COLOR[self]

    @property
    def icon(self) -> str:
        return _ICON[self]


_CSS_CLASS = {
    GradeBand.EXCELLENT: "grade-excellent",
    GradeBand.GOOD: "grade-good",
    GradeBand.FAIR: "grade-fair",
    GradeBand.LOW: "grade-poor",
}

_BAR_COLOR = {
    GradeBand.EXCELLENT: "#10B981",
    GradeBand.GOOD: "#34D399",
    GradeBand.FAIR: "#FBBF24",
    GradeBand.LOW: "#EF4444",
}

_ICON = {
    GradeBand.EXCELLENT: "✅",
    GradeBand.GOOD: "🟢",
    GradeBand.FAIR: "⚠️",
    GradeBand.LOW: "❌",
}


@dataclass(frozen=True)
class DealGrade:
    strategy: Strategy
    title: str
    band: GradeBand
    label: str        # "Excellent" / "Good" / "Fair" / "Poor" / "Low End"
    value: float      # the graded metric
    progress: float   # bar fill, 0.0–1.0

    @property
    def display_label(self) -> str:
        return f"{self.band.icon} {self.label}"


@dataclass(frozen=True)
class GradeScale:
    """
    Four-band grading of one metric for one exit strategy.

    Thresholds are inclusive lower bounds checked from the top down; anything
    under `fair` lands in the lowest band.
    """
    strategy: Strategy
    title: str
    excellent: float
    good: float
    fair: float
    low_label: str
    progress_scale: float

    def band(self, value: float) -> GradeBand:
        if value >= self.excellent:
            return GradeBand.EXCELLENT
        if value >= self.good:
            return GradeBand.GOOD
        if value >= self.fair:
            return GradeBand.FAIR
        return GradeBand.LOW

    def label(self, band: GradeBand) -> str:
        if band is GradeBand.LOW:
            return self.low_label
        return band.value.capitalize()

    def progress(self, value: float) -> float:
        return min(1.0, max(0.0, value / self.progress_scale))

    def grade(self, value: float) -> DealGrade:
        band = self.band(value)
        return DealGrade(
            strategy=self.strategy,
            title=self.title,
            band=band,
            label=self.label(band),
            value=value,
            progress=self.progress(value),
        )


WHOLESALE = GradeScale(
    strategy="wholesale",
    title="Wholesale Deal",
    excellent=15_000.0,
    good=10_000.0,
    fair=5_000.0,
    low_label="Low End",
    progress_scale=20_000.0,
)

# rental scales grade cash-on-cash return in percentage points
LONG_TERM_RENTAL = GradeScale(
    strategy="long_term_rental",
    title="Long-Term Rental",
    excellent=15.0,
    good=10.0,
    fair=8.0,
    low_label="Poor",
    progress_scale=20.0,
)

SHORT_TERM_RENTAL = GradeScale(
    strategy="short_term_rental",
    title="Short-Term Rental",
    excellent=25.0,
    good=18.0,
    fair=15.0,
    low_label="Poor",
    progress_scale=30.0,
)

GRADE_SCALES: tuple[GradeScale, ...] = (WHOLESALE, LONG_TERM_RENTAL, SHORT_TERM_RENTAL)
