# src/dealdesk/analysis/formatting.py
from datetime import datetime


def format_currency(value: float) -> str:
    """en-US dollars, two decimals: 1234.5 -> "$1,234.50", -20 -> "-$20.00"."""
    text = f"{abs(value):,.2f}"
    if value < 0 and text != "0.00":
        return f"-${text}"
    return f"${text}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def format_report_date(dt: datetime) -> str:
    return f"{dt.month}/{dt.day}/{dt.year}"
