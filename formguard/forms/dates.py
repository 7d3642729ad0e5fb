"""French display dates for the page footer and date badges."""

from datetime import date
from typing import Optional

MONTHS_FR = (
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
)


def format_display_date(day: Optional[date] = None) -> str:
    """Format a date as ``17 Octobre 2026``; defaults to today."""
    day = day or date.today()
    return f"{day.day} {MONTHS_FR[day.month - 1]} {day.year}"


def current_year(day: Optional[date] = None) -> int:
    return (day or date.today()).year
