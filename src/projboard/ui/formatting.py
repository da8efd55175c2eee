"""Display formatting utilities for project values."""

from __future__ import annotations

from datetime import date

from projboard.models.projects import ProjectStatus

STATUS_LABELS: dict[ProjectStatus, str] = {
    ProjectStatus.ACTIVE: "Active",
    ProjectStatus.ON_HOLD: "On Hold",
    ProjectStatus.COMPLETED: "Completed",
}


def format_budget(amount: float) -> str:
    """Format a budget total with K/M/B abbreviations.

    Examples: "$950", "$1.5K", "$12K", "$3.2M", "$15B"
    """
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if amount >= threshold:
            scaled = amount / threshold
            return f"${scaled:.{0 if scaled >= 10 else 1}f}{suffix}"
    return f"${amount:,.0f}"


def format_currency(amount: float) -> str:
    """Format an exact amount with two decimals, e.g. "$12,500.00"."""
    if not amount:
        return "$0.00"
    return f"${amount:,.2f}"


def format_date(value: date) -> str:
    """Format a deadline as e.g. "Jan 5, 2026"."""
    return f"{value:%b} {value.day}, {value.year}"


def status_label(status: ProjectStatus) -> str:
    return STATUS_LABELS.get(status, str(status))
