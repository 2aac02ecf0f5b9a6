from datetime import date
from typing import Optional

from jiceot.models.due_item import DueItem
from jiceot.utils import date_helpers
from jiceot.utils.constants import (
    COMPLETED_LABELS, DUE_SOON_DAYS, STATUS_DUE_SOON, STATUS_OVERDUE, STATUS_UPCOMING,
)
from jiceot.utils.date_helpers import format_display_date


def days_until(next_due: date, today: date | None = None) -> int:
    """Whole days from `today` to `next_due`; negative once the date has passed."""
    ref = today or date_helpers.today()
    return (next_due - ref).days


def classify_status(
    next_due: date,
    today: date | None = None,
    completed: bool = False,
    horizon: int = DUE_SOON_DAYS,
) -> str:
    days = days_until(next_due, today)
    if days > horizon or completed:
        return STATUS_UPCOMING
    if days < 0:
        return STATUS_OVERDUE
    return STATUS_DUE_SOON


def period_display_label(
    item: DueItem, year: int, month: int, completed_in_view: bool
) -> Optional[str]:
    """Label for an item viewed under (year, month), or None to show the action.

    Recomputed on every render: once the viewed period is completed the
    schedule may already point at a later period, in which case the next
    due date is shown instead of the completed label.
    """
    if not completed_in_view:
        return None
    if item.next_due_date is None or (item.due_year, item.due_month) == (year, month):
        return COMPLETED_LABELS.get(item.kind, "Paid")
    return f"Next due: {format_display_date(item.next_due_date)}"


def status_text(item: DueItem) -> str:
    days = item.days_until_due
    if days is None:
        return "On demand"
    if days < 0:
        return f"Overdue by {abs(days)} day{'s' if days != -1 else ''}"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    return f"Due in {days} days"
