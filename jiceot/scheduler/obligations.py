from datetime import date
from typing import Iterable

from jiceot.models.completion_record import CompletionRecord
from jiceot.models.due_item import DueItem
from jiceot.models.obligation_type import ObligationType
from jiceot.scheduler.completion import is_period_completed, last_completion, records_for_type
from jiceot.scheduler.due_dates import outstanding_due_date
from jiceot.scheduler.ranking import rank_due_items
from jiceot.scheduler.status import classify_status, days_until
from jiceot.utils import date_helpers
from jiceot.utils.constants import DUE_SOON_DAYS


def build_due_item(
    ob_type: ObligationType,
    records: Iterable[CompletionRecord],
    today: date | None = None,
    horizon: int = DUE_SOON_DAYS,
) -> DueItem:
    """Derive the scheduling state of one type from its own completion records."""
    records = list(records)
    latest = last_completion(records)
    if ob_type.is_on_demand:
        return DueItem(type=ob_type, last_completion=latest)

    ref = today or date_helpers.today()
    due = outstanding_due_date(ob_type, ref, latest.period if latest else None)
    completed = is_period_completed(records, due.year, due.month)
    return DueItem(
        type=ob_type,
        next_due_date=due,
        days_until_due=days_until(due, ref),
        status=classify_status(due, ref, completed, horizon),
        has_current_period_completion=completed,
        last_completion=latest,
    )


def build_due_items(
    types: Iterable[ObligationType],
    records: Iterable[CompletionRecord],
    today: date | None = None,
    horizon: int = DUE_SOON_DAYS,
    include_stopped: bool = False,
) -> list[DueItem]:
    """Build and rank items for many types from one bulk list of records."""
    ref = today or date_helpers.today()
    records = list(records)
    items = [
        build_due_item(t, records_for_type(records, t), ref, horizon)
        for t in types
        if include_stopped or not t.stopped
    ]
    return rank_due_items(items)
