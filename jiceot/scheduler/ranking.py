from datetime import date
from typing import Iterable

from jiceot.models.completion_record import CompletionRecord
from jiceot.models.due_item import DueItem
from jiceot.models.obligation_type import ObligationType
from jiceot.scheduler.completion import last_completed_period, records_for_type
from jiceot.scheduler.due_dates import outstanding_due_date
from jiceot.utils import date_helpers


def rank_key(name: str, due: date | None, type_id: int | None = None) -> tuple:
    """On-demand (no due date) first by name, then by due date with name as tie-break.

    Names equal apart from case fall back to the raw name, then the type id.
    """
    tail = (name.casefold(), name, type_id or 0)
    if due is None:
        return (0, date.min) + tail
    return (1, due) + tail


def rank_obligation_types(
    types: Iterable[ObligationType],
    today: date | None = None,
    records: Iterable[CompletionRecord] = (),
) -> list[ObligationType]:
    """Quick-add order. Due dates are taken relative to `today`, never a browsed period,
    and follow each type's own completion history when `records` are given."""
    ref = today or date_helpers.today()
    records = list(records)

    def key(t: ObligationType) -> tuple:
        if t.is_on_demand:
            return rank_key(t.name, None, t.id)
        last = last_completed_period(records_for_type(records, t))
        return rank_key(t.name, outstanding_due_date(t, ref, last), t.id)

    return sorted(types, key=key)


def rank_due_items(items: Iterable[DueItem]) -> list[DueItem]:
    return sorted(items, key=lambda i: rank_key(i.name, i.next_due_date, i.id))
