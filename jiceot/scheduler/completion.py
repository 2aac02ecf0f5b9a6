from typing import Iterable, Optional

from jiceot.models.completion_record import CompletionRecord
from jiceot.models.obligation_type import ObligationType


def records_for_type(records: Iterable[CompletionRecord], ob_type: ObligationType) -> list[CompletionRecord]:
    """A bulk list may mix bill payments and expense items, so match on kind too."""
    return [r for r in records if r.type_id == ob_type.id and r.kind == ob_type.kind]


def is_period_completed(records: Iterable[CompletionRecord], year: int, month: int) -> bool:
    """True iff a record exists for exactly (year, month). Amount is irrelevant."""
    return any(r.year == year and r.month == month for r in records)


def completed_periods(records: Iterable[CompletionRecord]) -> set[tuple[int, int]]:
    return {r.period for r in records}


def last_completion(records: Iterable[CompletionRecord]) -> Optional[CompletionRecord]:
    """Return the record for the latest period; the newest id wins within a period."""
    latest = None
    for r in records:
        if latest is None or (r.period, r.id) > (latest.period, latest.id):
            latest = r
    return latest


def last_completed_period(records: Iterable[CompletionRecord]) -> Optional[tuple[int, int]]:
    latest = last_completion(records)
    return latest.period if latest else None
