from datetime import date

from jiceot.models.obligation_type import ObligationType
from jiceot.utils import date_helpers
from jiceot.utils.date_helpers import (
    add_months_to_period, clamp_day_to_month, last_day_of_month, month_index, period_from_index,
)

# Month index of January, year 0. Cycles of types without a start period or
# history are phased from here, so e.g. quarterly lands on Jan/Apr/Jul/Oct.
EPOCH_INDEX = 0


def due_date_for_period(year: int, month: int, anchor_day: int) -> date:
    """Resolve an anchor day to an actual calendar day of the given month.
    anchor_day == 0 means last day of month; otherwise clamped to month length."""
    if anchor_day <= 0:
        return date(year, month, last_day_of_month(year, month))
    return date(year, month, clamp_day_to_month(year, month, anchor_day))


def next_due_date(
    ob_type: ObligationType,
    today: date | None = None,
    phase: tuple[int, int] | None = None,
) -> date:
    """Return the first occurrence of the type's schedule on or after `today`.

    Occurrences fall every `cycle_months` months counted from the type's start
    period. Without one, `phase` names any period the cycle passes through
    (normally the last completed one); the fixed epoch is used when it is None.
    The schedule never starts before the start period.
    """
    _require_cyclic(ob_type)
    ref = today or date_helpers.today()
    cycle = ob_type.cycle_months
    start = ob_type.start_period
    if start is not None:
        anchor = month_index(*start)
    elif phase is not None:
        anchor = month_index(*phase)
    else:
        anchor = EPOCH_INDEX

    index = anchor + (month_index(ref.year, ref.month) - anchor) // cycle * cycle
    if start is not None:
        index = max(index, anchor)
    candidate = _due_date_at(index, ob_type.anchor_day)
    if candidate < ref:
        candidate = _due_date_at(index + cycle, ob_type.anchor_day)
    return candidate


def due_date_after(ob_type: ObligationType, year: int, month: int) -> date:
    """Return the first occurrence in a period after the completed (year, month).

    That is one full cycle later, or the next start-phased period when the
    type has a start period.
    """
    _require_cyclic(ob_type)
    cycle = ob_type.cycle_months
    if ob_type.start_period is None:
        next_year, next_month = add_months_to_period(year, month, cycle)
        return due_date_for_period(next_year, next_month, ob_type.anchor_day)

    anchor = month_index(*ob_type.start_period)
    index = anchor + ((month_index(year, month) - anchor) // cycle + 1) * cycle
    return _due_date_at(max(index, anchor), ob_type.anchor_day)


def outstanding_due_date(
    ob_type: ObligationType,
    today: date | None = None,
    last_completed: tuple[int, int] | None = None,
) -> date:
    """Return the earliest occurrence still owed.

    Without history this is next_due_date(). With a last completed period the
    schedule is phased from it, and the occurrence following it wins when it
    comes earlier, so a missed period surfaces as a date before `today`.
    """
    if last_completed is None:
        return next_due_date(ob_type, today)
    upcoming = next_due_date(ob_type, today, phase=last_completed)
    return min(due_date_after(ob_type, *last_completed), upcoming)


def _due_date_at(index: int, anchor_day: int) -> date:
    return due_date_for_period(*period_from_index(index), anchor_day)


def _require_cyclic(ob_type: ObligationType):
    if ob_type.is_on_demand:
        raise ValueError(f"'{ob_type.name}' is on demand and has no due date.")
