from dataclasses import dataclass
from typing import Optional

from jiceot.utils.constants import MAX_ANCHOR_DAY


@dataclass
class ObligationType:
    id: int
    name: str
    kind: str                  # 'bill' | 'expense'
    cycle_months: int          # 0 = on demand, 1 = monthly, 3 = quarterly, ...
    anchor_day: int = 0        # 1-31, or 0 = last day of month
    fixed_amount: str = ""     # decimal string, '' when unset
    stopped: bool = False
    start_year: Optional[int] = None
    start_month: Optional[int] = None
    icon: str = ""
    color: str = ""

    @property
    def is_on_demand(self) -> bool:
        return self.cycle_months == 0

    @property
    def start_period(self) -> Optional[tuple[int, int]]:
        if self.start_year is None or self.start_month is None:
            return None
        return (self.start_year, self.start_month)


def validate_cycle(cycle_months: int, anchor_day: int):
    """Reject cycle definitions the scheduler cannot represent."""
    if isinstance(cycle_months, bool) or not isinstance(cycle_months, int) or cycle_months < 0:
        raise ValueError("Cycle must be a non-negative number of months.")
    if isinstance(anchor_day, bool) or not isinstance(anchor_day, int) \
            or not 0 <= anchor_day <= MAX_ANCHOR_DAY:
        raise ValueError(f"Day of month must be between 0 and {MAX_ANCHOR_DAY}.")
