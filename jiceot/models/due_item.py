from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from jiceot.models.completion_record import CompletionRecord
from jiceot.models.obligation_type import ObligationType


@dataclass
class DueItem:
    """Scheduling state of one obligation type, computed per request."""
    type: ObligationType
    next_due_date: Optional[date] = None
    days_until_due: Optional[int] = None
    status: Optional[str] = None          # 'overdue' | 'due_soon' | 'upcoming'
    has_current_period_completion: bool = False
    last_completion: Optional[CompletionRecord] = None

    @property
    def id(self) -> int:
        return self.type.id

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def kind(self) -> str:
        return self.type.kind

    @property
    def fixed_amount(self) -> str:
        return self.type.fixed_amount

    @property
    def is_on_demand(self) -> bool:
        return self.type.is_on_demand

    @property
    def due_year(self) -> Optional[int]:
        return self.next_due_date.year if self.next_due_date else None

    @property
    def due_month(self) -> Optional[int]:
        return self.next_due_date.month if self.next_due_date else None


@dataclass
class DueRow:
    """A due item as displayed for one browsed (year, month)."""
    item: DueItem
    completed_in_view: bool
    label: Optional[str]        # None → show the action instead
    status_text: str
    prefill_link: str
    settle_link: str


@dataclass
class DueItemsPage:
    year: int
    month: int
    rows: list[DueRow] = field(default_factory=list)

    @property
    def overdue_count(self) -> int:
        return sum(1 for r in self.rows if r.item.status == "overdue" and not r.completed_in_view)

    @property
    def due_soon_count(self) -> int:
        return sum(1 for r in self.rows if r.item.status == "due_soon" and not r.completed_in_view)

    @property
    def completed_count(self) -> int:
        return sum(1 for r in self.rows if r.completed_in_view)


@dataclass
class DashboardSummary:
    year: int
    month: int
    total_spent: Decimal = Decimal("0")
    bills_paid: int = 0
    pending_bills: int = 0
    pending_expenses: int = 0
    expense_type_count: int = 0
    upcoming_bills: list[DueItem] = field(default_factory=list)
    upcoming_expenses: list[DueItem] = field(default_factory=list)
    on_demand_bills: list[ObligationType] = field(default_factory=list)
