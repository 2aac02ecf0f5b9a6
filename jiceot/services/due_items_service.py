import logging
from datetime import date
from decimal import Decimal

from jiceot.database.completion_dao import CompletionDAO
from jiceot.database.db_manager import DatabaseManager
from jiceot.database.obligation_type_dao import ObligationTypeDAO
from jiceot.models.completion_record import CompletionRecord
from jiceot.models.due_item import DashboardSummary, DueItem, DueItemsPage, DueRow
from jiceot.models.obligation_type import ObligationType
from jiceot.scheduler.completion import is_period_completed, last_completed_period, records_for_type
from jiceot.scheduler.due_dates import outstanding_due_date
from jiceot.scheduler.obligations import build_due_items
from jiceot.scheduler.ranking import rank_obligation_types
from jiceot.scheduler.status import period_display_label, status_text
from jiceot.utils.constants import (
    DASHBOARD_UPCOMING_LIMIT, DUE_SOON_DAYS, KIND_BILL, KIND_EXPENSE,
)
from jiceot.utils.currency import parse_amount
from jiceot.utils.date_helpers import today as current_date, validate_period
from jiceot.utils.prefill import prefill_link

logger = logging.getLogger(__name__)

DUE_ITEMS_RETURN_URL = "/due-items"


class DueItemsService:
    """Feeds the dashboard, the due-items page and the quick-add list."""

    def __init__(
        self,
        type_dao: ObligationTypeDAO,
        completion_dao: CompletionDAO,
        db: DatabaseManager | None = None,
    ):
        self._type_dao = type_dao
        self._completion_dao = completion_dao
        self._db = db

    def due_soon_days(self) -> int:
        if self._db is None:
            return DUE_SOON_DAYS
        return self._db.get_int_setting("due_soon_days", DUE_SOON_DAYS)

    def get_due_items(
        self, year: int, month: int, today: date | None = None, horizon: int | None = None
    ) -> DueItemsPage:
        """Every active scheduled type, as seen while browsing (year, month)."""
        validate_period(year, month)
        ref = today or current_date()
        types = [t for t in self._type_dao.list_obligation_types() if not t.is_on_demand]
        records = self._records_for(types)
        items = self._build(types, records, ref, horizon)

        page = DueItemsPage(year=year, month=month)
        for item in items:
            completed = is_period_completed(records_for_type(records, item.type), year, month)
            page.rows.append(DueRow(
                item=item,
                completed_in_view=completed,
                label=period_display_label(item, year, month, completed),
                status_text=status_text(item),
                prefill_link=prefill_link(item.type, year, month, return_url=DUE_ITEMS_RETURN_URL),
                settle_link=prefill_link(
                    item.type, year, month, settle=True, return_url=DUE_ITEMS_RETURN_URL
                ),
            ))
        logger.debug(
            "Due items for %d-%02d: %d rows, %d overdue",
            year, month, len(page.rows), page.overdue_count,
        )
        return page

    def get_quick_add(self, kind: str | None = None, today: date | None = None) -> list[ObligationType]:
        """Active types in quick-add order: on demand first, then by the date each is next owed."""
        ref = today or current_date()
        types = self._type_dao.list_obligation_types(kind=kind)
        return rank_obligation_types(types, ref, self._records_for(types))

    def quick_add_link(self, ob_type: ObligationType, today: date | None = None) -> str:
        """Prefill link for the period the type is next owed in (today's for on-demand)."""
        ref = today or current_date()
        if ob_type.is_on_demand:
            target = ref
        else:
            records = records_for_type(self._records_for([ob_type]), ob_type)
            target = outstanding_due_date(ob_type, ref, last_completed_period(records))
        return prefill_link(ob_type, target.year, target.month)

    def get_dashboard(self, today: date | None = None, horizon: int | None = None) -> DashboardSummary:
        ref = today or current_date()
        year, month = ref.year, ref.month

        month_records = self._completion_dao.list_for_month(year, month)
        summary = DashboardSummary(
            year=year,
            month=month,
            total_spent=sum((parse_amount(r.amount) for r in month_records), Decimal("0")),
            bills_paid=sum(1 for r in month_records if r.kind == KIND_BILL),
            expense_type_count=self._type_dao.count(KIND_EXPENSE),
        )

        types = self._type_dao.list_obligation_types()
        records = self._records_for(types)
        for item in self._build(types, records, ref, horizon):
            if item.is_on_demand:
                if item.kind == KIND_BILL:
                    summary.on_demand_bills.append(item.type)
                continue
            if not self._is_pending(item, records, year, month):
                continue
            if item.kind == KIND_BILL:
                summary.upcoming_bills.append(item)
            else:
                summary.upcoming_expenses.append(item)

        summary.pending_bills = len(summary.upcoming_bills)
        summary.pending_expenses = len(summary.upcoming_expenses)
        summary.upcoming_bills = summary.upcoming_bills[:DASHBOARD_UPCOMING_LIMIT]
        summary.upcoming_expenses = summary.upcoming_expenses[:DASHBOARD_UPCOMING_LIMIT]
        return summary

    def _is_pending(self, item: DueItem, records: list[CompletionRecord], year: int, month: int) -> bool:
        """Due in or before (year, month), not yet completed for it, and not overdue."""
        if is_period_completed(records_for_type(records, item.type), year, month):
            return False
        if (item.due_year, item.due_month) > (year, month):
            return False
        return item.days_until_due >= 0

    def _records_for(self, types: list[ObligationType]) -> list[CompletionRecord]:
        return self._completion_dao.list_for_types([t.id for t in types])

    def _build(self, types, records, ref: date, horizon: int | None) -> list[DueItem]:
        if horizon is None:
            horizon = self.due_soon_days()
        return build_due_items(types, records, ref, horizon)
