import argparse
import logging

from jiceot.database.db_manager import DatabaseManager
from jiceot.database.obligation_type_dao import ObligationTypeDAO
from jiceot.database.completion_dao import CompletionDAO

from jiceot.services.due_items_service import DueItemsService

from jiceot.utils.app_config import get_db_folder
from jiceot.utils.constants import APP_NAME
from jiceot.utils.currency import format_currency
from jiceot.utils.date_helpers import format_display_date, friendly_month, parse_date, today


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="jiceot", description=f"{APP_NAME} due items")
    parser.add_argument("--year", type=int, help="year to browse (default: current)")
    parser.add_argument("--month", type=int, help="month to browse (default: current)")
    parser.add_argument("--today", help="reference date YYYY-MM-DD (default: today)")
    parser.add_argument("--db-folder", help="folder holding the database file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ref = today()
    if args.today:
        ref = parse_date(args.today)
        if ref is None:
            raise SystemExit(f"Invalid --today date: {args.today}")

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=args.db_folder or get_db_folder())

    # ── DAOs / services ──────────────────────────────────────────────────────
    type_dao = ObligationTypeDAO(db)
    completion_dao = CompletionDAO(db)
    due_svc = DueItemsService(type_dao, completion_dao, db)

    year = args.year or ref.year
    month = args.month or ref.month
    symbol = db.get_setting("currency_symbol", "$")

    try:
        summary = due_svc.get_dashboard(ref)
        page = due_svc.get_due_items(year, month, ref)
    except ValueError as e:
        raise SystemExit(f"Error: {e}")
    finally:
        db.close()

    # ── Dashboard ────────────────────────────────────────────────────────────
    print(f"{APP_NAME} · {friendly_month(summary.year, summary.month)}")
    print(f"  Spent this month: {format_currency(summary.total_spent, symbol)}")
    print(f"  Bills paid: {summary.bills_paid}  "
          f"Pending bills: {summary.pending_bills}  "
          f"Pending expenses: {summary.pending_expenses}")
    for item in summary.upcoming_bills + summary.upcoming_expenses:
        print(f"  • {item.name} due {format_display_date(item.next_due_date)}")
    if summary.on_demand_bills:
        print("  On demand: " + ", ".join(t.name for t in summary.on_demand_bills))

    # ── Due items ────────────────────────────────────────────────────────────
    print()
    print(f"Due items · {friendly_month(page.year, page.month)}")
    if not page.rows:
        print("  Nothing scheduled.")
    for row in page.rows:
        state = row.label or row.status_text
        print(f"  [{row.item.status}] {row.item.name}: {state}")
        if row.label is None:
            print(f"      {row.prefill_link}")


if __name__ == "__main__":
    main()
