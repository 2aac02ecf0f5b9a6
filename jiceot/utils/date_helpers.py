from datetime import date, datetime
import calendar

from dateutil.relativedelta import relativedelta


def today() -> date:
    return date.today()


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def format_display_date(d: date) -> str:
    """e.g. 'Apr 5, 2025'."""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def friendly_month(year: int, month: int) -> str:
    """e.g. 'February 2026'."""
    return date(year, month, 1).strftime("%B %Y")


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    return max(1, min(day, last_day_of_month(year, month)))


# ── Periods ───────────────────────────────────────────────────────────────────
# A period is a (year, month) tuple. Periods compare naturally as tuples.

def month_index(year: int, month: int) -> int:
    """Months since year 0, so period differences are plain subtraction."""
    return year * 12 + (month - 1)


def period_from_index(index: int) -> tuple[int, int]:
    year, month0 = divmod(index, 12)
    return (year, month0 + 1)


def add_months_to_period(year: int, month: int, n: int) -> tuple[int, int]:
    shifted = date(year, month, 1) + relativedelta(months=n)
    return (shifted.year, shifted.month)


def validate_period(year: int, month: int):
    if not isinstance(year, int) or not 1 <= year <= 9999:
        raise ValueError(f"Invalid year: {year}")
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
