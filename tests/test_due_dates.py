import unittest
from datetime import date, timedelta

from jiceot.models.obligation_type import ObligationType
from jiceot.scheduler.due_dates import (
    due_date_after, due_date_for_period, next_due_date, outstanding_due_date,
)


def _type(cycle_months, anchor_day, **kwargs) -> ObligationType:
    return ObligationType(
        id=kwargs.pop("id", 1),
        name=kwargs.pop("name", "Rent"),
        kind=kwargs.pop("kind", "bill"),
        cycle_months=cycle_months,
        anchor_day=anchor_day,
        **kwargs,
    )


class TestDueDateForPeriod(unittest.TestCase):
    def test_clamps_day_to_february_end(self):
        self.assertEqual(due_date_for_period(2026, 2, 31), date(2026, 2, 28))

    def test_clamps_day_to_thirty_day_month(self):
        self.assertEqual(due_date_for_period(2026, 4, 31), date(2026, 4, 30))

    def test_keeps_day_that_exists(self):
        self.assertEqual(due_date_for_period(2026, 3, 15), date(2026, 3, 15))

    def test_zero_day_means_month_end(self):
        self.assertEqual(due_date_for_period(2026, 2, 0), date(2026, 2, 28))
        self.assertEqual(due_date_for_period(2024, 2, 0), date(2024, 2, 29))

    def test_leap_day_honoured(self):
        self.assertEqual(due_date_for_period(2024, 2, 29), date(2024, 2, 29))
        self.assertEqual(due_date_for_period(2024, 2, 30), date(2024, 2, 29))


class TestNextDueDate(unittest.TestCase):
    def test_same_month_when_day_not_passed(self):
        """Day 31 in April resolves to April 30, not May"""
        self.assertEqual(next_due_date(_type(1, 31), date(2026, 4, 15)), date(2026, 4, 30))

    def test_next_month_when_day_passed(self):
        self.assertEqual(next_due_date(_type(1, 15), date(2026, 4, 30)), date(2026, 5, 15))

    def test_due_today_is_not_skipped(self):
        self.assertEqual(next_due_date(_type(1, 10), date(2025, 3, 10)), date(2025, 3, 10))

    def test_quarterly_skips_full_cycle(self):
        """cycle 3, day 15, 2025-01-20 → 2025-04-15 rather than 2025-02-15"""
        self.assertEqual(next_due_date(_type(3, 15), date(2025, 1, 20)), date(2025, 4, 15))

    def test_day_31_in_february(self):
        self.assertEqual(next_due_date(_type(1, 31), date(2025, 2, 1)), date(2025, 2, 28))
        self.assertEqual(next_due_date(_type(1, 31), date(2024, 2, 1)), date(2024, 2, 29))

    def test_month_end_anchor(self):
        self.assertEqual(next_due_date(_type(1, 0), date(2025, 3, 31)), date(2025, 3, 31))
        self.assertEqual(next_due_date(_type(1, 0), date(2025, 4, 1)), date(2025, 4, 30))

    def test_year_rollover(self):
        self.assertEqual(next_due_date(_type(1, 5), date(2025, 12, 20)), date(2026, 1, 5))

    def test_monthly_scenarios(self):
        ob_type = _type(1, 5)
        self.assertEqual(next_due_date(ob_type, date(2025, 3, 10)), date(2025, 4, 5))
        self.assertEqual(next_due_date(ob_type, date(2025, 4, 3)), date(2025, 4, 5))

    def test_quarterly_without_start_keeps_its_months(self):
        """Quarterly with no start period stays on Jan/Apr/Jul/Oct as today moves"""
        ob_type = _type(3, 15)
        self.assertEqual(next_due_date(ob_type, date(2025, 1, 20)), date(2025, 4, 15))
        self.assertEqual(next_due_date(ob_type, date(2025, 2, 1)), date(2025, 4, 15))
        self.assertEqual(next_due_date(ob_type, date(2025, 4, 15)), date(2025, 4, 15))
        self.assertEqual(next_due_date(ob_type, date(2025, 4, 16)), date(2025, 7, 15))

    def test_phase_from_completed_period(self):
        ob_type = _type(3, 15)
        self.assertEqual(next_due_date(ob_type, date(2025, 3, 1), phase=(2025, 2)), date(2025, 5, 15))
        self.assertEqual(next_due_date(ob_type, date(2025, 2, 1), phase=(2025, 5)), date(2025, 2, 15))

    def test_start_period_wins_over_phase(self):
        ob_type = _type(3, 15, start_year=2024, start_month=11)
        self.assertEqual(next_due_date(ob_type, date(2025, 3, 1), phase=(2025, 1)), date(2025, 5, 15))

    def test_steps_from_start_period(self):
        """Quarterly from Nov 2024 lands on Feb, May, Aug, Nov"""
        ob_type = _type(3, 15, start_year=2024, start_month=11)
        self.assertEqual(next_due_date(ob_type, date(2025, 3, 10)), date(2025, 5, 15))
        self.assertEqual(next_due_date(ob_type, date(2025, 2, 10)), date(2025, 2, 15))

    def test_annual_from_start_period(self):
        ob_type = _type(12, 1, start_year=2024, start_month=6)
        self.assertEqual(next_due_date(ob_type, date(2025, 3, 10)), date(2025, 6, 1))
        self.assertEqual(next_due_date(ob_type, date(2025, 6, 2)), date(2026, 6, 1))

    def test_future_start_period(self):
        ob_type = _type(3, 10, start_year=2025, start_month=9)
        self.assertEqual(next_due_date(ob_type, date(2025, 3, 1)), date(2025, 9, 10))

    def test_annual_leap_day(self):
        ob_type = _type(12, 29, start_year=2024, start_month=2)
        self.assertEqual(next_due_date(ob_type, date(2024, 1, 1)), date(2024, 2, 29))
        self.assertEqual(next_due_date(ob_type, date(2024, 3, 1)), date(2025, 2, 28))
        self.assertEqual(next_due_date(ob_type, date(2027, 3, 1)), date(2028, 2, 29))

    def test_on_demand_has_no_due_date(self):
        with self.assertRaises(ValueError):
            next_due_date(_type(0, 5), date(2025, 3, 10))

    def test_monotonic_as_today_advances(self):
        types = [
            _type(1, 5),
            _type(1, 31),
            _type(1, 0),
            _type(3, 15, start_year=2024, start_month=11),
            _type(12, 29, start_year=2024, start_month=2),
            _type(3, 15),
            _type(12, 0),
            _type(6, 31),
        ]
        for ob_type in types:
            previous = None
            day = date(2024, 1, 1)
            while day <= date(2026, 12, 31):
                due = next_due_date(ob_type, day)
                self.assertGreaterEqual(due, day)
                if previous is not None:
                    self.assertGreaterEqual(due, previous, f"{ob_type} at {day}")
                previous = due
                day += timedelta(days=1)


class TestHistoryDueDates(unittest.TestCase):
    def test_due_date_after_completed_period(self):
        self.assertEqual(due_date_after(_type(3, 15), 2024, 11), date(2025, 2, 15))
        self.assertEqual(due_date_after(_type(1, 31), 2025, 12), date(2026, 1, 31))

    def test_due_date_after_follows_start_period(self):
        ob_type = _type(3, 15, start_year=2025, start_month=1)
        self.assertEqual(due_date_after(ob_type, 2025, 1), date(2025, 4, 15))
        self.assertEqual(due_date_after(ob_type, 2025, 2), date(2025, 4, 15))
        self.assertEqual(due_date_after(ob_type, 2024, 6), date(2025, 1, 15))

    def test_due_date_after_on_demand(self):
        with self.assertRaises(ValueError):
            due_date_after(_type(0, 0), 2025, 1)

    def test_outstanding_without_history(self):
        self.assertEqual(
            outstanding_due_date(_type(1, 5), date(2025, 3, 10)), date(2025, 4, 5)
        )

    def test_missed_period_surfaces_before_today(self):
        due = outstanding_due_date(_type(1, 5), date(2025, 3, 10), (2025, 2))
        self.assertEqual(due, date(2025, 3, 5))

    def test_current_period_completed(self):
        due = outstanding_due_date(_type(1, 5), date(2025, 3, 10), (2025, 3))
        self.assertEqual(due, date(2025, 4, 5))

    def test_quarterly_paid_is_due_a_full_cycle_later(self):
        ob_type = _type(3, 15)
        for today in (date(2025, 1, 20), date(2025, 2, 10), date(2025, 3, 31), date(2025, 4, 15)):
            self.assertEqual(
                outstanding_due_date(ob_type, today, (2025, 1)), date(2025, 4, 15), today
            )

    def test_quarterly_paid_off_epoch_month(self):
        due = outstanding_due_date(_type(3, 15), date(2025, 3, 1), (2025, 2))
        self.assertEqual(due, date(2025, 5, 15))

    def test_outstanding_monotonic_with_history(self):
        for ob_type in (_type(3, 15), _type(12, 0), _type(1, 5)):
            previous = None
            day = date(2025, 1, 1)
            while day <= date(2026, 6, 30):
                due = outstanding_due_date(ob_type, day, (2024, 12))
                if previous is not None:
                    self.assertGreaterEqual(due, previous, f"{ob_type} at {day}")
                previous = due
                day += timedelta(days=1)

    def test_completed_ahead_keeps_schedule(self):
        due = outstanding_due_date(_type(1, 5), date(2025, 3, 10), (2025, 5))
        self.assertEqual(due, date(2025, 4, 5))


if __name__ == "__main__":
    unittest.main()
