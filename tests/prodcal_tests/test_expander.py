"""Tests for prodcal/expander.py."""

from __future__ import annotations

import unittest

from prodcal.expander import STRATEGIES, expand
from prodcal.model import UNRECOGNIZED, Anchor, RuleClassification, RuleFamily, ShiftPolicy
from prodcal.rules import classify

from tests.fixtures import d


class TestStrategyTable(unittest.TestCase):
    def test_every_family_has_a_strategy(self):
        for family in RuleFamily:
            self.assertIn(family, STRATEGIES)


class TestRecurring(unittest.TestCase):
    def test_daily_all_days(self):
        self.assertEqual(len(expand(classify("daily"), 2026, 1)), 31)

    def test_daily_except_weekends(self):
        out = expand(classify("every day except weekends"), 2026, 8)
        self.assertEqual(len(out), 21)
        self.assertTrue(all(x.weekday() < 5 for x in out))

    def test_weekly(self):
        out = expand(classify("weekly on friday"), 2026, 1)
        self.assertEqual([x.day for x in out], [2, 9, 16, 23, 30])

    def test_every_named_weekday(self):
        out = expand(classify("every wednesday"), 2026, 1)
        self.assertEqual([x.day for x in out], [7, 14, 21, 28])

    def test_biweekly(self):
        out = expand(classify("bi-weekly on friday"), 2026, 1)
        self.assertEqual([x.day for x in out], [2, 16, 30])


class TestAnchored(unittest.TestCase):
    def test_monthly_day_beyond_month_end(self):
        c = classify("31st of every month")
        self.assertEqual(expand(c, 2026, 2), [])
        self.assertEqual(expand(c, 2026, 4), [])
        self.assertEqual(expand(c, 2026, 3), [d(2026, 3, 31)])

    def test_monthly_shift_next_monday(self):
        c = classify("12th of every month, if weekend then next Monday")
        self.assertEqual(expand(c, 2026, 9), [d(2026, 9, 14)])
        self.assertEqual(expand(c, 2026, 4), [d(2026, 4, 13)])
        self.assertEqual(expand(c, 2026, 5), [d(2026, 5, 12)])

    def test_monthly_shift_next_working_day(self):
        c = classify("13th of every month, if weekend then next working day")
        self.assertEqual(expand(c, 2026, 6), [d(2026, 6, 15)])

    def test_quarterly_gate(self):
        c = classify("quarterly")
        self.assertEqual(expand(c, 2026, 4), [d(2026, 4, 1)])
        self.assertEqual(expand(c, 2026, 5), [])

    def test_quarterly_last_working_day(self):
        c = classify("quarterly, last working day")
        self.assertEqual(expand(c, 2026, 10), [d(2026, 10, 30)])

    def test_annual_only_in_its_month(self):
        c = classify("annually on December 25")
        self.assertEqual(expand(c, 2026, 12), [d(2026, 12, 25)])
        self.assertEqual(expand(c, 2026, 11), [])

    def test_end_of_month(self):
        self.assertEqual(expand(classify("end of month"), 2026, 2), [d(2026, 2, 28)])
        self.assertEqual(expand(classify("end of month"), 2024, 2), [d(2024, 2, 29)])

    def test_ordinal_weekday(self):
        self.assertEqual(expand(classify("first monday"), 2026, 1), [d(2026, 1, 5)])
        self.assertEqual(expand(classify("last friday"), 2026, 1), [d(2026, 1, 30)])

    def test_missing_fifth_weekday(self):
        c = RuleClassification(
            RuleFamily.ORDINAL_WEEKDAY, anchor=Anchor.ORDINAL_WEEKDAY, ordinal=4, weekday=0
        )
        self.assertEqual(expand(c, 2026, 2), [])
        self.assertEqual(expand(c, 2026, 3), [d(2026, 3, 30)])

    def test_business_days(self):
        self.assertEqual(expand(classify("first business day"), 2026, 2), [d(2026, 2, 2)])
        self.assertEqual(expand(classify("last working day"), 2026, 1), [d(2026, 1, 30)])
        self.assertEqual(expand(classify("3rd business day"), 2026, 1), [d(2026, 1, 5)])
        self.assertEqual(len(expand(classify("every business day"), 2026, 1)), 22)


class TestSingleDates(unittest.TestCase):
    def test_iso_year_gate(self):
        c = classify("2026-03-15")
        self.assertEqual(expand(c, 2026, 3), [d(2026, 3, 15)])
        self.assertEqual(expand(c, 2027, 3), [])
        self.assertEqual(expand(c, 2026, 4), [])

    def test_impossible_iso_date_yields_nothing(self):
        self.assertEqual(expand(classify("2026-02-30"), 2026, 2), [])

    def test_previous_friday_combo(self):
        c = classify("runs every 9th, if 9th is weekend it runs on the previous Friday")
        self.assertEqual(expand(c, 2026, 5), [d(2026, 5, 8)])
        self.assertEqual(expand(c, 2026, 8), [d(2026, 8, 7)])
        self.assertEqual(expand(c, 2026, 6), [d(2026, 6, 9)])

    def test_shift_can_cross_month(self):
        c = RuleClassification(
            RuleFamily.SINGLE_DATE, anchor=Anchor.DAY, day=1, shift=ShiftPolicy.PREVIOUS_FRIDAY
        )
        # 2026-02-01 is a Sunday
        self.assertEqual(expand(c, 2026, 2), [d(2026, 1, 30)])

    def test_unrecognized(self):
        self.assertEqual(expand(UNRECOGNIZED, 2026, 1), [])


if __name__ == "__main__":
    unittest.main()
