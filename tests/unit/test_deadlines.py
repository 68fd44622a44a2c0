"""Tests for the statutory tax calendar."""

from datetime import date

import pytest

from gytax.sdk.taxes import get_urgency, tax_calendar, upcoming_events


class TestGetUrgency:
    @pytest.mark.parametrize("days,urgency", [
        (-1, "overdue"),
        (0, "urgent"),
        (7, "urgent"),
        (8, "soon"),
        (30, "soon"),
        (31, "upcoming"),
        (90, "upcoming"),
        (91, "future"),
    ])
    def test_thresholds(self, days, urgency):
        assert get_urgency(days) == urgency


class TestTaxCalendar:
    def test_passed_deadlines_roll_to_next_year(self):
        events = {e.name: e for e in tax_calendar(date(2026, 5, 10))}

        assert events["Individual Income Tax Filing"].date == "2027-04-30"
        assert events["Company Tax Filing"].date == "2027-03-31"
        assert events["Property Tax Due"].date == "2026-06-30"
        assert events["Property Tax Due"].days_until == 51
        assert events["Property Tax Due"].urgency == "upcoming"

    def test_nis_payments(self):
        events = tax_calendar(date(2026, 5, 10))
        nis = [e for e in events if e.type == "nis_payment"]

        # April's due date is more than a week past
        assert [e.date for e in nis] == [f"2026-{m:02d}-14" for m in range(5, 13)]
        assert nis[0].name == "NIS Payment - May"
        assert nis[0].description == "NIS contribution due for April"
        assert nis[0].days_until == 4
        assert nis[0].urgency == "urgent"

    def test_recent_nis_payment_shown_overdue(self):
        events = tax_calendar(date(2026, 5, 20))
        may = next(e for e in events if e.name == "NIS Payment - May")

        assert may.days_until == -6
        assert may.urgency == "overdue"

    def test_january_payment_covers_december(self):
        events = tax_calendar(date(2026, 1, 1))
        january = next(e for e in events if e.name == "NIS Payment - January")

        assert january.description == "NIS contribution due for December"

    def test_date_before_earliest_rules_year(self):
        events = {e.name: e for e in tax_calendar(date(2025, 5, 20))}

        assert events["Property Tax Due"].date == "2025-06-30"
        assert events["Individual Income Tax Filing"].date == "2026-04-30"

    def test_sorted_by_date(self):
        events = tax_calendar(date(2026, 5, 10))

        assert len(events) == 11
        assert [e.date for e in events] == sorted(e.date for e in events)


class TestUpcomingEvents:
    def test_excludes_overdue_and_limits(self):
        events = tax_calendar(date(2026, 5, 20))
        upcoming = upcoming_events(events, limit=3)

        assert len(upcoming) == 3
        assert all(e.days_until >= 0 for e in upcoming)
        assert upcoming[0].name == "NIS Payment - June"
