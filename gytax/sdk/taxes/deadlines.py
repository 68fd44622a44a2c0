"""Statutory tax calendar: filing deadlines and monthly NIS payment dates."""

import calendar
from datetime import date
from typing import List, Optional

from ..schemas import CalendarEvent
from .rules import rules_for_date
from .schemas import TaxRules

# Past NIS due dates within this many days are listed as overdue
NIS_OVERDUE_WINDOW_DAYS = 7


def get_urgency(days_until: int) -> str:
    """Classify a deadline by days remaining."""
    if days_until < 0:
        return "overdue"
    if days_until <= 7:
        return "urgent"
    if days_until <= 30:
        return "soon"
    if days_until <= 90:
        return "upcoming"
    return "future"


def tax_calendar(as_of: date, rules: Optional[TaxRules] = None) -> List[CalendarEvent]:
    """Build the tax calendar relative to a reference date.

    Annual deadlines already passed roll to next year. NIS payments fall due
    on the rules' payment day of every month for the prior month's
    contributions; past ones are kept only while recently overdue.

    Returns:
        Events sorted by date
    """
    rules = rules or rules_for_date(as_of)
    events = []

    for deadline in rules.deadlines:
        due = date(as_of.year, deadline.month, deadline.day)
        if due < as_of:
            due = date(as_of.year + 1, deadline.month, deadline.day)
        days_until = (due - as_of).days
        events.append(CalendarEvent(
            name=deadline.name,
            description=deadline.description,
            date=due.isoformat(),
            type=deadline.type,
            days_until=days_until,
            urgency=get_urgency(days_until),
        ))

    for month in range(1, 13):
        due = date(as_of.year, month, rules.nis.payment_due_day)
        days_until = (due - as_of).days
        if days_until < -NIS_OVERDUE_WINDOW_DAYS:
            continue

        contribution_month = calendar.month_name[12 if month == 1 else month - 1]
        events.append(CalendarEvent(
            name=f"NIS Payment - {calendar.month_name[month]}",
            description=f"NIS contribution due for {contribution_month}",
            date=due.isoformat(),
            type="nis_payment",
            days_until=days_until,
            urgency=get_urgency(days_until),
        ))

    events.sort(key=lambda e: e.date)
    return events


def upcoming_events(events: List[CalendarEvent], limit: int = 6) -> List[CalendarEvent]:
    """Next events not yet past due."""
    return [e for e in events if e.days_until >= 0][:limit]
