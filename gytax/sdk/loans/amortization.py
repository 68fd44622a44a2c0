"""Loan payoff and amortization projections.

Standard declining-balance model: each month accrues interest at
annual_rate / 12 on the outstanding balance, and the payment (plus any extra
payment) covers that interest first and principal second.

Months remaining without extra payments uses the closed form
    n = -ln(1 - r*P/A) / ln(1 + r)
Extra payments have no closed form, so they are simulated month by month up
to an iteration cap.

A payment that does not exceed the first month's interest never pays the
loan off. That case is detected up front and reported with
amortizes=False and NON_AMORTIZING_MONTHS rather than simulated.
"""

import calendar
import math
from datetime import date
from itertools import islice
from typing import Iterator, List, Optional

from .schemas import (
    AmortizationRow,
    AmortizationSchedule,
    BalancePoint,
    ExtraPayment,
    PayoffComparison,
    PayoffEstimate,
    PayoffProjection,
    PlanMonth,
)

NON_AMORTIZING_MONTHS = 999
DEFAULT_MAX_MONTHS = 120
MAX_SIMULATION_MONTHS = 600


def covers_interest(balance: float, annual_rate: float, monthly_payment: float) -> bool:
    """True if the payment exceeds the first month's interest."""
    return monthly_payment > balance * (annual_rate / 12)


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length."""
    year, month_index = divmod(start.month - 1 + months, 12)
    year += start.year
    month = month_index + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _amortize(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    extra: Optional[ExtraPayment] = None,
) -> Iterator[AmortizationRow]:
    """Yield one row per month until the balance reaches zero.

    Unbounded when the payments never cover interest; callers must limit it.
    """
    monthly_rate = annual_rate / 12
    remaining = balance
    month = 0
    while remaining > 0:
        month += 1
        interest = remaining * monthly_rate
        extra_amount = extra.amount if extra is not None and extra.applies(month) else 0
        principal = min(monthly_payment + extra_amount - interest, remaining)
        remaining = max(0, remaining - principal)
        yield AmortizationRow(
            month=month,
            payment=monthly_payment,
            extra_payment=extra_amount,
            interest=interest,
            principal=principal,
            balance=remaining,
        )


def months_to_payoff(balance: float, annual_rate: float, monthly_payment: float) -> PayoffEstimate:
    """Months remaining under current terms (closed form).

    Returns:
        PayoffEstimate. Non-amortizing loans report amortizes=False and
        months_remaining=NON_AMORTIZING_MONTHS.
    """
    if balance <= 0:
        return PayoffEstimate(months_remaining=0, amortizes=True, exact_months=0.0)

    if not covers_interest(balance, annual_rate, monthly_payment):
        return PayoffEstimate(months_remaining=NON_AMORTIZING_MONTHS, amortizes=False)

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        exact = balance / monthly_payment
    else:
        exact = -math.log(1 - monthly_rate * balance / monthly_payment) / math.log(1 + monthly_rate)

    return PayoffEstimate(months_remaining=math.ceil(exact), amortizes=True, exact_months=exact)


def simulate_amortization(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    extra: Optional[ExtraPayment] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> AmortizationSchedule:
    """Simulate month-by-month amortization.

    Args:
        balance: Current balance
        annual_rate: Annual interest rate as decimal
        monthly_payment: Regular monthly payment
        extra: Optional periodic extra payment
        max_months: Iteration cap (clamped to MAX_SIMULATION_MONTHS)

    Returns:
        AmortizationSchedule. paid_off is False if the cap was reached first.
    """
    max_months = min(max_months, MAX_SIMULATION_MONTHS)

    if balance > 0 and not covers_interest(balance, annual_rate, monthly_payment):
        return AmortizationSchedule(
            starting_balance=balance,
            annual_interest_rate=annual_rate,
            monthly_payment=monthly_payment,
            extra=extra,
            months=NON_AMORTIZING_MONTHS,
            total_interest=None,
            paid_off=False,
            amortizes=False,
        )

    rows = list(islice(_amortize(balance, annual_rate, monthly_payment, extra), max_months))
    final_balance = rows[-1].balance if rows else max(0, balance)

    return AmortizationSchedule(
        starting_balance=balance,
        annual_interest_rate=annual_rate,
        monthly_payment=monthly_payment,
        extra=extra,
        rows=rows,
        months=len(rows),
        total_interest=sum(row.interest for row in rows),
        paid_off=final_balance == 0,
        amortizes=True,
    )


def compare_extra_payments(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    extra: ExtraPayment,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PayoffComparison:
    """Months and interest saved by a periodic extra payment.

    Savings are only reported when the regular payment amortizes the loan
    and both schedules pay off within max_months. Totals from a truncated
    schedule say nothing about the real difference.
    """
    regular = simulate_amortization(balance, annual_rate, monthly_payment, max_months=max_months)
    with_extra = simulate_amortization(balance, annual_rate, monthly_payment, extra, max_months)

    if not regular.amortizes:
        return PayoffComparison(regular=regular, with_extra=with_extra, amortizes=False)

    if not (regular.paid_off and with_extra.paid_off):
        return PayoffComparison(regular=regular, with_extra=with_extra, amortizes=True, complete=False)

    return PayoffComparison(
        regular=regular,
        with_extra=with_extra,
        amortizes=True,
        complete=True,
        months_saved=regular.months - with_extra.months,
        interest_saved=regular.total_interest - with_extra.total_interest,
    )


def payment_plan(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    extra: ExtraPayment,
    months: int = 6,
    first_month: int = 1,
) -> List[PlanMonth]:
    """Month-by-month plan funding extra payments from gratuity.

    Args:
        first_month: Calendar month (1-12) of the plan's first month

    Returns:
        Up to `months` rows; stops early once the loan is paid off
    """
    plan = []
    for row in islice(_amortize(balance, annual_rate, monthly_payment, extra), months):
        month_name = calendar.month_name[(first_month - 1 + row.month - 1) % 12 + 1]
        plan.append(PlanMonth(
            month=row.month,
            month_name=month_name,
            regular_payment=monthly_payment,
            extra_payment=row.extra_payment,
            total_payment=monthly_payment + row.extra_payment,
            principal_paid=row.principal,
            interest_paid=row.interest,
            remaining_balance=row.balance,
            source="Gratuity" if row.extra_payment else "Salary",
        ))
    return plan


def project_payoff(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    as_of: date,
    name: Optional[str] = None,
) -> PayoffProjection:
    """Months remaining and projected payoff date from as_of."""
    estimate = months_to_payoff(balance, annual_rate, monthly_payment)
    projected_date = None
    if estimate.amortizes:
        projected_date = add_months(as_of, estimate.months_remaining).isoformat()

    return PayoffProjection(
        name=name,
        current_balance=balance,
        months_remaining=estimate.months_remaining,
        amortizes=estimate.amortizes,
        projected_date=projected_date,
    )


def balance_series(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    months: int = 60,
) -> List[BalancePoint]:
    """Projected balance for month 0..months, zero after payoff.

    A non-amortizing balance is capped at the iteration horizon like any
    other; it simply does not reach zero.
    """
    months = min(months, MAX_SIMULATION_MONTHS)
    series = [BalancePoint(month=0, balance=max(0, balance))]

    if not covers_interest(balance, annual_rate, monthly_payment):
        remaining = balance
        for month in range(1, months + 1):
            remaining = max(0, remaining * (1 + annual_rate / 12) - monthly_payment)
            series.append(BalancePoint(month=month, balance=remaining))
        return series

    for row in islice(_amortize(balance, annual_rate, monthly_payment), months):
        series.append(BalancePoint(month=row.month, balance=row.balance))
    while len(series) <= months:
        series.append(BalancePoint(month=len(series), balance=0))
    return series
