"""Project take-home pay after a salary increase.

SDK layer - pure logic, returns projections. No CLI or presentation.

Applies a percentage increase to basic salary, recalculates the full tax
breakdown, and lays out the following months of take-home pay with the
semi-annual gratuity and annual vacation payouts.
"""

import calendar
from typing import List, Optional

from ..schemas import GratuityMonth, SalaryProjection, SalaryProjectionResult, TaxInputs, TaxResults
from ..taxes import calculate_tax, load_tax_rules, round_currency
from ..taxes.schemas import TaxRules

VACATION_INTERVAL_MONTHS = 12


def _month_label(month: int) -> str:
    return calendar.month_abbr[(month - 1) % 12 + 1]


def apply_increase(inputs: TaxInputs, increase_percent: float) -> TaxInputs:
    """Copy of inputs with basic salary raised by increase_percent."""
    return inputs.model_copy(
        update={"basic_salary": inputs.basic_salary * (1 + increase_percent / 100)}
    )


def project_salary_increase(
    inputs: TaxInputs,
    increase_percent: float,
    months: int = 12,
    rules: Optional[TaxRules] = None,
) -> SalaryProjectionResult:
    """Compare pay before and after an increase and project monthly pay.

    Args:
        inputs: Current salary profile
        increase_percent: Basic salary increase (e.g., 8 for 8%)
        months: Number of months to project (default 12)
        rules: Tax rules (default: current year's rules)

    Returns:
        SalaryProjectionResult with current and projected TaxResults and one
        SalaryProjection per month. Every month carries the same monthly pay;
        each gratuity-period month adds the accrued gratuity and every twelfth
        month adds the vacation allowance.
    """
    rules = rules or load_tax_rules()

    current = calculate_tax(inputs, rules)
    new_inputs = apply_increase(inputs, increase_percent)
    projected = calculate_tax(new_inputs, rules)

    gratuity_interval = new_inputs.gratuity_period
    projections = []
    for month in range(1, months + 1):
        is_gratuity_month = month % gratuity_interval == 0
        gratuity = projected.six_month_gratuity if is_gratuity_month else 0
        vacation = new_inputs.vacation_allowance if month % VACATION_INTERVAL_MONTHS == 0 else 0

        projections.append(SalaryProjection(
            month=month,
            label=_month_label(month),
            gross_income=projected.monthly_gross_income,
            net_pay=projected.monthly_net_pay,
            nis=projected.monthly_nis,
            paye=projected.monthly_paye,
            is_gratuity_month=is_gratuity_month,
            gratuity_amount=gratuity + vacation,
            total_pay=projected.monthly_net_pay + gratuity + vacation,
        ))

    return SalaryProjectionResult(
        increase_percent=increase_percent,
        current=current,
        projected=projected,
        projections=projections,
    )


def gratuity_breakdown(results: TaxResults) -> List[GratuityMonth]:
    """Twelve-month net pay, gratuity and vacation schedule in whole units."""
    schedule = []
    for month in range(1, 13):
        gratuity = results.six_month_gratuity if month % 6 == 0 else 0
        vacation = results.vacation_allowance if month == 12 else 0
        total = results.monthly_net_pay + gratuity + vacation
        schedule.append(GratuityMonth(
            month=month,
            label=_month_label(month),
            net=round_currency(results.monthly_net_pay),
            gratuity=round_currency(gratuity),
            vacation=round_currency(vacation),
            total=round_currency(total),
        ))
    return schedule
