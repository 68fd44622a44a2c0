"""Dashboard summaries of a salary profile: monthly, year-to-date and annual tax.

Year-to-date figures come from recorded per-period calculations when the
caller has them; otherwise they are estimated from the current monthly
figures times the number of months elapsed.
"""

from datetime import date
from typing import Iterable, Optional

from ..schemas import NisPensionProgress, PeriodTax, TaxInputs, TaxSummary
from .paye import calculate_tax, round_currency
from .rules import load_tax_rules, rules_for_date
from .schemas import TaxRules

NIS_WEEKS_PER_YEAR = 52


def summarize_tax(
    inputs: TaxInputs,
    as_of: date,
    recorded: Optional[Iterable[PeriodTax]] = None,
    rules: Optional[TaxRules] = None,
) -> TaxSummary:
    """Summarize NIS and PAYE for a salary profile as of a date.

    Args:
        inputs: Salary profile
        as_of: Reference date; its month is the number of months elapsed
        recorded: Calculations already recorded this year (optional)
        rules: Tax rules (default: rules for as_of's year)

    Returns:
        TaxSummary with monetary figures rounded to whole currency units
    """
    rules = rules or rules_for_date(as_of)
    results = calculate_tax(inputs, rules)

    recorded = list(recorded or [])
    if recorded:
        ytd_nis = sum(r.nis_contribution for r in recorded)
        ytd_paye = sum(r.income_tax for r in recorded)
        ytd_source = "recorded"
    else:
        ytd_nis = results.monthly_nis * as_of.month
        ytd_paye = results.monthly_paye * as_of.month
        ytd_source = "estimated"

    return TaxSummary(
        as_of=as_of.isoformat(),
        ytd_source=ytd_source,
        monthly_nis=round_currency(results.monthly_nis),
        monthly_paye=round_currency(results.monthly_paye),
        monthly_net_pay=round_currency(results.monthly_net_pay),
        monthly_gross_income=round_currency(results.monthly_gross_income),
        ytd_nis=round_currency(ytd_nis),
        ytd_paye=round_currency(ytd_paye),
        ytd_total_tax=round_currency(ytd_nis + ytd_paye),
        effective_tax_rate=round(results.effective_tax_rate, 1),
        annual_nis=round_currency(results.annual_nis),
        annual_paye=round_currency(results.annual_paye),
        annual_net_pay=round_currency(results.annual_net_pay),
        annual_total=round_currency(results.annual_total),
    )


def nis_pension_progress(years_worked: float, rules: Optional[TaxRules] = None) -> NisPensionProgress:
    """Progress toward the NIS pension weekly-contribution requirement.

    Assumes continuous employment (52 weekly contributions per year).
    """
    rules = rules or load_tax_rules()
    required = rules.nis.pension_weekly_contributions

    contributions = int(years_worked * NIS_WEEKS_PER_YEAR)
    weeks_remaining = max(0, required - contributions)

    return NisPensionProgress(
        years_worked=years_worked,
        weekly_contributions=contributions,
        required_contributions=required,
        progress_percent=min(contributions / required * 100, 100),
        weeks_remaining=weeks_remaining,
        years_remaining=round(weeks_remaining / NIS_WEEKS_PER_YEAR, 1),
    )
