"""taxes - Guyana tax rules and calculations.

Scope:
- Statutory tables per pay frequency (personal allowance, PAYE threshold,
  NIS ceiling, child/overtime/second-job/insurance caps)
- PAYE, NIS and net pay per period with monthly and annual equivalents
- Property tax estimates from annual rental value
- Dashboard summaries and the statutory tax calendar

Constraints:
- Pure calculation - no profile access; receives inputs, returns results
- Year-specific rules loaded from tax-rules/{year}.yaml

Usage:
    from gytax.sdk.taxes import calculate_tax, load_tax_rules
    from gytax.sdk.schemas import TaxInputs

    results = calculate_tax(TaxInputs(basic_salary=200000))
    rules = load_tax_rules("2026")
"""

# Rules loading and frequency table
from .rules import (
    DEFAULT_TAX_YEAR,
    TaxRulesNotFoundError,
    load_tax_rules,
    rules_for_date,
    resolve_frequency,
    convert_from_monthly,
    convert_to_monthly,
)

# Tax rules schemas
from .schemas import FrequencyConfig, TaxRules

# Calculations
from .paye import calculate_tax, calculate_paye, round_currency
from .property import calculate_property_tax
from .summary import summarize_tax, nis_pension_progress
from .deadlines import tax_calendar, upcoming_events, get_urgency

__all__ = [
    # Rules
    "DEFAULT_TAX_YEAR",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "rules_for_date",
    "resolve_frequency",
    "convert_from_monthly",
    "convert_to_monthly",
    "FrequencyConfig",
    "TaxRules",
    # Calculations
    "calculate_tax",
    "calculate_paye",
    "round_currency",
    "calculate_property_tax",
    "summarize_tax",
    "nis_pension_progress",
    # Calendar
    "tax_calendar",
    "upcoming_events",
    "get_urgency",
]
