"""loans - Loan payoff and amortization projections.

Scope:
- Months remaining (closed form) and projected payoff date
- Month-by-month amortization with periodic extra payments
- Interest and months saved by extra payments, gratuity-funded payment plans

Constraints:
- Pure calculation over (balance, annual rate, monthly payment)
- Never mutates stored balances; the caller records real payments
"""

from .schemas import (
    LoanState,
    ExtraPayment,
    PayoffEstimate,
    AmortizationRow,
    AmortizationSchedule,
    PayoffComparison,
    PlanMonth,
    PayoffProjection,
    BalancePoint,
)

from .amortization import (
    NON_AMORTIZING_MONTHS,
    DEFAULT_MAX_MONTHS,
    MAX_SIMULATION_MONTHS,
    covers_interest,
    add_months,
    months_to_payoff,
    simulate_amortization,
    compare_extra_payments,
    payment_plan,
    project_payoff,
    balance_series,
)

__all__ = [
    # Schemas
    "LoanState",
    "ExtraPayment",
    "PayoffEstimate",
    "AmortizationRow",
    "AmortizationSchedule",
    "PayoffComparison",
    "PlanMonth",
    "PayoffProjection",
    "BalancePoint",
    # Calculations
    "NON_AMORTIZING_MONTHS",
    "DEFAULT_MAX_MONTHS",
    "MAX_SIMULATION_MONTHS",
    "covers_interest",
    "add_months",
    "months_to_payoff",
    "simulate_amortization",
    "compare_extra_payments",
    "payment_plan",
    "project_payoff",
    "balance_series",
]
