"""Loan amortization schemas.

Interest rates are annual rates as decimals (0.12 = 12%). Monthly rate is
annual / 12.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoanState(BaseModel):
    """A loan's current terms, as stored by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Optional[str] = Field(None, description="Display name (e.g., vehicle description)")
    current_balance: float = Field(..., ge=0)
    annual_interest_rate: float = Field(..., ge=0, description="Annual rate as decimal")
    monthly_payment: float = Field(..., ge=0)

    @property
    def monthly_rate(self) -> float:
        return self.annual_interest_rate / 12


class ExtraPayment(BaseModel):
    """A fixed extra payment made every N months starting at a given month."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float = Field(..., ge=0)
    every_months: int = Field(default=6, ge=1, description="Months between extra payments")
    start_month: int = Field(default=1, ge=1, description="First month (1-based) with an extra payment")

    def applies(self, month: int) -> bool:
        """True if an extra payment is made in this 1-based month."""
        return month >= self.start_month and (month - self.start_month) % self.every_months == 0


class PayoffEstimate(BaseModel):
    """Closed-form months remaining."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    months_remaining: int = Field(..., description="Whole months, or the non-amortizing sentinel")
    amortizes: bool = Field(..., description="False when the payment does not cover interest")
    exact_months: Optional[float] = Field(None, description="Fractional months before rounding up")


class AmortizationRow(BaseModel):
    """One simulated month."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    payment: float = Field(..., description="Regular payment")
    extra_payment: float
    interest: float
    principal: float
    balance: float = Field(..., description="Balance after this month's payment")


class AmortizationSchedule(BaseModel):
    """Output of simulate_amortization.

    When `amortizes` is False no months are simulated, `months` holds the
    non-amortizing sentinel and `total_interest` is None.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    starting_balance: float
    annual_interest_rate: float
    monthly_payment: float
    extra: Optional[ExtraPayment] = None
    rows: List[AmortizationRow] = Field(default_factory=list)
    months: int
    total_interest: Optional[float]
    paid_off: bool = Field(..., description="Balance reached zero within the month cap")
    amortizes: bool


class PayoffComparison(BaseModel):
    """Payoff with and without extra payments."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    regular: AmortizationSchedule
    with_extra: AmortizationSchedule
    amortizes: bool
    complete: bool = Field(False, description="Both schedules paid off within the month cap")
    months_saved: Optional[int] = Field(None, description="None unless complete")
    interest_saved: Optional[float] = Field(None, description="None unless complete")

    @property
    def regular_payoff_months(self) -> int:
        return self.regular.months

    @property
    def extra_payoff_months(self) -> int:
        return self.with_extra.months


class PlanMonth(BaseModel):
    """One month of an extra-payment plan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    month_name: str
    regular_payment: float
    extra_payment: float
    total_payment: float
    principal_paid: float
    interest_paid: float
    remaining_balance: float
    source: Literal["Gratuity", "Salary"]


class PayoffProjection(BaseModel):
    """Projected payoff date for a loan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Optional[str] = None
    current_balance: float
    months_remaining: int
    amortizes: bool
    projected_date: Optional[str] = Field(None, description="YYYY-MM-DD, None when non-amortizing")


class BalancePoint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    balance: float
