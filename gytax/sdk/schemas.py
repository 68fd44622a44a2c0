"""Pydantic schemas for gy-tax calculation inputs and results.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in profiles or API payloads cause clear errors rather than silent
ignoring. Results are frozen: they are computed fresh on every call and
never mutated.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .taxes.schemas import FrequencyConfig


PaymentFrequency = Literal["daily", "weekly", "fortnightly", "monthly", "yearly"]
QualificationType = Literal["none", "acca", "masters", "phd"]
InsuranceType = Literal["none", "employee", "employee-one", "family", "custom"]
LocationType = Literal["georgetown", "municipality", "rural"]
PropertyType = Literal["residential", "commercial"]


# =============================================================================
# Salary / PAYE
# =============================================================================


class TaxInputs(BaseModel):
    """One salary profile, denominated in its payment frequency.

    Monetary fields must be non-negative. `payment_frequency` is left open so
    that an unknown key reaches the engine, which falls back to monthly and
    reports the fallback in TaxResults.warnings.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    payment_frequency: str = Field(default="monthly", description="Pay frequency key")
    basic_salary: float = Field(default=0, ge=0)
    taxable_allowances: float = Field(default=0, ge=0)
    non_taxable_allowances: float = Field(default=0, ge=0)
    vacation_allowance: float = Field(default=0, ge=0, description="Annual lump, paid once")
    qualification_type: QualificationType = "none"
    overtime_income: float = Field(default=0, ge=0)
    second_job_income: float = Field(default=0, ge=0)
    child_count: int = Field(default=0, ge=0)
    loan_payment: float = Field(default=0, ge=0)
    credit_union_deduction: float = Field(default=0, ge=0)
    insurance_type: InsuranceType = "none"
    custom_insurance_premium: float = Field(
        default=0, ge=0, description="Premium per pay period, used when insurance_type is 'custom'"
    )
    gratuity_rate: float = Field(default=22.5, ge=0, description="Percent of monthly basic salary")
    gratuity_period: Literal[6] = Field(default=6, description="Gratuity accrual period in months")


class TaxResults(BaseModel):
    """Output of calculate_tax.

    Frequency-denominated figures are per pay period of `payment_frequency`;
    `monthly_*` and `annual_*` are the converted equivalents.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Input echo
    payment_frequency: str
    frequency_config: FrequencyConfig
    basic_salary: float
    monthly_basic_salary: float
    taxable_allowances: float
    non_taxable_allowances: float = Field(..., description="Includes qualification allowance")
    vacation_allowance: float
    qualification_type: str
    qualification_allowance: float
    overtime_income: float
    second_job_income: float
    child_count: int
    loan_payment: float
    credit_union_deduction: float
    insurance_premium: float
    actual_insurance_deduction: float
    gratuity_rate: float

    # Frequency-specific calculations
    gross_income: float
    gross_income_for_taxable_calculation: float
    personal_allowance: float
    nis_contribution: float
    child_allowance: float
    overtime_allowance: float
    second_job_allowance: float
    taxable_income: float = Field(..., ge=0)
    income_tax: float = Field(..., description="PAYE")
    net_pay: float
    total_deductions: float

    # Monthly equivalents
    monthly_gross_income: float
    monthly_net_pay: float
    monthly_nis: float
    monthly_paye: float
    monthly_gratuity_accrual: float

    # Special months
    six_month_gratuity: float
    month_six_total: float
    month_twelve_total: float

    # Annual
    annual_gross_income: float
    annual_nis: float
    annual_paye: float
    annual_net_pay: float
    annual_gratuity_total: float
    annual_total: float

    effective_tax_rate: float = Field(..., description="(PAYE + NIS) / gross, percent")

    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# Salary projection
# =============================================================================


class SalaryProjection(BaseModel):
    """One simulated month after a salary increase (monthly equivalents)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(..., ge=1)
    label: str = Field(..., description="Month abbreviation (e.g., 'Jun')")
    gross_income: float
    net_pay: float
    nis: float
    paye: float
    is_gratuity_month: bool
    gratuity_amount: float = Field(..., description="Gratuity plus vacation paid this month")
    total_pay: float


class SalaryProjectionResult(BaseModel):
    """Output of project_salary_increase."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    increase_percent: float
    current: TaxResults
    projected: TaxResults
    projections: List[SalaryProjection]

    @property
    def monthly_net_change(self) -> float:
        """Change in monthly take-home pay."""
        return self.projected.monthly_net_pay - self.current.monthly_net_pay

    @property
    def annual_total_change(self) -> float:
        """Change in annual total (net pay + gratuity + vacation)."""
        return self.projected.annual_total - self.current.annual_total


class GratuityMonth(BaseModel):
    """One month of the annual net/gratuity/vacation schedule, whole units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    label: str
    net: int
    gratuity: int
    vacation: int
    total: int


# =============================================================================
# Property tax
# =============================================================================


class PropertyTaxResult(BaseModel):
    """Output of calculate_property_tax."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    annual_rental_value: float
    location_type: str
    property_type: str
    tax_rate: float
    annual_tax: float
    quarterly_tax: float
    monthly_equivalent: float
    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# Summary
# =============================================================================


class PeriodTax(BaseModel):
    """A recorded calculation for one period (e.g., from a stored history)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    nis_contribution: float = Field(..., ge=0)
    income_tax: float = Field(..., ge=0)


class TaxSummary(BaseModel):
    """Dashboard summary of a salary profile, rounded to whole currency units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    as_of: str = Field(..., description="Summary date (YYYY-MM-DD)")
    ytd_source: Literal["recorded", "estimated"]
    monthly_nis: int
    monthly_paye: int
    monthly_net_pay: int
    monthly_gross_income: int
    ytd_nis: int
    ytd_paye: int
    ytd_total_tax: int
    effective_tax_rate: float = Field(..., description="Percent, one decimal place")
    annual_nis: int
    annual_paye: int
    annual_net_pay: int
    annual_total: int


class NisPensionProgress(BaseModel):
    """Progress toward the NIS old-age pension contribution requirement."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    years_worked: float
    weekly_contributions: int
    required_contributions: int
    progress_percent: float
    weeks_remaining: int
    years_remaining: float


# =============================================================================
# Tax calendar
# =============================================================================


Urgency = Literal["overdue", "urgent", "soon", "upcoming", "future"]


class CalendarEvent(BaseModel):
    """A dated statutory deadline relative to a reference date."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str
    date: str = Field(..., description="Due date (YYYY-MM-DD)")
    type: Literal["gra_filing", "property_tax", "nis_payment"]
    days_until: int = Field(..., description="Negative when past due")
    urgency: Urgency
