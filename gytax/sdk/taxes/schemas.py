"""Pydantic schemas for tax rules validation.

These schemas validate the tax-rules/*.yaml files and provide typed access
to statutory parameters like the frequency table, PAYE rates, NIS ceilings
and property tax rates.
"""

import calendar
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Months per year every frequency must annualize to (periods_per_year * factor)
MONTHS_PER_YEAR = 12
ANNUALIZATION_TOLERANCE = 0.01


class FrequencyConfig(BaseModel):
    """Statutory parameters for one pay frequency.

    Amounts are denominated in the frequency's own pay period. `factor`
    converts a monthly amount into this frequency (monthly * factor).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    factor: float = Field(..., gt=0, description="Multiplier from monthly to this frequency")
    personal_allowance: float = Field(..., ge=0)
    tax_threshold: float = Field(..., ge=0, description="Upper bound of the lower PAYE band")
    nis_rate: float = Field(..., ge=0, le=1)
    nis_ceiling: float = Field(..., ge=0, description="Insurable earnings ceiling")
    child_allowance: float = Field(..., ge=0, description="Allowance per child")
    overtime_max: float = Field(..., ge=0)
    second_job_max: float = Field(..., ge=0)
    insurance_max_monthly: float = Field(..., ge=0)
    period_label: str
    periods_per_year: int = Field(..., gt=0)

    @model_validator(mode="before")
    @classmethod
    def factor_from_periods_per_month(cls, data):
        """Accept `periods_per_month` in place of `factor`."""
        if isinstance(data, dict) and "periods_per_month" in data:
            data = dict(data)
            periods_per_month = data.pop("periods_per_month")
            if "factor" not in data:
                data["factor"] = 1 / periods_per_month
        return data


class PayeRules(BaseModel):
    """Two-band PAYE schedule rates."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_rate: float = Field(..., ge=0, le=1, description="Rate up to the threshold")
    upper_rate: float = Field(..., ge=0, le=1, description="Rate above the threshold")


class InsuranceRules(BaseModel):
    """Medical insurance premium deduction rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_gross_share: float = Field(..., ge=0, le=1, description="Deduction cap as share of gross")
    monthly_premiums: Dict[str, float] = Field(..., description="Monthly premium by plan type")


class GratuityRules(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_rate: float = Field(..., ge=0, description="Percent of basic salary")
    accrual_months: int = Field(..., gt=0)


class PropertyTaxRates(BaseModel):
    """Rates for one location class, as a decimal of annual rental value."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    residential: float = Field(..., ge=0, le=1)
    commercial: float = Field(..., ge=0, le=1)


class NisRules(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    payment_due_day: int = Field(..., ge=1, le=28)
    pension_weekly_contributions: int = Field(..., gt=0)


class TaxDeadline(BaseModel):
    """Fixed annual statutory deadline."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    type: Literal["gra_filing", "property_tax", "nis_payment"]

    @model_validator(mode="after")
    def check_day_in_month(self) -> "TaxDeadline":
        # Non-leap year: the deadline must exist every year
        days_in_month = calendar.monthrange(2026, self.month)[1]
        if self.day > days_in_month:
            raise ValueError(f"{self.name}: month {self.month} has only {days_in_month} days")
        return self


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    paye: PayeRules
    insurance: InsuranceRules
    frequencies: Dict[str, FrequencyConfig]
    qualification_allowances: Dict[str, Dict[str, float]]
    gratuity: GratuityRules
    property_tax: Dict[str, PropertyTaxRates]
    nis: NisRules
    deadlines: List[TaxDeadline] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_frequency_table(self) -> "TaxRules":
        """Monthly must exist and every frequency must annualize to 12 months."""
        if "monthly" not in self.frequencies:
            raise ValueError("frequencies must define 'monthly'")

        for key, config in self.frequencies.items():
            months = config.periods_per_year * config.factor
            if abs(months - MONTHS_PER_YEAR) > MONTHS_PER_YEAR * ANNUALIZATION_TOLERANCE:
                raise ValueError(
                    f"frequency '{key}' annualizes to {months:.3f} months "
                    f"(periods_per_year={config.periods_per_year}, factor={config.factor:.5f})"
                )

        unknown = set(self.qualification_allowances) - set(self.frequencies)
        if unknown:
            raise ValueError(f"qualification_allowances for unknown frequencies: {sorted(unknown)}")

        return self
