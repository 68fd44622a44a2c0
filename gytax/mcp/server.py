"""gy-tax MCP Server - FastMCP implementation for salary, tax and loan tools."""

import logging
from datetime import date
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from gytax.sdk import (
    calculate_tax as sdk_calculate_tax,
    calculate_property_tax,
    project_salary_increase,
    tax_calendar,
)
from gytax.sdk.loans import (
    DEFAULT_MAX_MONTHS,
    ExtraPayment,
    compare_extra_payments as sdk_compare_extra_payments,
    project_payoff as sdk_project_payoff,
)
from gytax.sdk.schemas import TaxInputs
from gytax.sdk.taxes import upcoming_events

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("gy-tax")


def _salary_inputs(**fields) -> TaxInputs:
    """Build TaxInputs, dropping fields the caller left unset."""
    return TaxInputs(**{k: v for k, v in fields.items() if v is not None})


# --- Tools ---

@mcp.tool()
async def calculate_tax(
    basic_salary: float = Field(description="Basic salary per pay period (GYD)"),
    payment_frequency: str = Field(
        default="monthly", description="Pay frequency: daily, weekly, fortnightly, monthly or yearly"
    ),
    taxable_allowances: float | None = Field(default=None, description="Taxable allowances per period"),
    non_taxable_allowances: float | None = Field(default=None, description="Non-taxable allowances per period"),
    vacation_allowance: float | None = Field(default=None, description="Annual vacation allowance"),
    qualification_type: str | None = Field(default=None, description="none, acca, masters or phd"),
    overtime_income: float | None = Field(default=None, description="Overtime income per period"),
    second_job_income: float | None = Field(default=None, description="Second job income per period"),
    child_count: int | None = Field(default=None, description="Number of qualifying children"),
    loan_payment: float | None = Field(default=None, description="Loan repayment per period"),
    credit_union_deduction: float | None = Field(default=None, description="Credit union deduction per period"),
    insurance_type: str | None = Field(
        default=None, description="none, employee, employee-one, family or custom"
    ),
    custom_insurance_premium: float | None = Field(default=None, description="Premium per period for custom"),
) -> dict[str, Any]:
    """Calculate Guyana NIS, PAYE and net pay for a salary. Returns per-period, monthly and annual figures."""
    try:
        inputs = _salary_inputs(
            basic_salary=basic_salary,
            payment_frequency=payment_frequency,
            taxable_allowances=taxable_allowances,
            non_taxable_allowances=non_taxable_allowances,
            vacation_allowance=vacation_allowance,
            qualification_type=qualification_type,
            overtime_income=overtime_income,
            second_job_income=second_job_income,
            child_count=child_count,
            loan_payment=loan_payment,
            credit_union_deduction=credit_union_deduction,
            insurance_type=insurance_type,
            custom_insurance_premium=custom_insurance_premium,
        )
        return sdk_calculate_tax(inputs).model_dump()

    except Exception as e:
        logger.error(f"Error calculating tax: {e}")
        return {"error": str(e)}


@mcp.tool()
async def project_salary(
    basic_salary: float = Field(description="Current basic salary per pay period (GYD)"),
    increase_percent: float = Field(description="Basic salary increase in percent (e.g., 8 for 8%)"),
    payment_frequency: str = Field(default="monthly", description="Pay frequency of basic_salary"),
    taxable_allowances: float | None = Field(default=None, description="Taxable allowances per period"),
    non_taxable_allowances: float | None = Field(default=None, description="Non-taxable allowances per period"),
    months: int = Field(default=12, description="Months to project (default 12)"),
) -> dict[str, Any]:
    """Project take-home pay after a salary increase, including gratuity and vacation months."""
    try:
        inputs = _salary_inputs(
            basic_salary=basic_salary,
            payment_frequency=payment_frequency,
            taxable_allowances=taxable_allowances,
            non_taxable_allowances=non_taxable_allowances,
        )
        result = project_salary_increase(inputs, increase_percent, months=months)
        return {
            "increase_percent": result.increase_percent,
            "current_monthly_net": result.current.monthly_net_pay,
            "projected_monthly_net": result.projected.monthly_net_pay,
            "monthly_net_change": result.monthly_net_change,
            "annual_total_change": result.annual_total_change,
            "projections": [p.model_dump() for p in result.projections],
        }

    except Exception as e:
        logger.error(f"Error projecting salary: {e}")
        return {"error": str(e)}


@mcp.tool()
async def property_tax(
    annual_rental_value: float = Field(description="Annual rental value (ARV) of the property in GYD"),
    location_type: str = Field(default="georgetown", description="georgetown, municipality or rural"),
    property_type: str = Field(default="residential", description="residential or commercial"),
) -> dict[str, Any]:
    """Estimate annual, quarterly and monthly property tax from the annual rental value."""
    try:
        return calculate_property_tax(annual_rental_value, location_type, property_type).model_dump()

    except Exception as e:
        logger.error(f"Error calculating property tax: {e}")
        return {"error": str(e)}


@mcp.tool()
async def compare_extra_payments(
    balance: float = Field(description="Current loan balance"),
    annual_interest_rate: float = Field(description="Annual interest rate as decimal (0.12 = 12%)"),
    monthly_payment: float = Field(description="Regular monthly payment"),
    extra_amount: float = Field(description="Extra payment amount (e.g., gratuity)"),
    every_months: int = Field(default=6, description="Months between extra payments"),
    start_month: int = Field(default=1, description="First month (1-based) with an extra payment"),
    max_months: int = Field(default=DEFAULT_MAX_MONTHS, description="Simulation cap in months (max 600)"),
) -> dict[str, Any]:
    """Compare loan payoff with and without periodic extra payments.

    Returns months and interest saved. Savings are null when either schedule
    is still unpaid at max_months (complete=false).
    """
    try:
        extra = ExtraPayment(amount=extra_amount, every_months=every_months, start_month=start_month)
        comparison = sdk_compare_extra_payments(
            balance, annual_interest_rate, monthly_payment, extra, max_months,
        )
        return {
            "amortizes": comparison.amortizes,
            "complete": comparison.complete,
            "regular_payoff_months": comparison.regular_payoff_months,
            "extra_payoff_months": comparison.extra_payoff_months,
            "regular_total_interest": comparison.regular.total_interest,
            "extra_total_interest": comparison.with_extra.total_interest,
            "months_saved": comparison.months_saved,
            "interest_saved": comparison.interest_saved,
        }

    except Exception as e:
        logger.error(f"Error comparing extra payments: {e}")
        return {"error": str(e)}


@mcp.tool()
async def project_payoff(
    balance: float = Field(description="Current loan balance"),
    annual_interest_rate: float = Field(description="Annual interest rate as decimal (0.12 = 12%)"),
    monthly_payment: float = Field(description="Regular monthly payment"),
    as_of: str | None = Field(default=None, description="Start date YYYY-MM-DD (default: today)"),
) -> dict[str, Any]:
    """Months remaining and projected payoff date for a loan."""
    try:
        start = date.fromisoformat(as_of) if as_of else date.today()
        return sdk_project_payoff(balance, annual_interest_rate, monthly_payment, start).model_dump()

    except Exception as e:
        logger.error(f"Error projecting payoff: {e}")
        return {"error": str(e)}


@mcp.tool()
async def upcoming_deadlines(
    as_of: str | None = Field(default=None, description="Reference date YYYY-MM-DD (default: today)"),
    limit: int = Field(default=6, description="Maximum number of events (default 6)"),
) -> dict[str, Any]:
    """Upcoming GRA filing, property tax and NIS payment deadlines with urgency."""
    try:
        start = date.fromisoformat(as_of) if as_of else date.today()
        events = upcoming_events(tax_calendar(start), limit)
        return {"events": [e.model_dump() for e in events], "count": len(events)}

    except Exception as e:
        logger.error(f"Error building tax calendar: {e}")
        return {"error": str(e), "events": [], "count": 0}


def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
