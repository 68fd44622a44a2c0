"""Guyana PAYE, NIS and net pay calculations.

Computes a full salary breakdown for one pay period in the input's native
frequency, then derives monthly and annual equivalents and the semi-annual
gratuity package. Pure calculation - callers validate inputs (TaxInputs
rejects negative amounts) and own any persistence or presentation.
"""

from typing import Optional

from ..schemas import TaxInputs, TaxResults
from .rules import load_tax_rules, resolve_frequency
from .schemas import PayeRules, TaxRules


def round_currency(amount: float) -> int:
    """Round to whole currency units (0.50+ rounds away from zero).

    Calculations carry full precision; rounding happens only where figures
    are presented.
    """
    return int(amount + 0.5) if amount >= 0 else int(amount - 0.5)


def calculate_paye(taxable_income: float, threshold: float, paye: PayeRules) -> float:
    """Two-band PAYE: lower rate up to the threshold, upper rate above it."""
    if taxable_income <= threshold:
        return taxable_income * paye.lower_rate
    return threshold * paye.lower_rate + (taxable_income - threshold) * paye.upper_rate


def calculate_tax(inputs: TaxInputs, rules: Optional[TaxRules] = None) -> TaxResults:
    """Calculate gross income, statutory deductions and net pay.

    Args:
        inputs: Salary profile, amounts per pay period of inputs.payment_frequency
        rules: Tax rules (default: current year's rules)

    Returns:
        TaxResults with per-period, monthly and annual figures. An unknown
        payment frequency is computed as monthly and noted in warnings.
    """
    rules = rules or load_tax_rules()
    warnings = []

    freq, fell_back = resolve_frequency(inputs.payment_frequency, rules)
    frequency_key = "monthly" if fell_back else inputs.payment_frequency
    if fell_back:
        warnings.append(
            f"Unknown payment frequency '{inputs.payment_frequency}'; calculated as monthly"
        )

    # Qualification allowance is non-taxable
    qualification_allowance = (
        rules.qualification_allowances.get(frequency_key, {}).get(inputs.qualification_type, 0)
    )
    non_taxable_allowances = inputs.non_taxable_allowances + qualification_allowance

    # Plan premiums are monthly; custom premiums are already per period
    if inputs.insurance_type == "custom":
        insurance_premium = inputs.custom_insurance_premium
    else:
        monthly_premium = rules.insurance.monthly_premiums.get(inputs.insurance_type, 0)
        insurance_premium = monthly_premium * freq.factor

    # Gratuity accrues on monthly basic salary
    monthly_basic_salary = inputs.basic_salary / freq.factor
    monthly_gratuity_accrual = monthly_basic_salary * (inputs.gratuity_rate / 100)
    six_month_gratuity = monthly_gratuity_accrual * inputs.gratuity_period

    gross_income = (
        inputs.basic_salary
        + inputs.taxable_allowances
        + non_taxable_allowances
        + inputs.overtime_income
        + inputs.second_job_income
    )

    # Deductions and allowances
    personal_allowance = max(freq.personal_allowance, gross_income / 3)
    # Rate applies to the lesser of income and the insurable ceiling
    nis_contribution = min(gross_income * freq.nis_rate, freq.nis_ceiling * freq.nis_rate)
    child_allowance = inputs.child_count * freq.child_allowance
    overtime_allowance = min(inputs.overtime_income, freq.overtime_max)
    second_job_allowance = min(inputs.second_job_income, freq.second_job_max)
    actual_insurance_deduction = min(
        insurance_premium,
        gross_income * rules.insurance.max_gross_share,
        freq.insurance_max_monthly,
    )

    gross_income_for_taxable_calculation = (
        gross_income - non_taxable_allowances - overtime_allowance - second_job_allowance
    )

    # Chargeable income
    taxable_income = max(
        0,
        gross_income_for_taxable_calculation
        - personal_allowance
        - nis_contribution
        - child_allowance
        - actual_insurance_deduction,
    )

    income_tax = calculate_paye(taxable_income, freq.tax_threshold, rules.paye)

    total_deductions = (
        nis_contribution + income_tax + inputs.loan_payment + inputs.credit_union_deduction
    )
    net_pay = (
        gross_income
        - nis_contribution
        - income_tax
        - inputs.loan_payment
        - inputs.credit_union_deduction
    )

    # Monthly equivalents
    monthly_gross_income = gross_income / freq.factor
    monthly_net_pay = net_pay / freq.factor
    monthly_nis = nis_contribution / freq.factor
    monthly_paye = income_tax / freq.factor

    # Gratuity months: 6 pays the accrual, 12 adds the annual vacation lump
    month_six_total = monthly_net_pay + six_month_gratuity
    month_twelve_total = month_six_total + inputs.vacation_allowance

    periods = freq.periods_per_year
    annual_gross_income = gross_income * periods
    annual_nis = nis_contribution * periods
    annual_paye = income_tax * periods
    annual_net_pay = net_pay * periods
    annual_gratuity_total = six_month_gratuity * 2
    annual_total = annual_net_pay + annual_gratuity_total + inputs.vacation_allowance

    if annual_gross_income > 0:
        effective_tax_rate = (annual_paye + annual_nis) / annual_gross_income * 100
    else:
        effective_tax_rate = 0.0

    return TaxResults(
        payment_frequency=inputs.payment_frequency,
        frequency_config=freq,
        basic_salary=inputs.basic_salary,
        monthly_basic_salary=monthly_basic_salary,
        taxable_allowances=inputs.taxable_allowances,
        non_taxable_allowances=non_taxable_allowances,
        vacation_allowance=inputs.vacation_allowance,
        qualification_type=inputs.qualification_type,
        qualification_allowance=qualification_allowance,
        overtime_income=inputs.overtime_income,
        second_job_income=inputs.second_job_income,
        child_count=inputs.child_count,
        loan_payment=inputs.loan_payment,
        credit_union_deduction=inputs.credit_union_deduction,
        insurance_premium=insurance_premium,
        actual_insurance_deduction=actual_insurance_deduction,
        gratuity_rate=inputs.gratuity_rate,
        gross_income=gross_income,
        gross_income_for_taxable_calculation=gross_income_for_taxable_calculation,
        personal_allowance=personal_allowance,
        nis_contribution=nis_contribution,
        child_allowance=child_allowance,
        overtime_allowance=overtime_allowance,
        second_job_allowance=second_job_allowance,
        taxable_income=taxable_income,
        income_tax=income_tax,
        net_pay=net_pay,
        total_deductions=total_deductions,
        monthly_gross_income=monthly_gross_income,
        monthly_net_pay=monthly_net_pay,
        monthly_nis=monthly_nis,
        monthly_paye=monthly_paye,
        monthly_gratuity_accrual=monthly_gratuity_accrual,
        six_month_gratuity=six_month_gratuity,
        month_six_total=month_six_total,
        month_twelve_total=month_twelve_total,
        annual_gross_income=annual_gross_income,
        annual_nis=annual_nis,
        annual_paye=annual_paye,
        annual_net_pay=annual_net_pay,
        annual_gratuity_total=annual_gratuity_total,
        annual_total=annual_total,
        effective_tax_rate=effective_tax_rate,
        warnings=warnings,
    )
