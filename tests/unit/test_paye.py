"""Tests for the PAYE/NIS salary breakdown (calculate_tax)."""

import logging

import pytest
from pydantic import ValidationError

from gytax.sdk.schemas import TaxInputs
from gytax.sdk.taxes import calculate_tax, calculate_paye, load_tax_rules, round_currency


def monthly(**fields):
    return calculate_tax(TaxInputs(payment_frequency="monthly", **fields))


class TestWorkedExample:
    """Monthly salary of 200,000 with no other income."""

    def test_deductions(self):
        r = monthly(basic_salary=200000)

        assert r.gross_income == 200000
        assert r.personal_allowance == 140000
        assert r.nis_contribution == pytest.approx(11200)
        assert r.taxable_income == pytest.approx(48800)
        assert r.income_tax == pytest.approx(12200)
        assert r.net_pay == pytest.approx(176600)

    def test_gratuity_package(self):
        r = monthly(basic_salary=200000)

        assert r.monthly_gratuity_accrual == pytest.approx(45000)
        assert r.six_month_gratuity == pytest.approx(270000)
        assert r.month_six_total == pytest.approx(446600)
        assert r.month_twelve_total == pytest.approx(446600)
        assert r.annual_gratuity_total == pytest.approx(540000)

    def test_annual_figures(self):
        r = monthly(basic_salary=200000)

        assert r.annual_gross_income == pytest.approx(2400000)
        assert r.annual_net_pay == pytest.approx(2119200)
        assert r.annual_total == pytest.approx(2659200)
        assert r.effective_tax_rate == pytest.approx(11.7)

    def test_monthly_equivalents_match_for_monthly_pay(self):
        r = monthly(basic_salary=200000)

        assert r.monthly_gross_income == pytest.approx(r.gross_income)
        assert r.monthly_net_pay == pytest.approx(r.net_pay)
        assert r.monthly_basic_salary == pytest.approx(r.basic_salary)

    def test_vacation_paid_in_month_twelve_only(self):
        r = monthly(basic_salary=200000, vacation_allowance=100000)

        assert r.month_six_total == pytest.approx(446600)
        assert r.month_twelve_total == pytest.approx(546600)
        assert r.annual_total == pytest.approx(2759200)


class TestPayeBands:
    """Two-band PAYE schedule."""

    def test_upper_band(self):
        r = monthly(basic_salary=600000)

        # Personal allowance is a third of gross above 420,000
        assert r.personal_allowance == pytest.approx(200000)
        # NIS capped at the insurable ceiling
        assert r.nis_contribution == pytest.approx(15680)
        assert r.taxable_income == pytest.approx(384320)
        assert r.income_tax == pytest.approx(260000 * 0.25 + 124320 * 0.35)
        assert r.net_pay == pytest.approx(600000 - 15680 - 108512)

    def test_calculate_paye_at_threshold(self):
        paye = load_tax_rules().paye
        assert calculate_paye(260000, 260000, paye) == pytest.approx(65000)
        assert calculate_paye(260001, 260000, paye) == pytest.approx(65000.35)


class TestEdgeCases:
    def test_zero_income(self):
        r = monthly(basic_salary=0)

        assert r.gross_income == 0
        assert r.nis_contribution == 0
        assert r.income_tax == 0
        assert r.net_pay == 0
        assert r.taxable_income == 0
        assert r.effective_tax_rate == 0

    def test_taxable_income_never_negative(self):
        r = monthly(basic_salary=100000, child_count=10)
        assert r.taxable_income == 0
        assert r.income_tax == 0

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            TaxInputs(basic_salary=-1)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            TaxInputs(basic_salary=1, bonus=5)

    def test_unknown_frequency_falls_back_to_monthly(self, caplog):
        with caplog.at_level(logging.WARNING):
            r = calculate_tax(TaxInputs(payment_frequency="quarterly", basic_salary=200000))

        assert r.frequency_config.label == "Monthly"
        assert r.net_pay == pytest.approx(176600)
        assert r.payment_frequency == "quarterly"
        assert len(r.warnings) == 1
        assert "quarterly" in r.warnings[0]
        assert "quarterly" in caplog.text

    def test_known_frequency_has_no_warnings(self):
        assert monthly(basic_salary=200000).warnings == []


class TestAllowances:
    def test_children(self):
        r = monthly(basic_salary=200000, child_count=2)

        assert r.child_allowance == 20000
        assert r.taxable_income == pytest.approx(28800)
        assert r.income_tax == pytest.approx(7200)

    def test_overtime_allowance_capped(self):
        r = monthly(basic_salary=200000, overtime_income=60000)

        assert r.overtime_allowance == 50000
        assert r.gross_income == 260000
        assert r.nis_contribution == pytest.approx(14560)
        assert r.gross_income_for_taxable_calculation == pytest.approx(210000)
        assert r.taxable_income == pytest.approx(55440)

    def test_second_job_allowance_capped(self):
        r = monthly(basic_salary=200000, second_job_income=20000)
        assert r.second_job_allowance == 20000

        r = monthly(basic_salary=200000, second_job_income=80000)
        assert r.second_job_allowance == 50000

    def test_qualification_allowance_is_non_taxable(self):
        r = monthly(basic_salary=200000, qualification_type="masters")

        assert r.qualification_allowance == 22000
        assert r.non_taxable_allowances == 22000
        assert r.gross_income == 222000
        assert r.gross_income_for_taxable_calculation == pytest.approx(200000)

    def test_qualification_allowance_uses_pay_frequency_table(self):
        r = calculate_tax(TaxInputs(payment_frequency="weekly", basic_salary=50000, qualification_type="acca"))
        assert r.qualification_allowance == 3462


class TestInsurance:
    def test_plan_premium(self):
        r = monthly(basic_salary=200000, insurance_type="family")

        assert r.insurance_premium == 4970
        assert r.actual_insurance_deduction == 4970
        assert r.taxable_income == pytest.approx(43830)

    def test_plan_premium_scaled_to_frequency(self):
        r = calculate_tax(TaxInputs(payment_frequency="weekly", basic_salary=50000, insurance_type="employee"))
        assert r.insurance_premium == pytest.approx(1469 / 4.33)

    def test_custom_premium_capped_at_share_of_gross(self):
        r = monthly(basic_salary=200000, insurance_type="custom", custom_insurance_premium=30000)

        assert r.insurance_premium == 30000
        assert r.actual_insurance_deduction == pytest.approx(20000)

    def test_deduction_capped_at_frequency_maximum(self):
        r = monthly(basic_salary=1000000, insurance_type="custom", custom_insurance_premium=80000)
        assert r.actual_insurance_deduction == 50000


class TestInvariants:
    @pytest.mark.parametrize("frequency", ["daily", "weekly", "fortnightly", "monthly", "yearly"])
    def test_net_pay_identity(self, frequency):
        r = calculate_tax(TaxInputs(
            payment_frequency=frequency,
            basic_salary=100000,
            taxable_allowances=5000,
            non_taxable_allowances=3000,
            loan_payment=2000,
            credit_union_deduction=1000,
        ))

        assert r.net_pay == pytest.approx(r.gross_income - r.total_deductions)
        assert r.total_deductions == pytest.approx(
            r.nis_contribution + r.income_tax + r.loan_payment + r.credit_union_deduction
        )

    def test_net_pay_increases_with_salary(self):
        previous = None
        for salary in range(0, 1_000_001, 10000):
            net = monthly(basic_salary=salary).net_pay
            if previous is not None:
                assert net >= previous
            previous = net

    @pytest.mark.parametrize("frequency", ["daily", "weekly", "fortnightly", "monthly", "yearly"])
    def test_tax_and_taxable_income_never_decrease_with_salary(self, frequency):
        freq = load_tax_rules().frequencies[frequency]
        top = 3 * max(freq.nis_ceiling, freq.tax_threshold + freq.personal_allowance)
        boundaries = [
            freq.nis_ceiling,
            freq.tax_threshold,
            freq.personal_allowance * 3,
            freq.tax_threshold + freq.personal_allowance,
        ]
        salaries = sorted(
            {top * i / 400 for i in range(401)}
            | {b + delta for b in boundaries for delta in (-1, 0, 1)}
        )

        results = [
            calculate_tax(TaxInputs(payment_frequency=frequency, basic_salary=s)) for s in salaries
        ]

        for before, after in zip(results, results[1:]):
            assert after.taxable_income >= before.taxable_income - 1e-9
            assert after.income_tax >= before.income_tax - 1e-9
        assert results[0].taxable_income < freq.tax_threshold < results[-1].taxable_income
        assert results[-1].basic_salary > freq.nis_ceiling

    @pytest.mark.parametrize("salary", [0, 100000, 280000, 500000, 2000000])
    def test_nis_never_exceeds_ceiling(self, salary):
        r = monthly(basic_salary=salary)
        freq = r.frequency_config
        assert r.nis_contribution <= freq.nis_ceiling * freq.nis_rate + 1e-9

    def test_weekly_pay(self):
        r = calculate_tax(TaxInputs(payment_frequency="weekly", basic_salary=50000))

        assert r.personal_allowance == 32333
        assert r.nis_contribution == pytest.approx(2800)
        assert r.taxable_income == pytest.approx(14867)
        assert r.income_tax == pytest.approx(3716.75)
        assert r.monthly_basic_salary == pytest.approx(50000 * 4.33)
        assert r.annual_gross_income == pytest.approx(50000 * 52)


class TestRoundCurrency:
    def test_half_rounds_away_from_zero(self):
        assert round_currency(2.5) == 3
        assert round_currency(-2.5) == -3
        assert round_currency(2.49) == 2
        assert round_currency(0) == 0
