"""Tests for tax rules loading, validation and the frequency table."""

import logging
from datetime import date
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

import gytax
from gytax.sdk.taxes import (
    TaxRules,
    TaxRulesNotFoundError,
    convert_from_monthly,
    convert_to_monthly,
    load_tax_rules,
    resolve_frequency,
    rules_for_date,
)

FREQUENCIES = ["daily", "weekly", "fortnightly", "monthly", "yearly"]

PACKAGE_RULES = Path(gytax.__file__).parent / "tax-rules" / "2026.yaml"


def package_rules_data() -> dict:
    with open(PACKAGE_RULES) as f:
        return yaml.safe_load(f)


def write_override(config_dir: Path, year: str, data: dict) -> Path:
    rules_dir = config_dir / "tax-rules"
    rules_dir.mkdir(exist_ok=True)
    path = rules_dir / f"{year}.yaml"
    path.write_text(yaml.dump(data))
    return path


class TestLoadTaxRules:
    def test_default_year(self):
        rules = load_tax_rules()

        assert set(rules.frequencies) == set(FREQUENCIES)
        assert rules.paye.lower_rate == 0.25
        assert rules.paye.upper_rate == 0.35
        assert rules.insurance.monthly_premiums["family"] == 4970

    def test_cached(self):
        assert load_tax_rules() is load_tax_rules("2026")

    def test_later_year_falls_back_to_latest_rules(self):
        assert load_tax_rules("2031") is load_tax_rules("2026")

    def test_earlier_year_not_found(self):
        with pytest.raises(TaxRulesNotFoundError):
            load_tax_rules("2019")

    def test_config_override(self, config_dir):
        data = package_rules_data()
        data["paye"]["lower_rate"] = 0.28
        write_override(config_dir, "2026", data)

        rules = load_tax_rules("2026")
        assert rules.paye.lower_rate == 0.28

    def test_override_adds_new_year(self, config_dir):
        data = package_rules_data()
        data["nis"]["payment_due_day"] = 15
        write_override(config_dir, "2027", data)

        assert load_tax_rules("2027").nis.payment_due_day == 15
        assert load_tax_rules("2026").nis.payment_due_day == 14

    def test_invalid_override_rejected(self, config_dir):
        data = package_rules_data()
        data["frequencies"]["weekly"]["periods_per_year"] = 12
        write_override(config_dir, "2026", data)

        with pytest.raises(ValidationError, match="annualizes"):
            load_tax_rules("2026")

    def test_rules_for_date_before_earliest_year(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gytax.sdk.taxes.rules"):
            rules = rules_for_date(date(2025, 5, 20))

        assert rules is load_tax_rules("2026")
        assert "using 2026" in caplog.text

    def test_rules_for_date_uses_year_file(self, config_dir):
        data = package_rules_data()
        data["nis"]["payment_due_day"] = 15
        write_override(config_dir, "2027", data)

        assert rules_for_date(date(2027, 1, 1)).nis.payment_due_day == 15
        assert rules_for_date(date(2026, 12, 31)).nis.payment_due_day == 14

    def test_rules_are_immutable(self):
        rules = load_tax_rules()
        with pytest.raises(ValidationError):
            rules.paye.lower_rate = 0.5


class TestTaxRulesValidation:
    def test_monthly_required(self):
        data = package_rules_data()
        del data["frequencies"]["monthly"]
        del data["qualification_allowances"]["monthly"]

        with pytest.raises(ValidationError, match="monthly"):
            TaxRules.model_validate(data)

    def test_qualification_for_unknown_frequency(self):
        data = package_rules_data()
        data["qualification_allowances"]["hourly"] = {"none": 0}

        with pytest.raises(ValidationError, match="hourly"):
            TaxRules.model_validate(data)

    def test_deadline_day_must_exist_in_month(self):
        data = package_rules_data()
        data["deadlines"][0]["month"] = 6
        data["deadlines"][0]["day"] = 31

        with pytest.raises(ValidationError, match="only 30 days"):
            TaxRules.model_validate(data)

    def test_deadline_rejects_february_29(self):
        data = package_rules_data()
        data["deadlines"][0]["month"] = 2
        data["deadlines"][0]["day"] = 29

        with pytest.raises(ValidationError, match="only 28 days"):
            TaxRules.model_validate(data)

    def test_periods_per_month_converted_to_factor(self):
        rules = load_tax_rules()
        assert rules.frequencies["weekly"].factor == pytest.approx(1 / 4.33)
        assert rules.frequencies["yearly"].factor == 12


class TestFrequencyTable:
    @pytest.mark.parametrize("frequency", FREQUENCIES)
    def test_annualization_consistent(self, frequency):
        config = load_tax_rules().frequencies[frequency]
        assert config.periods_per_year * config.factor == pytest.approx(12, rel=0.01)

    @pytest.mark.parametrize("frequency", FREQUENCIES)
    def test_conversion_round_trip(self, frequency):
        amount = 123456.78
        assert convert_to_monthly(convert_from_monthly(amount, frequency), frequency) == pytest.approx(amount)

    def test_convert_from_monthly(self):
        assert convert_from_monthly(120000, "yearly") == 1440000
        assert convert_from_monthly(4330, "weekly") == pytest.approx(1000)

    def test_resolve_known(self):
        config, fell_back = resolve_frequency("fortnightly")
        assert config.label == "Fortnightly"
        assert fell_back is False

    def test_resolve_unknown_falls_back(self):
        config, fell_back = resolve_frequency("hourly")
        assert config.label == "Monthly"
        assert fell_back is True
