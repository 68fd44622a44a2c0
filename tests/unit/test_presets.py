"""Tests for government position presets."""

import pytest

from gytax.sdk.comp import COMMON_SALARY_INCREASES, POSITION_PRESETS, inputs_from_preset
from gytax.sdk.taxes import calculate_tax


class TestInputsFromPreset:
    def test_it_officer(self):
        inputs = inputs_from_preset("it-officer-2")

        assert inputs.payment_frequency == "monthly"
        assert inputs.basic_salary == 247451
        assert inputs.taxable_allowances == 20000
        assert inputs.non_taxable_allowances == 0

    def test_non_taxable_allowances_summed(self):
        inputs = inputs_from_preset("ict-eng-3")

        assert inputs.taxable_allowances == 5000
        assert inputs.non_taxable_allowances == 15000

    def test_overrides(self):
        inputs = inputs_from_preset("nurse-staff", child_count=2, insurance_type="family")

        assert inputs.child_count == 2
        assert inputs.insurance_type == "family"
        assert inputs.basic_salary == 220000

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="no-such-job"):
            inputs_from_preset("no-such-job")

    @pytest.mark.parametrize("key", sorted(POSITION_PRESETS))
    def test_every_preset_calculates(self, key):
        results = calculate_tax(inputs_from_preset(key))

        assert results.net_pay > 0
        assert results.net_pay < results.gross_income


def test_common_increases():
    percents = [pct for pct, _ in COMMON_SALARY_INCREASES]
    assert percents == sorted(percents)
    assert 8 in percents
