"""Tests for the loan CLI commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from gytax.cli.__main__ import cli

TERMS = ["--balance", "2500000", "--rate", "0.12", "--payment", "60000"]


@pytest.fixture
def runner():
    return CliRunner()


def invoke_json(runner, args):
    result = runner.invoke(cli, args + ["--format", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestLoanPayoff:
    def test_explicit_terms(self, runner):
        data = invoke_json(runner, [
            "loan", "payoff", "--balance", "3000", "--rate", "0", "--payment", "1000",
            "--date", "2026-01-31",
        ])

        assert data == [{
            "name": None,
            "current_balance": 3000.0,
            "months_remaining": 3,
            "amortizes": True,
            "projected_date": "2026-04-30",
        }]

    def test_profile_loans(self, runner, config_dir):
        (config_dir / "profile.yaml").write_text(yaml.dump({"loans": [
            {"name": "Car", "current_balance": 2500000, "annual_interest_rate": 0.12, "monthly_payment": 60000},
            {"name": "Stuck", "current_balance": 1000000, "annual_interest_rate": 0.12, "monthly_payment": 5000},
        ]}))

        data = invoke_json(runner, ["loan", "payoff", "--date", "2026-01-15"])

        assert [p["name"] for p in data] == ["Car", "Stuck"]
        assert data[0]["months_remaining"] == 55
        assert data[1]["amortizes"] is False
        assert data[1]["projected_date"] is None

    def test_non_amortizing_text(self, runner):
        result = runner.invoke(cli, ["loan", "payoff", "--balance", "1000000", "--rate", "0.12", "--payment", "5000"])

        assert result.exit_code == 0, result.output
        assert "never" in result.output

    def test_no_profile(self, runner):
        result = runner.invoke(cli, ["loan", "payoff"])

        assert result.exit_code == 1
        assert "No profile found" in result.output

    def test_profile_without_loans(self, runner, config_dir):
        (config_dir / "profile.yaml").write_text(yaml.dump({"salary": {"basic_salary": 1}}))

        result = runner.invoke(cli, ["loan", "payoff"])

        assert result.exit_code == 1
        assert "No loans" in result.output

    def test_partial_terms(self, runner):
        result = runner.invoke(cli, ["loan", "payoff", "--balance", "1000"])
        assert result.exit_code == 2

    def test_rate_must_be_decimal(self, runner):
        result = runner.invoke(cli, ["loan", "payoff", "--balance", "1000", "--rate", "12", "--payment", "100"])
        assert result.exit_code == 2


class TestLoanSimulate:
    def test_schedule(self, runner):
        data = invoke_json(runner, ["loan", "simulate"] + TERMS)

        assert data["paid_off"] is True
        assert data["months"] == len(data["rows"])
        assert data["rows"][-1]["balance"] == 0

    def test_cap(self, runner):
        data = invoke_json(runner, ["loan", "simulate"] + TERMS + ["--max-months", "12"])

        assert data["months"] == 12
        assert data["paid_off"] is False

    def test_summary_text(self, runner):
        result = runner.invoke(cli, ["loan", "simulate"] + TERMS + ["--summary"])

        assert result.exit_code == 0, result.output
        assert "Paid off in" in result.output


class TestLoanCompare:
    def test_savings(self, runner):
        data = invoke_json(runner, ["loan", "compare"] + TERMS + ["--extra", "300000", "--start", "6"])

        assert data["amortizes"] is True
        assert data["months_saved"] > 0
        assert data["interest_saved"] > 0
        assert "rows" not in data["regular"]
        assert data["complete"] is True

    def test_capped_comparison_text(self, runner):
        result = runner.invoke(cli, [
            "loan", "compare", "--balance", "1000000", "--rate", "0.12", "--payment", "11000",
            "--extra", "100000", "--start", "6",
        ])

        assert result.exit_code == 0, result.output
        assert "--max-months" in result.output
        assert "Saves" not in result.output

    def test_extra_required(self, runner):
        result = runner.invoke(cli, ["loan", "compare"] + TERMS)
        assert result.exit_code == 2


class TestLoanPlan:
    def test_plan(self, runner):
        data = invoke_json(runner, [
            "loan", "plan", *TERMS, "--extra", "300000", "--every", "6", "--start", "6", "--first-month", "1",
        ])

        assert len(data) == 6
        assert data[0]["month_name"] == "January"
        assert data[5]["source"] == "Gratuity"
        assert all(row["source"] == "Salary" for row in data[:5])
