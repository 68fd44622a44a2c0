"""Tests for the MCP server tools (requires the mcp extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from gytax.mcp import server  # noqa: E402


class TestTaxTools:
    def test_property_tax(self):
        data = asyncio.run(server.property_tax(
            annual_rental_value=1_000_000, location_type="georgetown", property_type="residential",
        ))

        assert data["annual_tax"] == pytest.approx(5000)

    def test_project_salary(self):
        data = asyncio.run(server.project_salary(
            basic_salary=200000,
            increase_percent=10,
            payment_frequency="monthly",
            taxable_allowances=None,
            non_taxable_allowances=None,
            months=12,
        ))

        assert data["monthly_net_change"] == pytest.approx(14160)
        assert len(data["projections"]) == 12

    def test_invalid_input_returns_error(self):
        data = asyncio.run(server.project_salary(
            basic_salary=-1,
            increase_percent=10,
            payment_frequency="monthly",
            taxable_allowances=None,
            non_taxable_allowances=None,
            months=12,
        ))

        assert "error" in data


class TestLoanTools:
    def test_compare_extra_payments(self):
        data = asyncio.run(server.compare_extra_payments(
            balance=2_500_000,
            annual_interest_rate=0.12,
            monthly_payment=60000,
            extra_amount=300_000,
            every_months=6,
            start_month=6,
            max_months=120,
        ))

        assert data["amortizes"] is True
        assert data["months_saved"] > 0
        assert data["complete"] is True

    def test_compare_capped_returns_no_savings(self):
        data = asyncio.run(server.compare_extra_payments(
            balance=1_000_000,
            annual_interest_rate=0.12,
            monthly_payment=11_000,
            extra_amount=100_000,
            every_months=6,
            start_month=6,
            max_months=120,
        ))

        assert data["complete"] is False
        assert data["months_saved"] is None
        assert data["interest_saved"] is None

    def test_project_payoff(self):
        data = asyncio.run(server.project_payoff(
            balance=3000, annual_interest_rate=0, monthly_payment=1000, as_of="2026-01-31",
        ))

        assert data["projected_date"] == "2026-04-30"

    def test_project_payoff_bad_date(self):
        data = asyncio.run(server.project_payoff(
            balance=3000, annual_interest_rate=0, monthly_payment=1000, as_of="soon",
        ))

        assert "error" in data


def test_upcoming_deadlines():
    data = asyncio.run(server.upcoming_deadlines(as_of="2026-05-20", limit=3))

    assert data["count"] == 3
    assert data["events"][0]["name"] == "NIS Payment - June"


def test_upcoming_deadlines_before_earliest_rules_year():
    data = asyncio.run(server.upcoming_deadlines(as_of="2025-05-20", limit=3))

    assert "error" not in data
    assert data["events"][0]["date"] == "2025-06-14"
