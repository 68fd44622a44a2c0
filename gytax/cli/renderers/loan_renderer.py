"""Rich renderers for loan payoff, amortization and payment plans."""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gytax.sdk.loans import (
    AmortizationSchedule,
    PayoffComparison,
    PayoffProjection,
    PlanMonth,
)

from .tax_renderer import _fmt


NON_AMORTIZING_NOTE = (
    "The monthly payment does not cover the monthly interest; "
    "this balance will never be paid off at the current payment."
)


def render_payoff_projections(console: Console, projections: List[PayoffProjection]) -> None:
    table = Table(title="Loan Payoff", box=box.ROUNDED)
    table.add_column("Loan", style="cyan")
    table.add_column("Balance", justify="right")
    table.add_column("Months Left", justify="right")
    table.add_column("Payoff Date", justify="right")
    for p in projections:
        if p.amortizes:
            months, payoff = str(p.months_remaining), p.projected_date
        else:
            months, payoff = "[red]never[/red]", "[red]-[/red]"
        table.add_row(p.name or "-", _fmt(p.current_balance), months, payoff)
    console.print(table)

    if any(not p.amortizes for p in projections):
        _render_non_amortizing(console)


def render_schedule(console: Console, schedule: AmortizationSchedule, show_rows: bool = True) -> None:
    if not schedule.amortizes:
        _render_non_amortizing(console)
        return

    if show_rows:
        table = Table(title="Amortization Schedule", box=box.SIMPLE)
        table.add_column("Month", justify="right")
        table.add_column("Payment", justify="right")
        table.add_column("Extra", justify="right")
        table.add_column("Interest", justify="right")
        table.add_column("Principal", justify="right")
        table.add_column("Balance", justify="right")
        for row in schedule.rows:
            table.add_row(
                str(row.month),
                _fmt(row.payment),
                _fmt(row.extra_payment) if row.extra_payment else "-",
                _fmt(row.interest),
                _fmt(row.principal),
                _fmt(row.balance),
            )
        console.print(table)

    if schedule.paid_off:
        console.print(f"Paid off in [bold]{schedule.months}[/bold] months, "
                      f"total interest {_fmt(schedule.total_interest)}")
    else:
        remaining = schedule.rows[-1].balance if schedule.rows else schedule.starting_balance
        console.print(f"[yellow]Not paid off within {schedule.months} months; "
                      f"{_fmt(remaining)} remaining[/yellow]")


def render_comparison(console: Console, comparison: PayoffComparison) -> None:
    if not comparison.amortizes:
        _render_non_amortizing(console)
        return

    extra = comparison.with_extra.extra
    table = Table(title="Extra Payment Comparison", box=box.ROUNDED)
    table.add_column("", style="bold")
    table.add_column("Regular", justify="right")
    table.add_column(f"+{_fmt(extra.amount)} every {extra.every_months} mo", justify="right")
    table.add_row("Months to payoff", str(comparison.regular_payoff_months), str(comparison.extra_payoff_months))
    table.add_row(
        "Total interest",
        _fmt(comparison.regular.total_interest),
        _fmt(comparison.with_extra.total_interest),
    )
    console.print(table)

    if not comparison.complete:
        console.print(f"[yellow]Not paid off within {comparison.regular.months} months; "
                      "raise --max-months to compare savings.[/yellow]")
        return

    console.print(f"[green]Saves {comparison.months_saved} months and "
                  f"{_fmt(comparison.interest_saved)} in interest[/green]")


def render_payment_plan(console: Console, plan: List[PlanMonth]) -> None:
    table = Table(title="Payment Plan", box=box.SIMPLE)
    table.add_column("Month")
    table.add_column("Payment", justify="right")
    table.add_column("Extra", justify="right")
    table.add_column("Principal", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Source")
    for row in plan:
        table.add_row(
            row.month_name,
            _fmt(row.total_payment),
            _fmt(row.extra_payment) if row.extra_payment else "-",
            _fmt(row.principal_paid),
            _fmt(row.interest_paid),
            _fmt(row.remaining_balance),
            f"[green]{row.source}[/green]" if row.source == "Gratuity" else row.source,
        )
    console.print(table)


def _render_non_amortizing(console: Console) -> None:
    console.print(Panel(
        f"[yellow]{NON_AMORTIZING_NOTE}[/yellow]",
        title="Note",
        border_style="yellow"
    ))
