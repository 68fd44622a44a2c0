"""Rich renderers for salary, projection and property tax results.

Transforms SDK result models into formatted Rich tables. Figures are shown
in whole Guyana dollars; the SDK keeps full precision.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gytax.sdk.schemas import (
    CalendarEvent,
    GratuityMonth,
    PropertyTaxResult,
    SalaryProjectionResult,
    TaxResults,
    TaxSummary,
)


def render_warnings(console: Console, warnings: List[str]) -> None:
    """Render warnings as yellow note panels."""
    for warning in warnings:
        console.print(Panel(
            f"[yellow]{warning}[/yellow]",
            title="Note",
            border_style="yellow"
        ))


def render_tax_results(console: Console, results: TaxResults) -> None:
    """Render a salary breakdown: per period, monthly and annual."""
    render_warnings(console, results.warnings)

    freq = results.frequency_config
    table = Table(
        title=f"Salary Breakdown ({freq.label}, {freq.period_label})",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=28)
    table.add_column("Period", justify="right", min_width=12)
    table.add_column("Monthly", justify="right", min_width=12)
    table.add_column("Annual", justify="right", min_width=14)

    # Earnings
    table.add_row("[bold]EARNINGS[/bold]", "", "", "")
    table.add_row("  Basic Salary", _fmt(results.basic_salary), _fmt(results.monthly_basic_salary), "")
    table.add_row("  Taxable Allowances", _fmt(results.taxable_allowances), "", "")
    table.add_row("  Non-taxable Allowances", _fmt(results.non_taxable_allowances), "", "")
    if results.qualification_allowance:
        table.add_row(
            f"  [dim]incl. {results.qualification_type.upper()} allowance[/dim]",
            f"[dim]{_fmt(results.qualification_allowance)}[/dim]", "", "",
        )
    if results.overtime_income:
        table.add_row("  Overtime", _fmt(results.overtime_income), "", "")
    if results.second_job_income:
        table.add_row("  Second Job", _fmt(results.second_job_income), "", "")
    table.add_row(
        "  Gross Income",
        _fmt(results.gross_income),
        _fmt(results.monthly_gross_income),
        _fmt(results.annual_gross_income),
    )
    table.add_row("", "", "", "")

    # Allowances against chargeable income
    table.add_row("[bold]ALLOWANCES[/bold]", "", "", "")
    table.add_row("  Personal Allowance", _fmt(results.personal_allowance), "", "")
    if results.child_allowance:
        table.add_row(f"  Child Allowance ({results.child_count})", _fmt(results.child_allowance), "", "")
    if results.overtime_allowance:
        table.add_row("  Overtime Allowance", _fmt(results.overtime_allowance), "", "")
    if results.second_job_allowance:
        table.add_row("  Second Job Allowance", _fmt(results.second_job_allowance), "", "")
    if results.actual_insurance_deduction:
        table.add_row("  Insurance Deduction", _fmt(results.actual_insurance_deduction), "", "")
    table.add_row(
        "Chargeable Income",
        _fmt(results.taxable_income), "", "",
        style="dim",
    )
    table.add_row("", "", "", "")

    # Deductions
    table.add_row("[bold]DEDUCTIONS[/bold]", "", "", "")
    table.add_row(
        "  NIS", _fmt(results.nis_contribution), _fmt(results.monthly_nis), _fmt(results.annual_nis),
    )
    table.add_row(
        "  PAYE", _fmt(results.income_tax), _fmt(results.monthly_paye), _fmt(results.annual_paye),
    )
    if results.loan_payment:
        table.add_row("  Loan Payment", _fmt(results.loan_payment), "", "")
    if results.credit_union_deduction:
        table.add_row("  Credit Union", _fmt(results.credit_union_deduction), "", "")
    table.add_row("  [dim]Total Deductions[/dim]", f"[dim]{_fmt(results.total_deductions)}[/dim]", "", "")
    table.add_row("", "", "", "")

    table.add_row(
        "[bold green]NET PAY[/bold green]",
        f"[bold green]{_fmt(results.net_pay)}[/bold green]",
        f"[bold green]{_fmt(results.monthly_net_pay)}[/bold green]",
        f"[bold green]{_fmt(results.annual_net_pay)}[/bold green]",
    )

    console.print(table)

    # Gratuity package
    package = Table(show_header=False, box=None, padding=(0, 2))
    package.add_column("key", style="dim")
    package.add_column("value", justify="right")
    package.add_row(f"Gratuity ({results.gratuity_rate:g}% of basic, 6 months)", _fmt(results.six_month_gratuity))
    package.add_row("Month 6 total", _fmt(results.month_six_total))
    package.add_row("Month 12 total (incl. vacation)", _fmt(results.month_twelve_total))
    package.add_row("Annual total", _fmt(results.annual_total))
    package.add_row("Effective tax rate", f"{results.effective_tax_rate:.1f}%")
    console.print(Panel(package, title="Annual Package", border_style="dim"))


def render_projection(console: Console, result: SalaryProjectionResult) -> None:
    """Render before/after comparison and the monthly projection."""
    current, projected = result.current, result.projected

    compare = Table(title=f"Salary Increase: {result.increase_percent:g}%", box=box.ROUNDED)
    compare.add_column("", style="bold", min_width=20)
    compare.add_column("Current", justify="right", min_width=12)
    compare.add_column("Projected", justify="right", min_width=12)
    compare.add_column("Change", justify="right", min_width=12)
    for label, before, after in [
        ("Monthly Gross", current.monthly_gross_income, projected.monthly_gross_income),
        ("Monthly NIS", current.monthly_nis, projected.monthly_nis),
        ("Monthly PAYE", current.monthly_paye, projected.monthly_paye),
        ("Monthly Net Pay", current.monthly_net_pay, projected.monthly_net_pay),
        ("Annual Total", current.annual_total, projected.annual_total),
    ]:
        compare.add_row(label, _fmt(before), _fmt(after), _fmt_change(after - before))
    console.print(compare)

    months = Table(title="Projected Take-home", box=box.SIMPLE)
    months.add_column("Month")
    months.add_column("Net Pay", justify="right")
    months.add_column("Gratuity/Vacation", justify="right")
    months.add_column("Total", justify="right")
    for row in result.projections:
        style = "bold" if row.is_gratuity_month else None
        months.add_row(
            row.label,
            _fmt(row.net_pay),
            _fmt(row.gratuity_amount) if row.gratuity_amount else "-",
            _fmt(row.total_pay),
            style=style,
        )
    console.print(months)


def render_gratuity_breakdown(console: Console, schedule: List[GratuityMonth]) -> None:
    table = Table(title="Gratuity & Vacation Schedule", box=box.SIMPLE)
    table.add_column("Month")
    table.add_column("Net Pay", justify="right")
    table.add_column("Gratuity", justify="right")
    table.add_column("Vacation", justify="right")
    table.add_column("Total", justify="right")
    for row in schedule:
        table.add_row(
            row.label,
            _fmt(row.net),
            _fmt(row.gratuity) if row.gratuity else "-",
            _fmt(row.vacation) if row.vacation else "-",
            _fmt(row.total),
        )
    console.print(table)


def render_summary(console: Console, summary: TaxSummary) -> None:
    table = Table(title=f"Tax Summary as of {summary.as_of}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=14)
    table.add_column("Monthly", justify="right")
    table.add_column(f"YTD ({summary.ytd_source})", justify="right")
    table.add_column("Annual", justify="right")
    table.add_row("NIS", _fmt(summary.monthly_nis), _fmt(summary.ytd_nis), _fmt(summary.annual_nis))
    table.add_row("PAYE", _fmt(summary.monthly_paye), _fmt(summary.ytd_paye), _fmt(summary.annual_paye))
    table.add_row("Total Tax", "", _fmt(summary.ytd_total_tax), "")
    table.add_row("Net Pay", _fmt(summary.monthly_net_pay), "", _fmt(summary.annual_net_pay))
    console.print(table)
    console.print(f"Effective tax rate: {summary.effective_tax_rate:.1f}%")


def render_property_tax(console: Console, result: PropertyTaxResult) -> None:
    render_warnings(console, result.warnings)

    table = Table(show_header=False, box=box.ROUNDED, title="Property Tax Estimate")
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Annual Rental Value", _fmt(result.annual_rental_value))
    table.add_row("Class", f"{result.location_type} / {result.property_type}")
    table.add_row("Rate", f"{result.tax_rate * 100:.2f}%")
    table.add_row("Annual Tax", _fmt(result.annual_tax))
    table.add_row("Quarterly", _fmt(result.quarterly_tax))
    table.add_row("Monthly Equivalent", _fmt(result.monthly_equivalent))
    console.print(table)


URGENCY_STYLES = {
    "overdue": "bold red",
    "urgent": "red",
    "soon": "yellow",
    "upcoming": "blue",
    "future": "dim",
}


def render_calendar(console: Console, events: List[CalendarEvent]) -> None:
    table = Table(title="Tax Calendar", box=box.SIMPLE)
    table.add_column("Date")
    table.add_column("Event")
    table.add_column("Days", justify="right")
    table.add_column("Status")
    for event in events:
        style = URGENCY_STYLES.get(event.urgency, "")
        table.add_row(
            event.date,
            event.name,
            str(event.days_until),
            f"[{style}]{event.urgency}[/{style}]",
        )
    console.print(table)


def _fmt(amount: float | None) -> str:
    """Format currency amount in whole dollars."""
    if amount is None:
        return "-"
    return f"${amount:,.0f}"


def _fmt_change(amount: float) -> str:
    sign = "+" if amount > 0 else ""
    return f"{sign}{_fmt(amount)}" if amount >= 0 else f"-{_fmt(abs(amount))}"
