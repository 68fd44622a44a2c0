"""Salary, PAYE/NIS, property tax and tax calendar commands."""

import json
from datetime import date
from functools import wraps
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from gytax.sdk import (
    TaxRulesNotFoundError,
    get_setting,
    load_profile,
    load_tax_rules,
    calculate_tax,
    calculate_property_tax,
    summarize_tax,
    nis_pension_progress,
    tax_calendar,
    project_salary_increase,
    gratuity_breakdown,
    inputs_from_preset,
)
from gytax.sdk.comp import POSITION_PRESETS, COMMON_SALARY_INCREASES
from gytax.sdk.schemas import TaxInputs
from gytax.sdk.taxes import upcoming_events

from .renderers.tax_renderer import (
    render_calendar,
    render_gratuity_breakdown,
    render_projection,
    render_property_tax,
    render_summary,
    render_tax_results,
)

FREQUENCIES = ["daily", "weekly", "fortnightly", "monthly", "yearly"]

# CLI option name -> TaxInputs field
SALARY_OPTION_FIELDS = {
    "frequency": "payment_frequency",
    "salary": "basic_salary",
    "taxable_allowances": "taxable_allowances",
    "non_taxable_allowances": "non_taxable_allowances",
    "vacation": "vacation_allowance",
    "qualification": "qualification_type",
    "overtime": "overtime_income",
    "second_job": "second_job_income",
    "children": "child_count",
    "loan_payment": "loan_payment",
    "credit_union": "credit_union_deduction",
    "insurance": "insurance_type",
    "custom_premium": "custom_insurance_premium",
    "gratuity_rate": "gratuity_rate",
}

PRESET_FIELDS = {"payment_frequency", "basic_salary", "taxable_allowances", "non_taxable_allowances"}

format_option = click.option(
    "--format", "output_format", type=click.Choice(["text", "json"]),
    default="text", help="Output format.",
)
year_option = click.option(
    "--year", help="Tax rules year (default: settings 'tax_year' or the current rules).",
)


def salary_options(func):
    """Attach the salary input options shared by the salary commands."""
    options = [
        click.option("--frequency", type=click.Choice(FREQUENCIES), help="Pay frequency of the amounts given."),
        click.option("--salary", type=click.FloatRange(min=0), help="Basic salary per pay period."),
        click.option("--taxable-allowances", type=click.FloatRange(min=0), help="Taxable allowances per period."),
        click.option("--non-taxable-allowances", type=click.FloatRange(min=0),
                     help="Non-taxable allowances per period."),
        click.option("--vacation", type=click.FloatRange(min=0), help="Annual vacation allowance (paid once)."),
        click.option("--qualification", type=click.Choice(["none", "acca", "masters", "phd"]),
                     help="Qualification allowance."),
        click.option("--overtime", type=click.FloatRange(min=0), help="Overtime income per period."),
        click.option("--second-job", type=click.FloatRange(min=0), help="Second job income per period."),
        click.option("--children", type=click.IntRange(min=0), help="Number of qualifying children."),
        click.option("--loan-payment", type=click.FloatRange(min=0), help="Loan repayment per period."),
        click.option("--credit-union", type=click.FloatRange(min=0), help="Credit union deduction per period."),
        click.option("--insurance", type=click.Choice(["none", "employee", "employee-one", "family", "custom"]),
                     help="Health insurance plan."),
        click.option("--custom-premium", type=click.FloatRange(min=0),
                     help="Premium per period when --insurance custom."),
        click.option("--gratuity-rate", type=click.FloatRange(min=0), help="Gratuity percent of basic salary."),
        click.option("--preset", type=click.Choice(sorted(POSITION_PRESETS)),
                     help="Start from a government position preset."),
        click.option("--no-profile", is_flag=True, help="Ignore the profile's salary section."),
    ]

    @wraps(func)
    def wrapper(*args, **kwargs):
        salary_kwargs = {name: kwargs.pop(name) for name in SALARY_OPTION_FIELDS}
        inputs = build_inputs(
            preset=kwargs.pop("preset"),
            use_profile=not kwargs.pop("no_profile"),
            **salary_kwargs,
        )
        return func(*args, inputs=inputs, **kwargs)

    for option in reversed(options):
        wrapper = option(wrapper)
    return wrapper


def build_inputs(preset: Optional[str] = None, use_profile: bool = True, **options) -> TaxInputs:
    """Assemble TaxInputs from profile, then preset, then explicit options.

    Raises:
        click.UsageError: If no salary source is given
        click.ClickException: If the combined inputs are invalid
    """
    values = {}

    if use_profile:
        values.update(load_profile(require_exists=False).get("salary") or {})

    if preset:
        values.update(inputs_from_preset(preset).model_dump(include=PRESET_FIELDS))

    for name, field in SALARY_OPTION_FIELDS.items():
        if options.get(name) is not None:
            values[field] = options[name]

    if "basic_salary" not in values:
        raise click.UsageError(
            "No salary given. Pass --salary or --preset, or set one with:\n"
            "  gy-tax profile set salary.basic_salary 200000"
        )

    try:
        return TaxInputs.model_validate(values)
    except ValidationError as e:
        messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise click.ClickException("Invalid salary inputs:\n  " + "\n  ".join(messages))


def resolve_rules(year: Optional[str]):
    """Load tax rules for --year, the tax_year setting, or the default year."""
    try:
        return load_tax_rules(year or get_setting("tax_year"))
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
def tax():
    """PAYE, NIS and property tax calculations.

    \b
    Examples:
      gy-tax tax calc --salary 200000
      gy-tax tax calc --preset it-officer-2 --children 2
      gy-tax tax project 8
      gy-tax tax property 1200000 --location municipality
    """
    pass


@tax.command("calc")
@salary_options
@year_option
@format_option
def tax_calc(inputs: TaxInputs, year, output_format):
    """Calculate NIS, PAYE and net pay for a salary."""
    results = calculate_tax(inputs, resolve_rules(year))

    if output_format == "json":
        _echo_json(results.model_dump())
        return

    render_tax_results(Console(), results)


@tax.command("project")
@click.argument("percent", type=float)
@click.option("--months", default=12, type=click.IntRange(min=1, max=60), help="Months to project.")
@salary_options
@year_option
@format_option
def tax_project(percent, months, inputs: TaxInputs, year, output_format):
    """Project take-home pay after a PERCENT basic salary increase.

    \b
    Examples:
      gy-tax tax project 8
      gy-tax tax project 6 --preset ict-tech-2 --months 6
    """
    result = project_salary_increase(inputs, percent, months=months, rules=resolve_rules(year))

    if output_format == "json":
        data = result.model_dump()
        data["monthly_net_change"] = result.monthly_net_change
        data["annual_total_change"] = result.annual_total_change
        _echo_json(data)
        return

    render_projection(Console(), result)
    click.echo(f"Monthly take-home change: ${result.monthly_net_change:,.0f}")
    click.echo(f"Annual package change:    ${result.annual_total_change:,.0f}")


@tax.command("gratuity")
@salary_options
@year_option
@format_option
def tax_gratuity(inputs: TaxInputs, year, output_format):
    """Show the 12-month net pay, gratuity and vacation schedule."""
    schedule = gratuity_breakdown(calculate_tax(inputs, resolve_rules(year)))

    if output_format == "json":
        _echo_json([row.model_dump() for row in schedule])
        return

    render_gratuity_breakdown(Console(), schedule)


@tax.command("summary")
@click.option("--date", "as_of", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Summary date (default: today).")
@salary_options
@year_option
@format_option
def tax_summary(as_of, inputs: TaxInputs, year, output_format):
    """Summarize monthly, year-to-date and annual NIS and PAYE."""
    as_of = as_of.date() if as_of else date.today()
    rules = resolve_rules(year) if year or get_setting("tax_year") else None

    try:
        summary = summarize_tax(inputs, as_of, rules=rules)
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        _echo_json(summary.model_dump())
        return

    render_summary(Console(), summary)


@tax.command("property")
@click.argument("arv", type=click.FloatRange(min=0))
@click.option("--location", type=click.Choice(["georgetown", "municipality", "rural"]),
              default="georgetown", show_default=True, help="Property location.")
@click.option("--type", "property_type", type=click.Choice(["residential", "commercial"]),
              default="residential", show_default=True, help="Property use.")
@year_option
@format_option
def tax_property(arv, location, property_type, year, output_format):
    """Estimate property tax from the ARV (annual rental value)."""
    result = calculate_property_tax(arv, location, property_type, resolve_rules(year))

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_property_tax(Console(), result)


@tax.command("presets")
@format_option
def tax_presets(output_format):
    """List government position presets and common increases."""
    if output_format == "json":
        _echo_json({
            "positions": {
                key: {
                    "title": p.title,
                    "base_salary": p.base_salary,
                    "taxable_allowances": p.taxable_allowances,
                    "non_taxable_allowances": p.non_taxable_allowances,
                }
                for key, p in POSITION_PRESETS.items()
            },
            "increases": [{"percent": pct, "label": label} for pct, label in COMMON_SALARY_INCREASES],
        })
        return

    console = Console()
    table = Table(title="Position Presets (monthly)", show_header=True, header_style="bold")
    table.add_column("Preset", style="cyan")
    table.add_column("Title")
    table.add_column("Basic", justify="right")
    table.add_column("Taxable", justify="right")
    table.add_column("Non-taxable", justify="right")
    for key, p in POSITION_PRESETS.items():
        table.add_row(
            key, p.title,
            f"${p.base_salary:,.0f}",
            f"${p.total_taxable_allowances:,.0f}",
            f"${p.total_non_taxable_allowances:,.0f}",
        )
    console.print(table)

    console.print("\nCommon increases:")
    for pct, label in COMMON_SALARY_INCREASES:
        console.print(f"  {pct:>3}  {label}")


@tax.command("calendar")
@click.option("--date", "as_of", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Reference date (default: today).")
@click.option("--all", "show_all", is_flag=True, help="Show every event, including overdue NIS payments.")
@click.option("--limit", default=6, type=click.IntRange(min=1), help="Upcoming events to show.")
@year_option
@format_option
def tax_calendar_cmd(as_of, show_all, limit, year, output_format):
    """Show upcoming GRA filing, property tax and NIS deadlines."""
    as_of = as_of.date() if as_of else date.today()
    rules = resolve_rules(year) if year or get_setting("tax_year") else None

    try:
        events = tax_calendar(as_of, rules)
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))

    if not show_all:
        events = upcoming_events(events, limit)

    if output_format == "json":
        _echo_json([e.model_dump() for e in events])
        return

    render_calendar(Console(), events)


@tax.command("nis-pension")
@click.argument("years", type=click.FloatRange(min=0))
@year_option
@format_option
def tax_nis_pension(years, year, output_format):
    """Show progress toward the NIS pension after YEARS of contributions."""
    progress = nis_pension_progress(years, resolve_rules(year))

    if output_format == "json":
        _echo_json(progress.model_dump())
        return

    click.echo(f"Weekly contributions: {progress.weekly_contributions} of {progress.required_contributions}")
    click.echo(f"Progress:             {progress.progress_percent:.1f}%")
    if progress.weeks_remaining:
        click.echo(f"Remaining:            {progress.weeks_remaining} weeks (~{progress.years_remaining} years)")
    else:
        click.echo(click.style("Pension contribution requirement met.", fg="green"))
