"""Loan payoff and amortization commands."""

import json
from datetime import date

import click
from pydantic import ValidationError
from rich.console import Console

from gytax.sdk import load_loans, ProfileNotFoundError
from gytax.sdk.loans import (
    DEFAULT_MAX_MONTHS,
    MAX_SIMULATION_MONTHS,
    ExtraPayment,
    compare_extra_payments,
    payment_plan,
    project_payoff,
    simulate_amortization,
)

from .renderers.loan_renderer import (
    render_comparison,
    render_payment_plan,
    render_payoff_projections,
    render_schedule,
)


format_option = click.option(
    "--format", "output_format", type=click.Choice(["text", "json"]),
    default="text", help="Output format.",
)


def loan_terms(required=True):
    """Attach --balance, --rate and --payment options."""
    def decorator(func):
        func = click.option("--payment", type=click.FloatRange(min=0), required=required,
                            help="Regular monthly payment.")(func)
        func = click.option("--rate", type=click.FloatRange(min=0, max=1), required=required,
                            help="Annual interest rate as decimal (0.12 = 12%).")(func)
        func = click.option("--balance", type=click.FloatRange(min=0), required=required,
                            help="Current balance.")(func)
        return func
    return decorator


def extra_payment_options(func):
    """Attach --extra, --every and --start options."""
    func = click.option("--start", default=1, type=click.IntRange(min=1), show_default=True,
                        help="First month (1-based) with an extra payment.")(func)
    func = click.option("--every", default=6, type=click.IntRange(min=1), show_default=True,
                        help="Months between extra payments.")(func)
    func = click.option("--extra", type=click.FloatRange(min=0), required=True,
                        help="Extra payment amount (e.g., gratuity).")(func)
    return func


@click.group()
def loan():
    """Loan payoff projections and extra-payment planning.

    Rates are annual decimals: --rate 0.12 means 12% a year.

    \b
    Examples:
      gy-tax loan payoff
      gy-tax loan simulate --balance 2500000 --rate 0.12 --payment 60000
      gy-tax loan compare --balance 2500000 --rate 0.12 --payment 60000 --extra 300000
    """
    pass


@loan.command("payoff")
@loan_terms(required=False)
@click.option("--name", help="Loan name.")
@click.option("--date", "as_of", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Projection start date (default: today).")
@format_option
def loan_payoff(balance, rate, payment, name, as_of, output_format):
    """Project months remaining and payoff date.

    Uses --balance/--rate/--payment when given, otherwise every loan
    in the profile's 'loans' section.
    """
    as_of = as_of.date() if as_of else date.today()

    given = [v is not None for v in (balance, rate, payment)]
    if any(given) and not all(given):
        raise click.UsageError("--balance, --rate and --payment must be given together.")

    if all(given):
        projections = [project_payoff(balance, rate, payment, as_of, name=name)]
    else:
        try:
            loans = load_loans()
        except ProfileNotFoundError as e:
            raise click.ClickException(str(e))
        except ValidationError as e:
            raise click.ClickException(f"Invalid loans section in profile:\n{e}")

        if not loans:
            raise click.ClickException(
                "No loans in profile. Pass --balance, --rate and --payment, "
                "or add a 'loans' list to your profile."
            )
        projections = [
            project_payoff(s.current_balance, s.annual_interest_rate, s.monthly_payment, as_of, name=s.name)
            for s in loans
        ]

    if output_format == "json":
        click.echo(json.dumps([p.model_dump() for p in projections], indent=2))
        return

    render_payoff_projections(Console(), projections)


@loan.command("simulate")
@loan_terms()
@click.option("--extra", type=click.FloatRange(min=0), help="Optional extra payment amount.")
@click.option("--every", default=6, type=click.IntRange(min=1), show_default=True,
              help="Months between extra payments.")
@click.option("--start", default=1, type=click.IntRange(min=1), show_default=True,
              help="First month (1-based) with an extra payment.")
@click.option("--max-months", default=DEFAULT_MAX_MONTHS, show_default=True,
              type=click.IntRange(min=1, max=MAX_SIMULATION_MONTHS), help="Simulation cap.")
@click.option("--summary", "summary_only", is_flag=True, help="Hide the month-by-month rows.")
@format_option
def loan_simulate(balance, rate, payment, extra, every, start, max_months, summary_only, output_format):
    """Simulate month-by-month amortization."""
    extra_payment = ExtraPayment(amount=extra, every_months=every, start_month=start) if extra else None
    schedule = simulate_amortization(balance, rate, payment, extra_payment, max_months)

    if output_format == "json":
        click.echo(schedule.model_dump_json(indent=2))
        return

    render_schedule(Console(), schedule, show_rows=not summary_only)


@loan.command("compare")
@loan_terms()
@extra_payment_options
@click.option("--max-months", default=DEFAULT_MAX_MONTHS, show_default=True,
              type=click.IntRange(min=1, max=MAX_SIMULATION_MONTHS), help="Simulation cap.")
@format_option
def loan_compare(balance, rate, payment, extra, every, start, max_months, output_format):
    """Compare payoff with and without a periodic extra payment."""
    extra_payment = ExtraPayment(amount=extra, every_months=every, start_month=start)
    comparison = compare_extra_payments(balance, rate, payment, extra_payment, max_months)

    if output_format == "json":
        data = comparison.model_dump(exclude={"regular": {"rows"}, "with_extra": {"rows"}})
        click.echo(json.dumps(data, indent=2))
        return

    render_comparison(Console(), comparison)


@loan.command("plan")
@loan_terms()
@extra_payment_options
@click.option("--months", default=6, type=click.IntRange(min=1, max=MAX_SIMULATION_MONTHS),
              show_default=True, help="Months to plan.")
@click.option("--first-month", type=click.IntRange(min=1, max=12),
              help="Calendar month of the first plan month (default: this month).")
@format_option
def loan_plan(balance, rate, payment, extra, every, start, months, first_month, output_format):
    """Plan the next months of payments funded partly by gratuity.

    \b
    Example (gratuity paid in month 6):
      gy-tax loan plan --balance 2500000 --rate 0.12 --payment 60000 \\
        --extra 300000 --every 6 --start 6
    """
    extra_payment = ExtraPayment(amount=extra, every_months=every, start_month=start)
    plan = payment_plan(
        balance, rate, payment, extra_payment,
        months=months,
        first_month=first_month or date.today().month,
    )

    if output_format == "json":
        click.echo(json.dumps([row.model_dump() for row in plan], indent=2))
        return

    render_payment_plan(Console(), plan)
