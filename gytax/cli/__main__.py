"""gy-tax CLI - Command-line interface for Guyana salary, tax and loan projections."""

import logging

import click

from gytax import __version__

from .profile_commands import profile as profile_group
from .tax_commands import tax as tax_group
from .loan_commands import loan as loan_group


@click.group()
@click.version_option(version=__version__, prog_name="gy-tax")
@click.option("--verbose", "-v", is_flag=True, help="Log rule lookups and fallbacks.")
def cli(verbose):
    """gy-tax - Guyana PAYE, NIS and loan payoff calculator.

    Salary commands read the 'salary' section of your profile unless
    options override it. Configuration is loaded from (in order):

    \b
    1. GY_TAX_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set via CLI)
    3. ~/.config/gy-tax/profile.yaml (XDG default)

    Run 'gy-tax profile show' to see profile status and readiness.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Add subcommand groups
cli.add_command(profile_group)
cli.add_command(tax_group)
cli.add_command(loan_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
