"""Profile CLI commands for gy-tax.

Manages user profile data (profile.yaml) - salary profile and loans.
"""

import click
import yaml

from gytax.sdk import (
    # Settings (for profile use command)
    load_settings,
    set_setting,
    # Profile (user data)
    get_profile_path,
    save_profile,
    get_profile_value,
    set_profile_value,
    ProfileNotFoundError,
    # Profile validation
    validate_profile,
    inputs_from_preset,
)
from gytax.sdk.comp import POSITION_PRESETS


# Keys whose values are always kept as strings
STRING_KEYS = {"salary.payment_frequency", "salary.qualification_type", "salary.insurance_type"}


def _validate_profile_file(path):
    """Validate a profile file at the given path.

    Returns:
        Validation result if the file is a valid profile

    Raises:
        click.ClickException: If file is invalid YAML or fails schema validation
    """
    from pathlib import Path

    path = Path(path)

    if path.suffix not in (".yaml", ".yml"):
        raise click.ClickException(f"Profile must be a YAML file: {path}")

    try:
        with open(path, "r") as f:
            profile_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in {path}: {e}")

    if not isinstance(profile_data, dict):
        raise click.ClickException(f"Profile must be a YAML dictionary, got {type(profile_data).__name__}")

    validation = validate_profile(profile=profile_data)

    if validation.errors:
        # Show the file being validated, not the active profile
        validation.location_path = path
        _display_validation(validation, show_contents=False, raise_on_errors=True)

    return validation


def _display_validation(validation, show_contents=True, raise_on_errors=False):
    """Display validation results consistently across commands.

    Returns:
        True if valid (no errors), False if has errors
    """
    has_errors = bool(validation.errors)

    if validation.errors:
        click.echo()
        click.echo("Validation Errors (profile is invalid):")
        for error in validation.errors:
            click.echo(f"  ! {error}")
        click.echo()
        click.echo(f"Profile path: {validation.location_path}")

        if raise_on_errors:
            raise click.ClickException("Profile has validation errors. Fix them before continuing.")

    click.echo()
    click.echo("Feature Readiness:")
    for feature, status in validation.features.items():
        icon = "+" if status["ready"] else "-"
        click.echo(f"  {icon} {feature}: {status['message']}")

    if validation.warnings:
        click.echo()
        click.echo("Warnings:")
        for warning in validation.warnings:
            click.echo(f"  - {warning}")

    if show_contents:
        click.echo()
        click.echo("---")
        click.echo(yaml.dump(validation.profile, default_flow_style=False, sort_keys=False))

    return not has_errors


def _parse_value(key, value):
    """Parse numbers for numeric keys; leave strings alone."""
    if key in STRING_KEYS:
        return value
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


# =============================================================================
# PROFILE commands - user profile data (profile.yaml)
# =============================================================================

@click.group()
def profile():
    """Manage your profile configuration (profile.yaml).

    Profile contains your personal data:
    - salary: pay frequency, basic salary, allowances, deductions
    - loans: name, current_balance, annual_interest_rate, monthly_payment
    """
    pass


@profile.command("show")
def profile_show():
    """Show the active profile, its location, and feature readiness."""
    profile_path = get_profile_path(require_exists=False)

    settings = load_settings()
    if settings.get("profile"):
        location_label = "custom"
    elif profile_path.exists():
        location_label = "central (default)"
    else:
        location_label = "not created"

    click.echo(f"Profile: {profile_path}")
    click.echo(f"Location: {location_label}")

    if not profile_path.exists():
        click.echo()
        click.echo("Profile does not exist yet. Create with:")
        click.echo("  gy-tax profile init --salary 200000")
        click.echo("  gy-tax profile init --preset it-officer-2")
        return

    try:
        validation = validate_profile()
        _display_validation(validation, show_contents=True)
    except ProfileNotFoundError as e:
        raise click.ClickException(str(e))


@profile.command("init")
@click.option("--preset", type=click.Choice(sorted(POSITION_PRESETS)),
              help="Start from a government position preset.")
@click.option("--salary", type=click.FloatRange(min=0), help="Basic salary per pay period.")
@click.option("--frequency", type=click.Choice(["daily", "weekly", "fortnightly", "monthly", "yearly"]),
              default="monthly", show_default=True, help="Pay frequency.")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
def profile_init(preset, salary, frequency, force):
    """Create a profile with a salary section.

    \b
    Examples:
      gy-tax profile init --salary 200000
      gy-tax profile init --preset it-officer-2
      gy-tax profile init --salary 50000 --frequency weekly
    """
    if not preset and salary is None:
        raise click.UsageError("Pass --salary or --preset.")

    profile_path = get_profile_path(require_exists=False)
    if profile_path.exists() and not force:
        raise click.ClickException(
            f"Profile already exists: {profile_path}\n"
            f"Use --force to overwrite, or 'gy-tax profile set' to change values."
        )

    if preset:
        salary_section = inputs_from_preset(preset).model_dump(
            include={"payment_frequency", "basic_salary", "taxable_allowances", "non_taxable_allowances"}
        )
        if salary is not None:
            salary_section["basic_salary"] = salary
    else:
        salary_section = {"payment_frequency": frequency, "basic_salary": salary}

    saved = save_profile({"salary": salary_section, "loans": []}, profile_path)
    click.echo(f"Created profile: {saved}")

    _display_validation(validate_profile(), show_contents=False)


@profile.command("get")
@click.argument("key")
def profile_get(key):
    """Get a profile configuration value.

    KEY is a dot-notation path like 'salary.basic_salary'

    For scalar values, outputs the plain value.
    For complex values (dicts/lists), use 'profile show' instead.
    """
    value = get_profile_value(key)
    if value is None:
        raise click.ClickException(f"Key '{key}' not found in profile")

    if isinstance(value, (dict, list)):
        raise click.ClickException(
            f"Key '{key}' is a complex value. Use 'gy-tax profile show' to view."
        )

    click.echo(value)


@profile.command("set", context_settings={"ignore_unknown_options": True})
@click.argument("key")
@click.argument("value")
def profile_set(key, value):
    """Set a profile configuration value.

    KEY is a dot-notation path like 'salary.basic_salary'
    VALUE is the value to set (string or number)

    \b
    Examples:
      gy-tax profile set salary.basic_salary 250000
      gy-tax profile set salary.payment_frequency fortnightly
      gy-tax profile set salary.insurance_type family
    """
    parsed_value = _parse_value(key, value)

    profile_file = set_profile_value(key, parsed_value)
    click.echo(f"Set {key} = {parsed_value}")
    click.echo(f"Saved to: {profile_file}")

    _display_validation(validate_profile(), show_contents=False)


@profile.command("use")
@click.argument("profile_path", type=click.Path(exists=True))
def profile_use(profile_path):
    """Set the active profile to an external file.

    PROFILE_PATH is the path to a profile.yaml file, typically in a
    config repo you manage separately.

    The profile is validated before being set as active.

    Examples:
        gy-tax profile use ~/repos/my-config/gy-tax/profile.yaml
    """
    from pathlib import Path

    path = Path(profile_path).expanduser().resolve()

    validation = _validate_profile_file(path)

    settings_file = set_setting("profile", str(path))
    click.echo(f"Active profile set to: {path}")
    click.echo(f"Saved to: {settings_file}")

    _display_validation(validation, show_contents=False)
