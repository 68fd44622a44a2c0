"""Tax rules loading and frequency table lookups.

Rules are read from tax-rules/YYYY.yaml. The package ships the statutory
tables; a file of the same name under <config dir>/tax-rules overrides them.
Loaded rules are validated into a frozen TaxRules value and cached per file.
"""

import logging
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

import yaml

from ..config import get_config_dir
from .schemas import FrequencyConfig, TaxRules

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = "2026"
DEFAULT_FREQUENCY = "monthly"


class TaxRulesNotFoundError(Exception):
    """Raised when no tax rules file exists for a year or any earlier year."""
    pass


def _get_tax_rules_dirs() -> list[Path]:
    """Get tax-rules directories in lookup order (user override first)."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> gytax
    return [get_config_dir() / "tax-rules", package_root / "tax-rules"]


def _get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    years = set()
    for rules_dir in _get_tax_rules_dirs():
        years.update(int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit())
    return sorted(years, reverse=True)


def _find_rules_file(year: int) -> Optional[Path]:
    for rules_dir in _get_tax_rules_dirs():
        config_file = rules_dir / f"{year}.yaml"
        if config_file.exists():
            return config_file
    return None


@lru_cache(maxsize=None)
def _load_rules_file(path: str) -> TaxRules:
    with open(path, "r") as f:
        return TaxRules.model_validate(yaml.safe_load(f))


def load_tax_rules(year: Optional[str] = None) -> TaxRules:
    """Load tax rules for a year, falling back to the nearest earlier year.

    Args:
        year: Tax year (e.g., "2026"). Defaults to DEFAULT_TAX_YEAR.

    Returns:
        Validated, immutable TaxRules

    Raises:
        TaxRulesNotFoundError: If no rules file exists for the year or earlier
        pydantic.ValidationError: If the rules file is malformed
    """
    target_year = int(year or DEFAULT_TAX_YEAR)

    candidate_years = [y for y in _get_available_years() if y <= target_year]
    for check_year in candidate_years:
        config_file = _find_rules_file(check_year)
        if config_file is None:
            continue
        if check_year != target_year:
            logger.debug("No tax rules for %s, using %s", target_year, check_year)
        return _load_rules_file(str(config_file))

    raise TaxRulesNotFoundError(
        f"Tax rules file not found for year {target_year} or any earlier year. "
        f"Checked: {', '.join(str(d) for d in _get_tax_rules_dirs())}"
    )


def rules_for_date(as_of: date) -> TaxRules:
    """Tax rules in force on a date.

    Dates before the earliest rules file use that earliest file, with a
    warning, so date-driven views still work for past years.
    """
    try:
        return load_tax_rules(str(as_of.year))
    except TaxRulesNotFoundError:
        available = _get_available_years()
        if not available:
            raise
        earliest = available[-1]
        logger.warning("No tax rules for %s or earlier, using %s", as_of.year, earliest)
        return load_tax_rules(str(earliest))


def resolve_frequency(frequency: str, rules: Optional[TaxRules] = None) -> Tuple[FrequencyConfig, bool]:
    """Look up the configuration for a pay frequency.

    Unknown frequencies resolve to the monthly configuration. The fallback is
    logged and reported through the returned flag so callers can surface it.

    Returns:
        Tuple of (config, fell_back)
    """
    rules = rules or load_tax_rules()
    config = rules.frequencies.get(frequency)
    if config is not None:
        return config, False

    logger.warning("Unknown pay frequency %r, using %s", frequency, DEFAULT_FREQUENCY)
    return rules.frequencies[DEFAULT_FREQUENCY], True


def convert_from_monthly(monthly_amount: float, frequency: str, rules: Optional[TaxRules] = None) -> float:
    """Convert a monthly amount into the given frequency's pay period."""
    config, _ = resolve_frequency(frequency, rules)
    return monthly_amount * config.factor


def convert_to_monthly(amount: float, frequency: str, rules: Optional[TaxRules] = None) -> float:
    """Convert an amount in the given frequency's pay period to monthly."""
    config, _ = resolve_frequency(frequency, rules)
    return amount / config.factor
