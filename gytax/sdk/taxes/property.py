"""Property tax estimate from annual rental value (ARV)."""

import logging
from typing import Optional

from ..schemas import PropertyTaxResult
from .rules import load_tax_rules
from .schemas import TaxRules

logger = logging.getLogger(__name__)

FALLBACK_LOCATION = "georgetown"
FALLBACK_PROPERTY_TYPE = "residential"


def get_property_tax_rate(location_type: str, property_type: str, rules: TaxRules) -> Optional[float]:
    """Rate for a location/property class, or None if the pair is unknown."""
    rates = rules.property_tax.get(location_type)
    if rates is None or property_type not in ("residential", "commercial"):
        return None
    return getattr(rates, property_type)


def calculate_property_tax(
    arv: float,
    location_type: str,
    property_type: str,
    rules: Optional[TaxRules] = None,
) -> PropertyTaxResult:
    """Estimate annual, quarterly and monthly property tax.

    Args:
        arv: Annual rental value
        location_type: 'georgetown', 'municipality' or 'rural'
        property_type: 'residential' or 'commercial'
        rules: Tax rules (default: current year's rules)

    Returns:
        PropertyTaxResult. An unknown location/property pair is taxed at the
        Georgetown residential rate and noted in warnings.
    """
    rules = rules or load_tax_rules()
    warnings = []

    tax_rate = get_property_tax_rate(location_type, property_type, rules)
    if tax_rate is None:
        logger.warning(
            "Unknown property class %r/%r, using %s %s rate",
            location_type, property_type, FALLBACK_LOCATION, FALLBACK_PROPERTY_TYPE,
        )
        warnings.append(
            f"Unknown property class '{location_type}/{property_type}'; "
            f"used {FALLBACK_LOCATION} {FALLBACK_PROPERTY_TYPE} rate"
        )
        tax_rate = get_property_tax_rate(FALLBACK_LOCATION, FALLBACK_PROPERTY_TYPE, rules)

    annual_tax = arv * tax_rate

    return PropertyTaxResult(
        annual_rental_value=arv,
        location_type=location_type,
        property_type=property_type,
        tax_rate=tax_rate,
        annual_tax=annual_tax,
        quarterly_tax=annual_tax / 4,
        monthly_equivalent=annual_tax / 12,
        warnings=warnings,
    )
