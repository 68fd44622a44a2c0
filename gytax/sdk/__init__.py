"""gy-tax SDK - Core functionality for salary, tax and loan calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    load_salary_inputs,
    load_loans,
    ProfileNotFoundError,
    ConfigNotFoundError,
    validate_profile,
    ProfileValidationResult,
)

# Import taxes before schemas: schemas imports taxes.schemas, and taxes.paye imports schemas
from .taxes import (
    DEFAULT_TAX_YEAR,
    TaxRulesNotFoundError,
    load_tax_rules,
    resolve_frequency,
    convert_from_monthly,
    convert_to_monthly,
    calculate_tax,
    calculate_property_tax,
    summarize_tax,
    nis_pension_progress,
    tax_calendar,
)

from .schemas import (
    TaxInputs,
    TaxResults,
    SalaryProjection,
    SalaryProjectionResult,
    PropertyTaxResult,
    PeriodTax,
    TaxSummary,
)

from .comp import (
    project_salary_increase,
    gratuity_breakdown,
    inputs_from_preset,
)

from . import loans

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "load_salary_inputs",
    "load_loans",
    "ProfileNotFoundError",
    "ConfigNotFoundError",
    "validate_profile",
    "ProfileValidationResult",
    # Taxes
    "DEFAULT_TAX_YEAR",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "resolve_frequency",
    "convert_from_monthly",
    "convert_to_monthly",
    "calculate_tax",
    "calculate_property_tax",
    "summarize_tax",
    "nis_pension_progress",
    "tax_calendar",
    # Schemas
    "TaxInputs",
    "TaxResults",
    "SalaryProjection",
    "SalaryProjectionResult",
    "PropertyTaxResult",
    "PeriodTax",
    "TaxSummary",
    # Comp
    "project_salary_increase",
    "gratuity_breakdown",
    "inputs_from_preset",
    # Loans module
    "loans",
]
