"""Configuration management for gy-tax.

Configuration is split into two files:

1. settings.json - Machine-specific, ephemeral settings
   - profile: path to profile.yaml (optional, if not colocated)
   - tax_year: tax rules year to use instead of the default
   - Other non-critical settings

2. profile.yaml - User's personal configuration
   - salary: salary profile (TaxInputs fields)
   - loans: list of loans (name, current_balance, annual_interest_rate, monthly_payment)

Config directory resolution:
1. GY_TAX_CONFIG_PATH environment variable (if set)
2. ~/.config/gy-tax/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. settings.json "profile" key (if set via CLI)
2. profile.yaml in same config directory

Tax rules overrides are read from <config dir>/tax-rules/YYYY.yaml.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "gy-tax"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"


class ConfigNotFoundError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. GY_TAX_CONFIG_PATH environment variable
    2. ~/.config/gy-tax/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("GY_TAX_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    config_dir = get_config_dir()

    settings = load_settings()
    custom_profile = settings.get("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update with: gy-tax profile use /path/to/profile.yaml"
            )
        return profile_path

    profile_path = config_dir / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found. Checked:\n"
            f"  1. settings.json 'profile' key (not set)\n"
            f"  2. {profile_path} (not found)\n\n"
            f"Create a profile with: gy-tax profile init"
        )

    return profile_path


def load_profile(require_exists: bool = True) -> dict:
    """Load user profile from profile.yaml.

    Returns:
        Profile dictionary (empty dict if not required and not found)

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save user profile to profile.yaml.

    Args:
        profile: Profile dictionary to save
        path: Optional custom path (uses default if not specified)

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def get_profile_value(key: str, default: Any = None) -> Any:
    """Get a profile value by dot-notation key (e.g., "salary.basic_salary")."""
    profile = load_profile(require_exists=False)

    value = profile
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default

    return value


def set_profile_value(key: str, value: Any) -> Path:
    """Set a profile value by dot-notation key, creating nested sections."""
    profile = load_profile(require_exists=False)

    parts = key.split(".")
    current = profile

    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value

    return save_profile(profile)


# =============================================================================
# Typed profile sections
# =============================================================================

def load_salary_inputs(profile: Optional[dict] = None):
    """Load the profile's salary section as TaxInputs.

    Args:
        profile: Profile dict (default: load active profile)

    Returns:
        TaxInputs

    Raises:
        ProfileNotFoundError: If no profile exists
        ConfigNotFoundError: If the profile has no salary section
        pydantic.ValidationError: If the salary section is invalid
    """
    from .schemas import TaxInputs

    if profile is None:
        profile = load_profile(require_exists=True)

    salary = profile.get("salary")
    if not salary:
        raise ConfigNotFoundError(
            f"Profile has no 'salary' section.\n\n"
            f"Profile: {get_profile_path()}\n"
            f"Set one with: gy-tax profile set salary.basic_salary 200000"
        )

    return TaxInputs.model_validate(salary)


def load_loans(profile: Optional[dict] = None) -> list:
    """Load the profile's loans as LoanState records (empty list if none)."""
    from .loans.schemas import LoanState

    if profile is None:
        profile = load_profile(require_exists=True)

    return [LoanState.model_validate(loan) for loan in profile.get("loans") or []]


# =============================================================================
# Profile validation and feature readiness
# =============================================================================

class ProfileValidationResult:
    """Result of profile validation with feature readiness status."""

    def __init__(
        self,
        location_path: Path,
        features: dict,
        profile: dict,
        errors: list = None,
        warnings: list = None,
    ):
        """
        Args:
            location_path: Path to the profile file
            features: Dict of feature_name -> dict with keys:
                      ready (bool), message (str)
            profile: The loaded profile dict
            errors: List of validation errors (invalid values)
            warnings: List of validation warnings (suspicious but allowed)
        """
        self.location_path = location_path
        self.features = features
        self.profile = profile
        self.errors = errors or []
        self.warnings = warnings or []

    def is_ready(self, feature: str) -> bool:
        """Check if a specific feature is ready."""
        return self.features.get(feature, {}).get("ready", False)


def validate_profile(profile: Optional[dict] = None) -> ProfileValidationResult:
    """Validate profile sections and report which features they enable.

    Args:
        profile: Profile dict (default: load active profile)
    """
    from pydantic import ValidationError

    from .taxes.rules import resolve_frequency

    if profile is None:
        profile = load_profile(require_exists=True)

    errors = []
    warnings = []
    features = {}

    if not profile.get("salary"):
        features["salary"] = {"ready": False, "message": "no salary section"}
    else:
        try:
            inputs = load_salary_inputs(profile)
            features["salary"] = {"ready": True, "message": f"{inputs.payment_frequency} salary configured"}
            _, fell_back = resolve_frequency(inputs.payment_frequency)
            if fell_back:
                warnings.append(
                    f"salary.payment_frequency '{inputs.payment_frequency}' is unknown; calculated as monthly"
                )
        except ValidationError as e:
            for err in e.errors():
                location = ".".join(str(p) for p in err["loc"])
                errors.append(f"salary.{location}: {err['msg']}")
            features["salary"] = {"ready": False, "message": "invalid salary section"}

    try:
        loans = load_loans(profile)
        if loans:
            features["loans"] = {"ready": True, "message": f"{len(loans)} loan(s) configured"}
        else:
            features["loans"] = {"ready": False, "message": "no loans configured"}
    except ValidationError as e:
        for err in e.errors():
            location = ".".join(str(p) for p in err["loc"])
            errors.append(f"loans.{location}: {err['msg']}")
        features["loans"] = {"ready": False, "message": "invalid loans section"}

    return ProfileValidationResult(
        location_path=get_profile_path(),
        features=features,
        profile=profile,
        errors=errors,
        warnings=warnings,
    )
