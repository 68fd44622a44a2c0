"""comp - Compensation changes and salary presets.

Scope:
- Salary increase projection (before/after breakdowns, monthly series)
- Gratuity/vacation payout schedule
- Government position presets

Constraints:
- Uses taxes/ for every breakdown; no tax logic of its own
"""

from .salary_projection import (
    apply_increase,
    project_salary_increase,
    gratuity_breakdown,
)

from .presets import (
    PositionPreset,
    POSITION_PRESETS,
    COMMON_SALARY_INCREASES,
    inputs_from_preset,
)

__all__ = [
    "apply_increase",
    "project_salary_increase",
    "gratuity_breakdown",
    "PositionPreset",
    "POSITION_PRESETS",
    "COMMON_SALARY_INCREASES",
    "inputs_from_preset",
]
