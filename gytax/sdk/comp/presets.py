"""Government position salary presets and common increase percentages.

Amounts are monthly, as published on the public service salary scales.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..schemas import TaxInputs


@dataclass(frozen=True)
class PositionPreset:
    """Basic salary and allowances for a government position."""
    title: str
    base_salary: float
    taxable_allowances: Dict[str, float] = field(default_factory=dict)
    non_taxable_allowances: Dict[str, float] = field(default_factory=dict)

    @property
    def total_taxable_allowances(self) -> float:
        return sum(self.taxable_allowances.values())

    @property
    def total_non_taxable_allowances(self) -> float:
        return sum(self.non_taxable_allowances.values())


POSITION_PRESETS: Dict[str, PositionPreset] = {
    "it-officer-2": PositionPreset(
        "IT Officer II", 247451,
        {"duty": 15000, "uniform": 5000}, {"travel": 0, "telecom": 0},
    ),
    "it-officer-3": PositionPreset(
        "IT Officer III", 266000,
        {"duty": 15000, "uniform": 5000}, {"travel": 0, "telecom": 0},
    ),
    "ict-tech-1": PositionPreset(
        "ICT Technician I", 222804,
        {"duty": 0, "uniform": 5000}, {"travel": 5000, "telecom": 5000},
    ),
    "ict-tech-2": PositionPreset(
        "ICT Technician II", 176564,
        {"duty": 12000, "uniform": 5000}, {"travel": 0, "telecom": 0},
    ),
    "ict-tech-3": PositionPreset(
        "ICT Technician III", 148051,
        {"duty": 10000, "uniform": 5000}, {"travel": 0, "telecom": 0},
    ),
    "assist-ict-eng-3": PositionPreset(
        "Assistant ICT Engineer III", 308540,
        {"duty": 0, "uniform": 5000}, {"travel": 5000, "telecom": 5000},
    ),
    "ict-eng-3": PositionPreset(
        "ICT Engineer III", 393301,
        {"uniform": 5000}, {"travel": 10000, "telecom": 5000},
    ),
    "admin-officer-2": PositionPreset(
        "Administrative Officer II", 180000,
        {"duty": 10000, "uniform": 3000}, {"travel": 0, "telecom": 0},
    ),
    "accounts-clerk-1": PositionPreset(
        "Accounts Clerk I", 150000,
        {"duty": 8000, "uniform": 3000}, {"travel": 0, "telecom": 0},
    ),
    "teacher-primary": PositionPreset(
        "Primary School Teacher", 185000,
        {"duty": 0, "uniform": 0}, {"travel": 15000, "station": 5000},
    ),
    "nurse-staff": PositionPreset(
        "Staff Nurse", 220000,
        {"duty": 20000, "uniform": 5000}, {"travel": 8000, "station": 5000},
    ),
}

# (percent, label)
COMMON_SALARY_INCREASES = [
    (6, "6% (Standard Government)"),
    (8, "8% (July 2026 Increase)"),
    (10, "10% (Performance Based)"),
    (12, "12% (Promotion)"),
    (15, "15% (Significant Promotion)"),
]


def inputs_from_preset(key: str, **overrides: Any) -> TaxInputs:
    """Build monthly TaxInputs from a position preset.

    Args:
        key: Preset key (e.g., 'it-officer-2')
        **overrides: Any other TaxInputs fields (child_count, insurance_type, ...)

    Raises:
        KeyError: If the preset does not exist
    """
    if key not in POSITION_PRESETS:
        raise KeyError(f"Unknown position preset '{key}'. Available: {', '.join(sorted(POSITION_PRESETS))}")

    preset = POSITION_PRESETS[key]
    values = {
        "payment_frequency": "monthly",
        "basic_salary": preset.base_salary,
        "taxable_allowances": preset.total_taxable_allowances,
        "non_taxable_allowances": preset.total_non_taxable_allowances,
    }
    values.update(overrides)
    return TaxInputs(**values)
