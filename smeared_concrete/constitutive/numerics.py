"""Finite guards and tolerances shared by the constitutive laws."""

from __future__ import annotations

import math

# Stress below which a secant module is taken as the elastic module (MPa).
STRESS_TOLERANCE = 1.0e-9

# Strain below which a secant module is taken as the elastic module.
STRAIN_TOLERANCE = 1.0e-9


def as_finite(value: float, default: float = 0.0) -> float:
    """Return *value* if it is a finite number, else *default*."""
    if isinstance(value, complex) or not math.isfinite(value):
        return default
    return value


def is_finite(*values: float) -> bool:
    return all(not isinstance(v, complex) and math.isfinite(v) for v in values)
