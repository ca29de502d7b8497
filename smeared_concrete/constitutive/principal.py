"""
Principal strain states and Mohr's-circle transforms.

A biaxial state is described by two principal strains and the angle of
the larger one:

    epsilon1 >= epsilon2,  theta1 = angle of epsilon1 from the x-axis (rad)

The principal case decides which branches a constitutive law evaluates:

    PURE_TENSION         epsilon1 >= 0, epsilon2 >= 0
    TENSION_COMPRESSION  epsilon1 > 0 > epsilon2
    PURE_COMPRESSION     epsilon1 <= 0, epsilon2 <= 0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from smeared_concrete.constitutive.numerics import as_finite


class PrincipalCase(Enum):
    PURE_TENSION = "pure_tension"
    TENSION_COMPRESSION = "tension_compression"
    PURE_COMPRESSION = "pure_compression"


@dataclass(frozen=True)
class PrincipalStrains:
    """Principal strain state (epsilon1 >= epsilon2)."""

    epsilon1: float
    epsilon2: float
    theta1: float = math.pi / 4.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "epsilon1", as_finite(self.epsilon1))
        object.__setattr__(self, "epsilon2", as_finite(self.epsilon2))
        object.__setattr__(self, "theta1", as_finite(self.theta1, math.pi / 4.0))
        if self.epsilon1 < self.epsilon2:
            raise ValueError(
                f"epsilon1 must not be smaller than epsilon2, got "
                f"({self.epsilon1}, {self.epsilon2})"
            )

    @property
    def is_zero(self) -> bool:
        return self.epsilon1 == 0.0 and self.epsilon2 == 0.0

    @property
    def case(self) -> PrincipalCase:
        """Classify the state. Not cached: the state is re-derived per call."""
        if self.epsilon2 >= 0.0:
            return PrincipalCase.PURE_TENSION
        if self.epsilon1 <= 0.0:
            return PrincipalCase.PURE_COMPRESSION
        return PrincipalCase.TENSION_COMPRESSION

    @classmethod
    def from_xy(cls, eps_x: float, eps_y: float, gamma_xy: float) -> "PrincipalStrains":
        """Mohr's circle compatibility from global strains."""
        avg = 0.5 * (eps_x + eps_y)
        diff = 0.5 * (eps_x - eps_y)
        R = math.sqrt(diff * diff + (0.5 * gamma_xy) ** 2)

        if abs(eps_x - eps_y) < 1e-15 and abs(gamma_xy) < 1e-15:
            theta = 0.0
        else:
            theta = 0.5 * math.atan2(gamma_xy, eps_x - eps_y)

        return cls(avg + R, avg - R, theta)

    def to_dict(self) -> dict:
        return {
            "epsilon1": self.epsilon1,
            "epsilon2": self.epsilon2,
            "theta1": self.theta1,
        }


def principal_to_xy(fc1: float, fc2: float, theta1: float) -> Tuple[float, float, float]:
    """Transform principal stresses to (sigma_x, sigma_y, tau_xy)."""
    cos_t = math.cos(theta1)
    sin_t = math.sin(theta1)
    c2 = cos_t * cos_t
    s2 = sin_t * sin_t
    cs = cos_t * sin_t

    sigma_x = fc1 * c2 + fc2 * s2
    sigma_y = fc1 * s2 + fc2 * c2
    tau_xy = (fc1 - fc2) * cs

    return sigma_x, sigma_y, tau_xy
