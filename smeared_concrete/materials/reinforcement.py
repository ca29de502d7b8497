"""
Reinforcement seen from the concrete.

The constitutive laws never compute steel stresses.  They only ask the
reinforcement crossing a crack three questions, collected in the
``ReinforcementContext`` protocol:

  - tension-stiffening coefficient m (mm) for the crack direction
  - maximum principal tensile stress transmissible across the crack (MPa)
  - average crack spacing (mm), used for the DSFM reference length

The current steel stress is state owned by the caller (the outer solver
updates ``stress`` after each steel evaluation).

Angles are in radians, measured from the x-axis.  theta1 is the direction
of the principal tensile strain.

Reference: Vecchio (2000), DSFM; Collins & Mitchell (1991) crack spacing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

# Crack spacing of plain concrete (mm)
BASE_CRACK_SPACING = 21.0


@runtime_checkable
class ReinforcementContext(Protocol):
    """Capability exposed by reinforcement to the concrete laws."""

    def tension_stiffening_coefficient(self, theta1: float) -> float:
        ...

    def max_transmissible_tensile_stress(self, theta1: float) -> float:
        ...

    def crack_spacing(self, theta1: float) -> float:
        ...


def _crack_spacing(bar_diameter: float, ratio: float) -> float:
    if bar_diameter <= 0 or ratio <= 0:
        return BASE_CRACK_SPACING
    return BASE_CRACK_SPACING + 0.155 * bar_diameter / ratio


@dataclass
class UniaxialReinforcement:
    """Bars parallel to a uniaxial concrete member.

    Parameters
    ----------
    n_bars : int
        Number of bars.
    bar_diameter : float
        Bar diameter (mm).
    concrete_area : float
        Concrete area the bars are smeared over (mm^2).
    yield_stress : float
        Steel yield stress (MPa).
    stress : float
        Current steel stress (MPa), maintained by the caller.
    """

    n_bars: int
    bar_diameter: float
    concrete_area: float
    yield_stress: float
    stress: float = 0.0

    def __post_init__(self) -> None:
        if self.n_bars < 0:
            raise ValueError(f"n_bars must not be negative, got {self.n_bars}")
        if self.bar_diameter < 0:
            raise ValueError(f"bar_diameter must not be negative, got {self.bar_diameter}")

    @property
    def area(self) -> float:
        return self.n_bars * math.pi / 4.0 * self.bar_diameter ** 2

    @property
    def ratio(self) -> float:
        """Reinforcement ratio As/Ac."""
        if self.concrete_area <= 0:
            return 0.0
        return self.area / self.concrete_area

    def tension_stiffening_coefficient(self, theta1: float = 0.0) -> float:
        if self.ratio <= 0:
            return 0.0
        return 0.25 * self.bar_diameter / self.ratio

    def max_transmissible_tensile_stress(self, theta1: float = 0.0) -> float:
        return self.ratio * (self.yield_stress - abs(self.stress))

    def crack_spacing(self, theta1: float = 0.0) -> float:
        return _crack_spacing(self.bar_diameter, self.ratio)

    def to_dict(self) -> dict:
        return {
            "type": "uniaxial",
            "n_bars": self.n_bars,
            "diameter": self.bar_diameter,
            "concrete_area": self.concrete_area,
            "fy": self.yield_stress,
            "stress": self.stress,
        }


@dataclass
class WebReinforcementDirection:
    """One family of distributed bars in a membrane element.

    Parameters
    ----------
    bar_diameter : float
        Bar diameter (mm).
    bar_spacing : float
        Spacing between bars (mm).
    width : float
        Element width (thickness) the bars are smeared over (mm).
    yield_stress : float
        Steel yield stress (MPa).
    angle : float
        Bar direction, radians from the x-axis.
    n_legs : int
        Number of bar legs per spacing (2 for closed stirrups).
    stress : float
        Current steel stress (MPa), maintained by the caller.
    """

    bar_diameter: float
    bar_spacing: float
    width: float
    yield_stress: float
    angle: float = 0.0
    n_legs: int = 2
    stress: float = 0.0

    @property
    def area(self) -> float:
        return self.n_legs * math.pi / 4.0 * self.bar_diameter ** 2

    @property
    def ratio(self) -> float:
        if self.bar_spacing <= 0 or self.width <= 0:
            return 0.0
        return self.area / (self.bar_spacing * self.width)

    @property
    def capacity_reserve(self) -> float:
        """Smeared stress still available before yield (MPa)."""
        return self.ratio * (self.yield_stress - abs(self.stress))

    def crack_spacing(self) -> float:
        return _crack_spacing(self.bar_diameter, self.ratio)

    def to_dict(self) -> dict:
        return {
            "diameter": self.bar_diameter,
            "spacing": self.bar_spacing,
            "width": self.width,
            "fy": self.yield_stress,
            "angle": self.angle,
            "n_legs": self.n_legs,
            "stress": self.stress,
        }


@dataclass
class WebReinforcement:
    """Orthogonal (or skewed) web reinforcement of a membrane element."""

    x: Optional[WebReinforcementDirection] = None
    y: Optional[WebReinforcementDirection] = None

    def angles(self, theta1: float):
        """Angles between theta1 and each bar direction."""
        theta_nx = theta1 - (self.x.angle if self.x is not None else 0.0)
        theta_ny = theta1 - (self.y.angle if self.y is not None else math.pi / 2.0)
        return theta_nx, theta_ny

    def _directions(self, theta1: float):
        theta_nx, theta_ny = self.angles(theta1)
        for direction, theta_n in ((self.x, theta_nx), (self.y, theta_ny)):
            if direction is not None:
                yield direction, theta_n

    def tension_stiffening_coefficient(self, theta1: float) -> float:
        den = 0.0
        for d, theta_n in self._directions(theta1):
            if d.bar_diameter > 0:
                den += d.ratio / d.bar_diameter * abs(math.cos(theta_n))
        if den <= 0:
            return 0.0
        return 0.25 / den

    def max_transmissible_tensile_stress(self, theta1: float) -> float:
        return sum(
            d.capacity_reserve * math.cos(theta_n) ** 2
            for d, theta_n in self._directions(theta1)
        )

    def crack_spacing(self, theta1: float) -> float:
        inv = sum(
            abs(math.cos(theta_n)) / d.crack_spacing()
            for d, theta_n in self._directions(theta1)
        )
        if inv <= 0:
            return BASE_CRACK_SPACING
        return 1.0 / inv

    def to_dict(self) -> dict:
        return {
            "type": "web",
            "x": self.x.to_dict() if self.x is not None else None,
            "y": self.y.to_dict() if self.y is not None else None,
        }
