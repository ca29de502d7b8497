"""
Concrete material parameters.

A ``ConcreteParameters`` bundle carries everything the constitutive laws
need: compressive and tensile strength, elastic module, peak and ultimate
strains, fracture energy.  Values not supplied explicitly are derived from
the compressive strength with one of the built-in calculators:

  - DEFAULT : ft = 0.65 * fc^(1/3),   Ec = 2 fc / 0.002
  - MCFT    : ft = 0.33 * sqrt(fc),   Ec = 2 fc / 0.002  (Vecchio & Collins 1986)
  - MC2010  : fib Model Code 2010
  - NBR6118 : ABNT NBR 6118:2014
  - CUSTOM  : nothing derived, all values must be given

Sign convention:
  - fc, ft, Ec are POSITIVE
  - ec (peak strain) and ecu (ultimate strain) are stored NEGATIVE

Units: MPa, mm, N/mm.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ParameterModel(Enum):
    DEFAULT = "default"
    MCFT = "mcft"
    MC2010 = "mc2010"
    NBR6118 = "nbr6118"
    CUSTOM = "custom"


class AggregateType(Enum):
    BASALT = "basalt"
    QUARTZITE = "quartzite"
    LIMESTONE = "limestone"
    SANDSTONE = "sandstone"


# fib MC2010 ultimate strains for the high-strength classes C50..C90
_MC2010_CLASSES = (50.0, 55.0, 60.0, 70.0, 80.0, 90.0)
_MC2010_ULTIMATE_STRAINS = (-0.0034, -0.0034, -0.0033, -0.0032, -0.0031, -0.003)


@dataclass(frozen=True)
class ConcreteParameters:
    """Read-only concrete parameter bundle.

    Parameters
    ----------
    fc : float
        Compressive strength in MPa (positive value, e.g. 30.0).
    ft : float, optional
        Tensile strength in MPa. Default from ``model``.
    Ec : float, optional
        Initial elastic module in MPa. Default from ``model``.
    ec : float, optional
        Peak (plastic) compressive strain, either sign. Stored negative.
    ecu : float, optional
        Ultimate compressive strain, either sign. Stored negative.
    Gf : float
        Fracture energy in N/mm. Default 0.075.
    nu : float
        Poisson ratio. Default 0.2. Informational: carried and serialised,
        not used by the constitutive laws.
    aggregate_size : float
        Maximum aggregate diameter in mm. Informational, like ``nu``.
    model : ParameterModel
        Calculator used for the values left as ``None``.
    aggregate_type : AggregateType
        Aggregate type (affects Ec for MC2010 and NBR6118).
    consider_confinement : bool
        Amplify strength in biaxial compression (Kupfer 1969).
    """

    fc: float
    ft: Optional[float] = None
    Ec: Optional[float] = None
    ec: Optional[float] = None
    ecu: Optional[float] = None
    Gf: float = 0.075
    nu: float = 0.2
    aggregate_size: float = 20.0
    model: ParameterModel = ParameterModel.MC2010
    aggregate_type: AggregateType = AggregateType.QUARTZITE
    consider_confinement: bool = True

    def __post_init__(self) -> None:
        if self.fc <= 0:
            raise ValueError(f"fc must be positive, got {self.fc}")

        model = ParameterModel(self.model)
        aggregate_type = AggregateType(self.aggregate_type)
        object.__setattr__(self, "model", model)
        object.__setattr__(self, "aggregate_type", aggregate_type)

        missing = [
            name for name in ("ft", "Ec", "ec", "ecu") if getattr(self, name) is None
        ]
        if missing:
            if model == ParameterModel.CUSTOM:
                raise ValueError(
                    f"custom parameters require explicit values for: {', '.join(missing)}"
                )
            derived = _derive(self.fc, model, aggregate_type)
            for name in missing:
                object.__setattr__(self, name, derived[name])

        object.__setattr__(self, "ec", -abs(self.ec))
        object.__setattr__(self, "ecu", -abs(self.ecu))

        if self.ft < 0:
            raise ValueError(f"ft must not be negative, got {self.ft}")
        if self.Ec <= 0:
            raise ValueError(f"Ec must be positive, got {self.Ec}")
        if self.ec == 0:
            raise ValueError("ec must be non-zero")
        if self.Gf <= 0:
            raise ValueError(f"Gf must be positive, got {self.Gf}")

    @property
    def ecr(self) -> float:
        """Cracking strain."""
        return self.ft / self.Ec

    @classmethod
    def custom(cls, fc: float, ft: float, Ec: float, ec: float, ecu: float, **kwargs) -> "ConcreteParameters":
        """Parameters with every value given explicitly."""
        return cls(fc=fc, ft=ft, Ec=Ec, ec=ec, ecu=ecu, model=ParameterModel.CUSTOM, **kwargs)

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "fc": self.fc,
            "ft": self.ft,
            "Ec": self.Ec,
            "ec": self.ec,
            "ecu": self.ecu,
            "Gf": self.Gf,
            "nu": self.nu,
            "aggregate_size": self.aggregate_size,
            "model": self.model.value,
            "aggregate_type": self.aggregate_type.value,
            "consider_confinement": self.consider_confinement,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ConcreteParameters":
        return cls(
            fc=d["fc"],
            ft=d.get("ft"),
            Ec=d.get("Ec"),
            ec=d.get("ec"),
            ecu=d.get("ecu"),
            Gf=d.get("Gf", 0.075),
            nu=d.get("nu", 0.2),
            aggregate_size=d.get("aggregate_size", 20.0),
            model=ParameterModel(d.get("model", "mc2010")),
            aggregate_type=AggregateType(d.get("aggregate_type", "quartzite")),
            consider_confinement=d.get("consider_confinement", True),
        )


# ----------------------------------------------------------------------
# Calculators
# ----------------------------------------------------------------------
def _derive(fc: float, model: ParameterModel, aggregate_type: AggregateType) -> dict:
    if model == ParameterModel.MC2010:
        return _mc2010(fc, aggregate_type)
    elif model == ParameterModel.NBR6118:
        return _nbr6118(fc, aggregate_type)
    elif model == ParameterModel.MCFT:
        return {"ft": 0.33 * math.sqrt(fc), "Ec": 2.0 * fc / 0.002, "ec": -0.002, "ecu": -0.0035}
    return {"ft": 0.65 * fc ** (1.0 / 3.0), "Ec": 2.0 * fc / 0.002, "ec": -0.002, "ecu": -0.0035}


def _mc2010(fc: float, aggregate_type: AggregateType) -> dict:
    if aggregate_type == AggregateType.BASALT:
        alpha_e = 1.2
    elif aggregate_type == AggregateType.QUARTZITE:
        alpha_e = 1.0
    else:
        alpha_e = 0.9

    if fc <= 50.0:
        ft = 0.3 * fc ** (2.0 / 3.0)
    else:
        ft = 2.12 * math.log(1.0 + 0.1 * fc)

    if fc < 50.0:
        ecu = -0.0035
    elif fc >= 90.0:
        ecu = -0.003
    else:
        ecu = _interpolate(fc, _MC2010_CLASSES, _MC2010_ULTIMATE_STRAINS)

    return {
        "ft": ft,
        "Ec": 21500.0 * alpha_e * (0.1 * fc) ** (1.0 / 3.0),
        "ec": -1.6e-3 * (0.1 * fc) ** 0.25,
        "ecu": ecu,
    }


def _nbr6118(fc: float, aggregate_type: AggregateType) -> dict:
    alpha_e = {
        AggregateType.BASALT: 1.2,
        AggregateType.QUARTZITE: 1.0,
        AggregateType.LIMESTONE: 0.9,
    }.get(aggregate_type, 0.7)

    if fc <= 50.0:
        return {
            "ft": 0.3 * fc ** (2.0 / 3.0),
            "Ec": alpha_e * 5600.0 * math.sqrt(fc),
            "ec": -0.002,
            "ecu": -0.0035,
        }
    return {
        "ft": 2.12 * math.log(1.0 + 0.11 * fc),
        "Ec": 21500.0 * alpha_e * (0.1 * fc + 1.25) ** (1.0 / 3.0),
        "ec": -0.002 - 0.000085 * (fc - 50.0) ** 0.53,
        "ecu": -0.0026 - 0.035 * (0.01 * (90.0 - fc)) ** 4,
    }


def _three_point_slope(xs, ys, at: int, i0: int, i1: int, i2: int) -> float:
    """Slope at ``xs[at]`` of the parabola through three table points."""
    t = xs[at] - xs[i0]
    x1 = xs[i1] - xs[i0]
    x2 = xs[i2] - xs[i0]
    a = (ys[i2] - ys[i0] - x2 / x1 * (ys[i1] - ys[i0])) / (x2 * x2 - x1 * x2)
    b = (ys[i1] - ys[i0] - a * x1 * x1) / x1
    return 2.0 * a * t + b


def _akima_slopes(xs, ys):
    """Node slopes of the Akima spline (at least five points).

    Interior nodes use the Akima weights; the two nodes at each end take
    the slope of the parabola through the three end points.
    """
    n = len(xs)
    m = [(ys[i + 1] - ys[i]) / (xs[i + 1] - xs[i]) for i in range(n - 1)]
    w = [0.0] + [abs(m[i] - m[i - 1]) for i in range(1, n - 1)]

    d = [0.0] * n
    for i in range(2, n - 2):
        if math.isclose(w[i - 1], 0.0, abs_tol=1e-15) and math.isclose(w[i + 1], 0.0, abs_tol=1e-15):
            d[i] = ((xs[i + 1] - xs[i]) * m[i - 1] + (xs[i] - xs[i - 1]) * m[i]) / (xs[i + 1] - xs[i - 1])
        else:
            d[i] = (w[i + 1] * m[i - 1] + w[i - 1] * m[i]) / (w[i + 1] + w[i - 1])

    d[0] = _three_point_slope(xs, ys, 0, 0, 1, 2)
    d[1] = _three_point_slope(xs, ys, 1, 0, 1, 2)
    d[n - 2] = _three_point_slope(xs, ys, n - 2, n - 3, n - 2, n - 1)
    d[n - 1] = _three_point_slope(xs, ys, n - 1, n - 3, n - 2, n - 1)
    return d


def _interpolate(x: float, xs, ys) -> float:
    """Akima spline interpolation on a sorted table (Akima 1970)."""
    i = bisect_left(xs, x)
    if i < len(xs) and xs[i] == x:
        return ys[i]
    i = min(max(i - 1, 0), len(xs) - 2)

    d = _akima_slopes(xs, ys)
    h = xs[i + 1] - xs[i]
    m = (ys[i + 1] - ys[i]) / h
    c2 = (3.0 * m - 2.0 * d[i] - d[i + 1]) / h
    c3 = (d[i] + d[i + 1] - 2.0 * m) / (h * h)

    t = x - xs[i]
    return ys[i] + t * (d[i] + t * (c2 + t * c3))
