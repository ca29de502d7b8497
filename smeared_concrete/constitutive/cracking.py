"""
Crack detection and post-cracking tensile response.

Crack detection:
  - Uniaxial : cracks when eps >= ecr
  - Biaxial  : Gupta (1998), the cracking stress depends on the transverse
               strain,  fcr = ft * (1 - eps2/ec)  limited to [0.25 ft, ft]

Post-cracking tension:
  - MCFT tension stiffening   f = ft / (1 + sqrt(500 eps))       Vecchio & Collins (1986)
  - DSFM tension softening    linear descent to ets = 2 Gf / (ft Lr)
  - DSFM tension stiffening   f = ft / (1 + sqrt(2.2 m eps)),
                              limited to what the reinforcement can carry  Vecchio (2000)
  - SMM                       f = ft * (ecr / eps)^0.4                    Hsu & Zhu (2002)

All functions are pure.  The crack flag itself lives on the law.
"""

from __future__ import annotations

import math
from typing import Optional

from smeared_concrete.constitutive.numerics import as_finite, is_finite
from smeared_concrete.materials.parameters import ConcreteParameters
from smeared_concrete.materials.reinforcement import ReinforcementContext

# Reference length for unreinforced concrete: half of the base crack spacing (mm)
DEFAULT_REFERENCE_LENGTH = 0.5 * 21.0


# ----------------------------------------------------------------------
# Crack detection
# ----------------------------------------------------------------------
def cracks_uniaxially(strain: float, ecr: float) -> bool:
    return strain >= ecr


def biaxial_cracking_stress(transverse_strain: float, ft: float, ec: float) -> float:
    """Cracking stress reduced by the transverse strain (Gupta 1998).

    ``ec`` is the (negative) peak compressive strain, so a compressive
    transverse strain lowers the cracking stress.
    """
    fcr = as_finite(ft * (1.0 - transverse_strain / ec), ft)
    return min(max(fcr, 0.25 * ft), ft)


def cracks_biaxially(fc1: float, transverse_strain: float, ft: float, ec: float) -> bool:
    return fc1 >= biaxial_cracking_stress(transverse_strain, ft, ec)


# ----------------------------------------------------------------------
# Post-cracking tensile stress
# ----------------------------------------------------------------------
def mcft_tension_stiffening(strain: float, ft: float) -> float:
    return ft / (1.0 + math.sqrt(500.0 * strain))


def smm_cracked_stress(strain: float, ft: float, ecr: float) -> float:
    """Post-cracking tension of the SMM, ft (ecr / eps)^0.4.

    Bounded by ft: a cracked point unloaded below the cracking strain
    does not regain more than its tensile strength.
    """
    return min(as_finite(ft * (ecr / strain) ** 0.4), ft)


def reference_length(
    theta1: float,
    reinforcement: Optional[ReinforcementContext] = None,
    length: Optional[float] = None,
) -> float:
    """Resolve the DSFM reference length (mm).

    An explicit ``length`` wins; otherwise half the crack spacing of the
    reinforcement, or half the plain-concrete spacing.
    """
    if length is not None:
        if not length > 0:
            raise ValueError(f"reference length must be positive, got {length}")
        return length
    if reinforcement is not None:
        return 0.5 * reinforcement.crack_spacing(theta1)
    return DEFAULT_REFERENCE_LENGTH


def dsfm_tension_softening(strain: float, parameters: ConcreteParameters, length: float) -> float:
    """Linear tension softening governed by fracture energy."""
    ft = parameters.ft
    ecr = parameters.ecr
    ets = 2.0 * parameters.Gf / (ft * length) if ft > 0 else 0.0

    if not is_finite(ets) or ets <= ecr:
        return 0.0

    f = ft * (1.0 - (strain - ecr) / (ets - ecr))
    return min(max(f, 0.0), ft)


def dsfm_tension_stiffening(
    strain: float,
    theta1: float,
    ft: float,
    reinforcement: Optional[ReinforcementContext],
) -> float:
    """Tension stiffening from bond with the reinforcement crossing the crack.

    Without reinforcement there is no stiffening contribution.
    """
    if reinforcement is None:
        return 0.0

    m = reinforcement.tension_stiffening_coefficient(theta1)
    if not is_finite(m) or m <= 0:
        return 0.0

    fc1b = ft / (1.0 + math.sqrt(2.2 * m * strain))
    fc1s = reinforcement.max_transmissible_tensile_stress(theta1)

    return max(min(fc1b, fc1s), 0.0)
