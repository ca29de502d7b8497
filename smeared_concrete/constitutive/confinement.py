"""
Confinement of concrete in biaxial compression.

In pure biaxial compression the strength in each principal direction is
increased by the compressive stress acting in the other one (Kupfer et al.
1969):

    beta_L = 1 + 0.92 |f_t / fc| - 0.76 |f_t / fc|^2

Since each stress depends on the other, the pair is found by fixed-point
iteration:

    fc1 = f(ec1, ec2, beta_L(fc2))
    fc2 = f(ec2, ec1, beta_L(fc1))

The loop is capped at MAX_ITERATIONS passes.  If the tolerance is not met
the last iterate is returned: the result is a bounded-effort approximation,
not a guaranteed-convergent solve.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from smeared_concrete.constitutive.numerics import is_finite

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 20

# Convergence tolerance on both stresses (MPa)
TOLERANCE = 0.01

# compressive(strain, transverse_strain, confinement_factor) -> stress
CompressiveBranch = Callable[[float, float, float], float]


def confinement_factor(transverse_stress: float, fc: float) -> float:
    """Strength amplification due to the transverse compressive stress.

    Values outside (1, 2) are not physical for this expression and fall
    back to 1 (no confinement).
    """
    ratio = abs(transverse_stress / fc)
    c = 1.0 + 0.92 * ratio - 0.76 * ratio * ratio

    if is_finite(c) and 1.0 < c < 2.0:
        return c
    return 1.0


def solve_confinement(
    compressive: CompressiveBranch,
    ec1: float,
    ec2: float,
    fc: float,
    initial: Optional[Tuple[float, float]] = None,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> Tuple[float, float]:
    """Solve the mutually confined principal stresses.

    Parameters
    ----------
    compressive : callable
        Compressive branch of the law, ``compressive(strain, transverse, beta)``.
    ec1, ec2 : float
        Principal strains, both <= 0.
    fc : float
        Compressive strength (MPa, positive).
    initial : (float, float), optional
        Starting stresses. Default: the unconfined pair.
    tolerance : float
        Convergence tolerance on both stresses (MPa).
    max_iterations : int
        Maximum number of passes.

    Returns
    -------
    (fc1, fc2)
        Confined principal stresses (MPa, negative or zero).
    """
    if initial is None:
        fc1 = compressive(ec1, ec2, 1.0)
        fc2 = compressive(ec2, ec1, 1.0)
    else:
        fc1, fc2 = initial

    for it in range(1, max_iterations + 1):
        beta_l1 = confinement_factor(fc2, fc)
        beta_l2 = confinement_factor(fc1, fc)

        fc1_it = compressive(ec1, ec2, beta_l1)
        fc2_it = compressive(ec2, ec1, beta_l2)

        if abs(fc1 - fc1_it) <= tolerance and abs(fc2 - fc2_it) <= tolerance:
            logger.debug("Confinement converged in %d passes", it)
            return fc1_it, fc2_it

        fc1, fc2 = fc1_it, fc2_it

    logger.debug(
        "Confinement not converged after %d passes (ec1=%g, ec2=%g), using last iterate",
        max_iterations, ec1, ec2,
    )
    return fc1, fc2
