"""
Strain-history analysis of a single concrete material point.

Algorithm:
==========

For each imposed strain state s_i of the history:

  1. Evaluate the material point (uniaxial strain, principal strains or
     global x-y strains).

  2. Record strains, stresses and secant modules.

  3. Track key events:
     - First cracked step (the crack flag never resets, so every later
       step is cracked as well)
     - First step past the peak compressive strain (ec)
     - First crushed step (ecu)

The material point carries its crack state from one step to the next, so
the history is order dependent and should start from an uncracked point.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from smeared_concrete.materials.concrete import BiaxialConcrete, UniaxialConcrete
from smeared_concrete.materials.reinforcement import ReinforcementContext

logger = logging.getLogger(__name__)

UNIAXIAL_COLUMNS = ("strain", "stress", "secant_module")
BIAXIAL_COLUMNS = ("epsilon1", "epsilon2", "theta1", "fc1", "fc2", "Ec1", "Ec2")


@dataclass
class HistoryPoint:
    """One step of a strain history."""

    step: int
    strains: Tuple[float, ...]
    stresses: Tuple[float, ...]
    secant_modules: Tuple[float, ...]
    cracked: bool = False
    yielded: bool = False
    crushed: bool = False

    @property
    def values(self) -> Tuple[float, ...]:
        return self.strains + self.stresses + self.secant_modules

    def to_dict(self, columns: Sequence[str]) -> dict:
        row = {"step": self.step}
        row.update(zip(columns, self.values))
        row["cracked"] = self.cracked
        row["yielded"] = self.yielded
        row["crushed"] = self.crushed
        return row


@dataclass
class HistoryResult:
    """Full strain-history result."""

    points: List[HistoryPoint] = field(default_factory=list)
    analysis_type: str = "uniaxial"
    model: str = "mcft"

    # Key points (indices into self.points)
    cracking_index: Optional[int] = None
    yield_index: Optional[int] = None
    crushing_index: Optional[int] = None

    @property
    def columns(self) -> Tuple[str, ...]:
        if self.analysis_type == "uniaxial":
            return UNIAXIAL_COLUMNS
        return BIAXIAL_COLUMNS

    @property
    def strains(self) -> List[Tuple[float, ...]]:
        return [p.strains for p in self.points]

    @property
    def stresses(self) -> List[Tuple[float, ...]]:
        return [p.stresses for p in self.points]

    @property
    def cracked(self) -> bool:
        return self.cracking_index is not None

    def rows(self) -> List[dict]:
        columns = self.columns
        return [p.to_dict(columns) for p in self.points]

    def to_dict(self) -> dict:
        return {
            "analysis_type": self.analysis_type,
            "model": self.model,
            "summary": {
                "total_steps": len(self.points),
                "cracking_step": self.cracking_index,
                "yield_step": self.yield_index,
                "crushing_step": self.crushing_index,
            },
            "response": self.rows(),
        }


class StrainHistoryAnalysis:
    """Drive a concrete material point through a strain history.

    Parameters
    ----------
    material : UniaxialConcrete or BiaxialConcrete
        The material point. Its crack state carries over between steps.
    history : sequence
        Uniaxial: strains.  Biaxial: ``(epsilon1, epsilon2[, theta1])``
        tuples, or ``(eps_x, eps_y, gamma_xy)`` tuples when ``xy`` is set.
    reinforcement : ReinforcementContext, optional
        Reinforcement crossing the cracks.
    reference_length : float, optional
        DSFM tension-softening reference length (mm), biaxial only.
    xy : bool
        Interpret biaxial steps as global strains.
    """

    def __init__(
        self,
        material: Union[UniaxialConcrete, BiaxialConcrete],
        history: Sequence,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
        xy: bool = False,
    ) -> None:
        self.material = material
        self.history = list(history)
        self.reinforcement = reinforcement
        self.reference_length = reference_length
        self.xy = xy

    @property
    def is_uniaxial(self) -> bool:
        return isinstance(self.material, UniaxialConcrete)

    def run(self) -> HistoryResult:
        """Execute the strain history.

        Returns
        -------
        HistoryResult
            One point per step, with the key events indexed.
        """
        result = HistoryResult(
            analysis_type="uniaxial" if self.is_uniaxial else "biaxial",
            model=self.material.model.value,
        )

        for i, state in enumerate(self.history):
            point = self._evaluate(i, state)
            result.points.append(point)

            # --- Detect key events ---
            if result.cracking_index is None and point.cracked:
                result.cracking_index = i
                logger.debug("Cracking at step %d", i)

            if result.yield_index is None and point.yielded:
                result.yield_index = i

            if result.crushing_index is None and point.crushed:
                result.crushing_index = i
                logger.debug("Crushing at step %d", i)

        return result

    def _evaluate(self, step: int, state) -> HistoryPoint:
        m = self.material

        if self.is_uniaxial:
            m.calculate(state, self.reinforcement)
            strains = (m.strain,)
            stresses = (m.stress,)
            secants = (m.secant_module,)
        else:
            if self.xy:
                m.calculate_xy(*state, self.reinforcement, self.reference_length)
            else:
                m.calculate(*self._principal(state), self.reinforcement, self.reference_length)
            ps = m.principal_strains
            strains = (ps.epsilon1, ps.epsilon2, ps.theta1)
            stresses = m.principal_stresses
            secants = m.secant_modules

        return HistoryPoint(
            step=step,
            strains=strains,
            stresses=tuple(stresses),
            secant_modules=tuple(secants),
            cracked=m.cracked,
            yielded=m.yielded,
            crushed=m.crushed,
        )

    @staticmethod
    def _principal(state) -> Tuple[float, float, float]:
        if len(state) == 2:
            return state[0], state[1], math.pi / 4.0
        return state[0], state[1], state[2]
