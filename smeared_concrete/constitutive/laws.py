"""
Concrete constitutive laws for smeared-crack analysis.

Four interchangeable laws share one interface:

  - LINEAR : linear-elastic, never cracks
  - MCFT   : Modified Compression Field Theory (Vecchio & Collins 1986)
  - DSFM   : Disturbed Stress Field Model (Vecchio 2000)
  - SMM    : Softened Membrane Model (Hsu & Zhu 2002)

Each law owns a crack flag.  It starts False and, once set, stays set for
the life of the instance: evaluations are therefore order dependent and a
law must not be shared between material points.

Uniaxial evaluation takes a strain; biaxial evaluation takes the principal
strains (epsilon1 >= epsilon2) and the angle theta1 of epsilon1.  In pure
biaxial compression the two stresses are solved together with the
confinement iteration.

Sign convention:
  - Compression is NEGATIVE strain / stress
  - Tension is POSITIVE strain / stress
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple, Union

from smeared_concrete.constitutive import cracking
from smeared_concrete.constitutive.confinement import solve_confinement
from smeared_concrete.constitutive.numerics import (
    STRAIN_TOLERANCE,
    STRESS_TOLERANCE,
    as_finite,
    is_finite,
)
from smeared_concrete.constitutive.principal import PrincipalCase, PrincipalStrains
from smeared_concrete.materials.parameters import ConcreteParameters
from smeared_concrete.materials.reinforcement import ReinforcementContext

logger = logging.getLogger(__name__)


class ConstitutiveModel(Enum):
    LINEAR = "linear"
    MCFT = "mcft"
    DSFM = "dsfm"
    SMM = "smm"


class ConstitutiveLaw(ABC):
    """Base class for the concrete constitutive laws.

    Parameters
    ----------
    parameters : ConcreteParameters
        Read-only material parameters.
    consider_crack_slip : bool
        Crack-slip consideration (only used by DSFM).
    """

    model: ConstitutiveModel

    def __init__(self, parameters: ConcreteParameters, consider_crack_slip: bool = False) -> None:
        self.parameters = parameters
        self.consider_crack_slip = consider_crack_slip
        self._cracked = False

    @classmethod
    def from_model(
        cls,
        model: Union[ConstitutiveModel, str],
        parameters: ConcreteParameters,
        consider_crack_slip: bool = True,
    ) -> "ConstitutiveLaw":
        """Create the law for ``model``."""
        if isinstance(model, str):
            model = ConstitutiveModel(model.lower())

        if model == ConstitutiveModel.LINEAR:
            return LinearLaw(parameters)
        elif model == ConstitutiveModel.MCFT:
            return MCFTLaw(parameters)
        elif model == ConstitutiveModel.DSFM:
            return DSFMLaw(parameters, consider_crack_slip)
        elif model == ConstitutiveModel.SMM:
            return SMMLaw(parameters)
        raise ValueError(f"Unknown constitutive model: {model}")

    @property
    def cracked(self) -> bool:
        return self._cracked

    def is_cracked(self) -> bool:
        return self._cracked

    def _set_cracked(self, strain: float) -> None:
        self._cracked = True
        logger.debug("%s concrete cracked at strain %.4e", self.model.name, strain)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fc={self.parameters.fc}, cracked={self._cracked})"

    # ------------------------------------------------------------------
    # Uniaxial
    # ------------------------------------------------------------------
    def stress(self, strain: float, reinforcement: Optional[ReinforcementContext] = None) -> float:
        """Return stress (MPa) for a uniaxial strain.

        Compression is negative, tension is positive.
        """
        strain = as_finite(strain)
        if strain == 0.0:
            return 0.0
        elif strain > 0:
            return self._uniaxial_tensile_stress(strain, reinforcement)
        return self.compressive_stress(strain)

    def _uniaxial_tensile_stress(self, strain: float, reinforcement: Optional[ReinforcementContext]) -> float:
        if not self._cracked and cracking.cracks_uniaxially(strain, self.parameters.ecr):
            self._set_cracked(strain)

        if not self._cracked:
            return self.parameters.Ec * strain
        return self.cracked_stress(strain, 0.0, reinforcement)

    def secant_module(self, stress: float, strain: float) -> float:
        """Secant module (MPa), limited to the elastic module."""
        Ec = self.parameters.Ec
        if abs(stress) <= STRESS_TOLERANCE or abs(strain) <= STRAIN_TOLERANCE:
            return Ec
        return min(as_finite(stress / strain, Ec), Ec)

    # ------------------------------------------------------------------
    # Biaxial
    # ------------------------------------------------------------------
    def principal_stresses(
        self,
        epsilon1: float,
        epsilon2: float,
        theta1: float = math.pi / 4.0,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
    ) -> Tuple[float, float]:
        """Return the principal stresses (fc1, fc2) in MPa.

        Parameters
        ----------
        epsilon1, epsilon2 : float
            Principal strains, epsilon1 >= epsilon2.
        theta1 : float
            Angle of epsilon1 from the x-axis (radians).
        reinforcement : ReinforcementContext, optional
            Reinforcement crossing the cracks.
        reference_length : float, optional
            Tension-softening reference length in mm (DSFM only).
        """
        strains = PrincipalStrains(epsilon1, epsilon2, theta1)
        return self.calculate_stresses(strains, reinforcement, reference_length)

    def calculate_stresses(
        self,
        strains: PrincipalStrains,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
    ) -> Tuple[float, float]:
        if strains.is_zero:
            return 0.0, 0.0

        ec1, ec2, theta1 = strains.epsilon1, strains.epsilon2, strains.theta1
        case = strains.case

        if case == PrincipalCase.TENSION_COMPRESSION:
            fc1 = self.tensile_stress(ec1, ec2, theta1, reinforcement, reference_length)
            fc2 = self.compressive_stress(ec2, ec1)

        elif case == PrincipalCase.PURE_TENSION:
            fc1 = self.tensile_stress(ec1, ec2, theta1, reinforcement, reference_length)
            fc2 = self.tensile_stress(ec2, ec1, theta1, reinforcement, reference_length)

        elif not self.parameters.consider_confinement:
            fc1 = self.compressive_stress(ec1, ec2)
            fc2 = self.compressive_stress(ec2, ec1)

        else:
            fc1, fc2 = solve_confinement(self.compressive_stress, ec1, ec2, self.parameters.fc)

        return fc1, fc2

    def tensile_stress(
        self,
        strain: float,
        transverse_strain: float = 0.0,
        theta1: float = math.pi / 4.0,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
    ) -> float:
        """Biaxial tensile stress, with the crack check of Gupta (1998)."""
        if not is_finite(strain) or strain <= 0:
            return 0.0

        p = self.parameters
        if not self._cracked:
            fc1 = p.Ec * strain
            if cracking.cracks_biaxially(fc1, transverse_strain, p.ft, p.ec):
                self._set_cracked(strain)
            elif reinforcement is None:
                return fc1
            else:
                # yielded steel has no reserve left
                return max(min(fc1, reinforcement.max_transmissible_tensile_stress(theta1)), 0.0)

        return self.cracked_stress(strain, theta1, reinforcement, reference_length)

    # ------------------------------------------------------------------
    # Branches implemented by each law
    # ------------------------------------------------------------------
    @abstractmethod
    def compressive_stress(
        self,
        strain: float,
        transverse_strain: float = 0.0,
        confinement_factor: float = 1.0,
    ) -> float:
        """Compressive stress (negative) for a negative ``strain``."""

    @abstractmethod
    def cracked_stress(
        self,
        strain: float,
        theta1: float,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
    ) -> float:
        """Tensile stress of cracked concrete for a positive ``strain``."""


class LinearLaw(ConstitutiveLaw):
    """Linear-elastic concrete: sigma = Ec * eps, no cracking, no confinement."""

    model = ConstitutiveModel.LINEAR

    def _uniaxial_tensile_stress(self, strain, reinforcement):
        return self.parameters.Ec * strain

    def calculate_stresses(self, strains, reinforcement=None, reference_length=None):
        Ec = self.parameters.Ec
        return Ec * strains.epsilon1, Ec * strains.epsilon2

    def tensile_stress(self, strain, transverse_strain=0.0, theta1=math.pi / 4.0,
                       reinforcement=None, reference_length=None):
        return self.parameters.Ec * as_finite(strain)

    def compressive_stress(self, strain, transverse_strain=0.0, confinement_factor=1.0):
        return self.parameters.Ec * as_finite(strain)

    def cracked_stress(self, strain, theta1, reinforcement=None, reference_length=None):
        # the elastic line continues, this law never cracks
        return self.parameters.Ec * strain


class MCFTLaw(ConstitutiveLaw):
    """Modified Compression Field Theory (Vecchio & Collins 1986).

    Compression: Hognestad parabola with peak softened by the transverse
    tensile strain,

        f2max = fc / (0.8 - 0.34 * eps1/ec)  <= fc

    Tension after cracking: f = ft / (1 + sqrt(500 * eps)).
    """

    model = ConstitutiveModel.MCFT

    def compressive_stress(self, strain, transverse_strain=0.0, confinement_factor=1.0):
        if not is_finite(strain, transverse_strain) or strain >= 0:
            return 0.0

        fc = self.parameters.fc
        ec = self.parameters.ec

        f2max = -fc
        if transverse_strain > 0:
            softened = as_finite(-fc / (0.8 - 0.34 * transverse_strain / ec), -fc)
            if softened < 0:
                f2max = max(softened, -fc)
        f2max *= confinement_factor

        # Parabola; beyond n = 2 the concrete carries nothing
        n = strain / ec
        return as_finite(f2max * max(2.0 * n - n * n, 0.0), -fc * confinement_factor)

    def cracked_stress(self, strain, theta1, reinforcement=None, reference_length=None):
        return cracking.mcft_tension_stiffening(strain, self.parameters.ft)


class DSFMLaw(ConstitutiveLaw):
    """Disturbed Stress Field Model (Vecchio 2000).

    Compression: Popovics / Thorenfeldt curve with peak stress and strain
    reduced by the softening factor beta_D.  Crack slip lowers the
    softening coefficient Cs from 1.0 to 0.55.

    Tension after cracking: the larger of fracture-energy tension softening
    and bond tension stiffening.
    """

    model = ConstitutiveModel.DSFM

    def __init__(self, parameters: ConcreteParameters, consider_crack_slip: bool = True) -> None:
        super().__init__(parameters, consider_crack_slip)

    @property
    def Cs(self) -> float:
        return 0.55 if self.consider_crack_slip else 1.0

    def softening_factor(self, strain: float, transverse_strain: float) -> float:
        """Compression softening factor beta_D, in (0, 1]."""
        r = min(as_finite(-transverse_strain / strain), 400.0)
        if r < 0.28:
            return 1.0

        Cd = 0.35 * (r - 0.28) ** 0.8
        return min(1.0 / (1.0 + self.Cs * Cd), 1.0)

    def compressive_stress(self, strain, transverse_strain=0.0, confinement_factor=1.0):
        if not is_finite(strain, transverse_strain) or strain >= 0:
            return 0.0

        fc = self.parameters.fc
        beta_d = self.softening_factor(strain, transverse_strain)

        fp = -beta_d * fc * confinement_factor
        ep = beta_d * self.parameters.ec * confinement_factor

        # Post-peak decay (Thorenfeldt et al. 1987)
        k = 1.0 if ep <= strain else 0.67 - fp / 62.0
        n = 0.8 - fp / 17.0
        ratio = strain / ep

        stress = fp * n * ratio / (n - 1.0 + ratio ** (n * k))
        return as_finite(stress, -fc * confinement_factor)

    def cracked_stress(self, strain, theta1, reinforcement=None, reference_length=None):
        length = cracking.reference_length(theta1, reinforcement, reference_length)

        fc1a = cracking.dsfm_tension_softening(strain, self.parameters, length)
        fc1b = cracking.dsfm_tension_stiffening(strain, theta1, self.parameters.ft, reinforcement)

        return max(fc1a, fc1b)


class SMMLaw(ConstitutiveLaw):
    """Softened Membrane Model (Hsu & Zhu 2002).

    Softening coefficient:

        soft = zeta(fc) * 1/sqrt(1 + 400 eps1),   zeta = min(5.8/sqrt(fc), 0.9)

    Compression: parabola up to the softened peak, then a parabolic descent
    whose magnitude is kept between 0.5 |fp| and |fp|.
    Tension after cracking: f = ft * (ecr / eps)^0.4.
    """

    model = ConstitutiveModel.SMM

    def __init__(self, parameters: ConcreteParameters) -> None:
        super().__init__(parameters)
        self._strength_function = min(5.8 / math.sqrt(parameters.fc), 0.9)

    def softening_coefficient(self, transverse_strain: float = 0.0) -> float:
        tensile = 1.0 / math.sqrt(1.0 + 400.0 * max(transverse_strain, 0.0))
        return self._strength_function * tensile

    def compressive_stress(self, strain, transverse_strain=0.0, confinement_factor=1.0):
        if not is_finite(strain, transverse_strain) or strain >= 0:
            return 0.0

        fc = self.parameters.fc
        soft = self.softening_coefficient(transverse_strain)

        fp = -soft * fc
        ep = soft * self.parameters.ec
        r = as_finite(strain / ep)

        if r <= 1.0:
            stress = fp * (2.0 * r - r * r)
        else:
            stress = min(fp * (1.0 - ((r - 1.0) / (4.0 / soft - 1.0)) ** 2), 0.5 * fp)

        return as_finite(stress * confinement_factor, -fc * confinement_factor)

    def cracked_stress(self, strain, theta1, reinforcement=None, reference_length=None):
        return cracking.smm_cracked_stress(strain, self.parameters.ft, self.parameters.ecr)


create_law = ConstitutiveLaw.from_model
