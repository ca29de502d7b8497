"""
Concrete material points for uniaxial and biaxial (membrane) analysis.

A material point owns one constitutive law (and therefore one crack flag)
and memoises the last evaluated strain state:

  - UniaxialConcrete : bar / fibre with a cross-sectional area
  - BiaxialConcrete  : membrane element in plane stress, principal or
                       global (x, y) strains

Sign convention:
  - Compression is NEGATIVE strain / stress
  - Tension is POSITIVE strain / stress
"""

from __future__ import annotations

import math
from typing import Optional, Tuple, Union

from smeared_concrete.constitutive.laws import ConstitutiveLaw, ConstitutiveModel
from smeared_concrete.constitutive.principal import PrincipalStrains, principal_to_xy
from smeared_concrete.materials.parameters import ConcreteParameters
from smeared_concrete.materials.reinforcement import ReinforcementContext


class UniaxialConcrete:
    """Concrete under uniaxial strain.

    Parameters
    ----------
    parameters : ConcreteParameters
        Concrete parameters.
    area : float
        Cross-sectional area (mm^2).
    model : ConstitutiveModel or str
        Constitutive law. Default MCFT.
    consider_crack_slip : bool
        Crack slip for the DSFM law.
    """

    def __init__(
        self,
        parameters: ConcreteParameters,
        area: float,
        model: Union[ConstitutiveModel, str] = ConstitutiveModel.MCFT,
        consider_crack_slip: bool = True,
    ) -> None:
        if area <= 0:
            raise ValueError(f"area must be positive, got {area}")

        self.parameters = parameters
        self.area = area
        self.law = ConstitutiveLaw.from_model(model, parameters, consider_crack_slip)

        self._strain = 0.0
        self._stress = 0.0

    @property
    def model(self) -> ConstitutiveModel:
        return self.law.model

    def calculate(self, strain: float, reinforcement: Optional[ReinforcementContext] = None) -> float:
        """Evaluate the law at ``strain`` and return the stress (MPa)."""
        self._strain = strain
        self._stress = self.law.stress(strain, reinforcement)
        return self._stress

    @property
    def strain(self) -> float:
        return self._strain

    @property
    def stress(self) -> float:
        return self._stress

    @property
    def force(self) -> float:
        """Axial force (N)."""
        return self._stress * self.area

    @property
    def stiffness(self) -> float:
        """Initial axial stiffness Ec*A (N)."""
        return self.parameters.Ec * self.area

    @property
    def max_force(self) -> float:
        """Squash load -fc*A (N)."""
        return -self.parameters.fc * self.area

    @property
    def secant_module(self) -> float:
        return self.law.secant_module(self._stress, self._strain)

    @property
    def cracked(self) -> bool:
        return self.law.cracked

    @property
    def crushed(self) -> bool:
        return self._strain <= self.parameters.ecu

    @property
    def yielded(self) -> bool:
        return self._strain <= self.parameters.ec

    def to_dict(self) -> dict:
        return {
            "type": "uniaxial",
            "model": self.model.value,
            "area": self.area,
            "strain": self.strain,
            "stress": self.stress,
            "force": self.force,
            "secant_module": self.secant_module,
            "cracked": self.cracked,
            "crushed": self.crushed,
            "yielded": self.yielded,
        }


class BiaxialConcrete:
    """Concrete membrane element under a plane strain state.

    Parameters
    ----------
    parameters : ConcreteParameters
        Concrete parameters.
    model : ConstitutiveModel or str
        Constitutive law. Default MCFT.
    consider_crack_slip : bool
        Crack slip for the DSFM law.
    """

    def __init__(
        self,
        parameters: ConcreteParameters,
        model: Union[ConstitutiveModel, str] = ConstitutiveModel.MCFT,
        consider_crack_slip: bool = True,
    ) -> None:
        self.parameters = parameters
        self.law = ConstitutiveLaw.from_model(model, parameters, consider_crack_slip)

        self._strains = PrincipalStrains(0.0, 0.0)
        self._stresses: Tuple[float, float] = (0.0, 0.0)

    @property
    def model(self) -> ConstitutiveModel:
        return self.law.model

    def calculate(
        self,
        epsilon1: float,
        epsilon2: float,
        theta1: float = math.pi / 4.0,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
    ) -> Tuple[float, float]:
        """Evaluate the principal stresses (fc1, fc2) in MPa."""
        strains = PrincipalStrains(epsilon1, epsilon2, theta1)
        return self._calculate(strains, reinforcement, reference_length)

    def calculate_xy(
        self,
        eps_x: float,
        eps_y: float,
        gamma_xy: float,
        reinforcement: Optional[ReinforcementContext] = None,
        reference_length: Optional[float] = None,
    ) -> Tuple[float, float]:
        """Evaluate from global strains; returns the principal stresses."""
        strains = PrincipalStrains.from_xy(eps_x, eps_y, gamma_xy)
        return self._calculate(strains, reinforcement, reference_length)

    def _calculate(self, strains, reinforcement, reference_length):
        self._stresses = self.law.calculate_stresses(strains, reinforcement, reference_length)
        self._strains = strains
        return self._stresses

    @property
    def principal_strains(self) -> PrincipalStrains:
        return self._strains

    @property
    def principal_stresses(self) -> Tuple[float, float]:
        return self._stresses

    @property
    def stresses_xy(self) -> Tuple[float, float, float]:
        """(sigma_x, sigma_y, tau_xy) in MPa."""
        fc1, fc2 = self._stresses
        return principal_to_xy(fc1, fc2, self._strains.theta1)

    @property
    def secant_modules(self) -> Tuple[float, float]:
        fc1, fc2 = self._stresses
        return (
            self.law.secant_module(fc1, self._strains.epsilon1),
            self.law.secant_module(fc2, self._strains.epsilon2),
        )

    @property
    def cracked(self) -> bool:
        return self.law.cracked

    @property
    def crushed(self) -> bool:
        return self._strains.epsilon2 <= self.parameters.ecu

    @property
    def yielded(self) -> bool:
        return self._strains.epsilon2 <= self.parameters.ec

    def to_dict(self) -> dict:
        fc1, fc2 = self._stresses
        sx, sy, txy = self.stresses_xy
        Ec1, Ec2 = self.secant_modules
        return {
            "type": "biaxial",
            "model": self.model.value,
            **self._strains.to_dict(),
            "fc1": fc1,
            "fc2": fc2,
            "sigma_x": sx,
            "sigma_y": sy,
            "tau_xy": txy,
            "Ec1": Ec1,
            "Ec2": Ec2,
            "cracked": self.cracked,
            "crushed": self.crushed,
            "yielded": self.yielded,
        }
