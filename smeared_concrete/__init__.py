"""
smeared-concrete: concrete constitutive laws for smeared-crack analysis
=======================================================================

Stress-strain laws for reinforced concrete in finite-element analysis,
evaluated per material point:

  - Linear-elastic reference law
  - Modified Compression Field Theory (Vecchio & Collins 1986)
  - Disturbed Stress Field Model (Vecchio 2000)
  - Softened Membrane Model (Hsu & Zhu 2002)

With crack detection (uniaxial and Gupta 1998 biaxial), Kupfer
confinement in biaxial compression, uniaxial and biaxial material-point
wrappers, a strain-history driver and JSON I/O.
"""

__version__ = "0.1.0"

from smeared_concrete.materials.parameters import ConcreteParameters, ParameterModel
from smeared_concrete.materials.reinforcement import UniaxialReinforcement, WebReinforcement
from smeared_concrete.constitutive.laws import ConstitutiveModel, create_law
from smeared_concrete.materials.concrete import BiaxialConcrete, UniaxialConcrete
from smeared_concrete.analysis.history import StrainHistoryAnalysis

__all__ = [
    "ConcreteParameters",
    "ParameterModel",
    "UniaxialReinforcement",
    "WebReinforcement",
    "ConstitutiveModel",
    "create_law",
    "BiaxialConcrete",
    "UniaxialConcrete",
    "StrainHistoryAnalysis",
]
