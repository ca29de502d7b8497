"""Concrete constitutive laws, crack detection and confinement."""

from smeared_concrete.constitutive.laws import (
    ConstitutiveLaw,
    ConstitutiveModel,
    DSFMLaw,
    LinearLaw,
    MCFTLaw,
    SMMLaw,
    create_law,
)
from smeared_concrete.constitutive.principal import PrincipalCase, PrincipalStrains
from smeared_concrete.constitutive.confinement import solve_confinement

__all__ = [
    "ConstitutiveLaw",
    "ConstitutiveModel",
    "DSFMLaw",
    "LinearLaw",
    "MCFTLaw",
    "SMMLaw",
    "create_law",
    "PrincipalCase",
    "PrincipalStrains",
    "solve_confinement",
]
