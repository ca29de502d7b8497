"""Concrete parameters and reinforcement contexts.

The material-point wrappers live in ``smeared_concrete.materials.concrete``;
they are not re-exported here because they depend on the constitutive laws,
which in turn depend on this package.
"""

from smeared_concrete.materials.parameters import (
    AggregateType,
    ConcreteParameters,
    ParameterModel,
)
from smeared_concrete.materials.reinforcement import (
    ReinforcementContext,
    UniaxialReinforcement,
    WebReinforcement,
    WebReinforcementDirection,
)

__all__ = [
    "AggregateType",
    "ConcreteParameters",
    "ParameterModel",
    "ReinforcementContext",
    "UniaxialReinforcement",
    "WebReinforcement",
    "WebReinforcementDirection",
]
