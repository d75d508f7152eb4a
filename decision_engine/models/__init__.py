"""Input models."""

from decision_engine.models.scenario import (
    InvalidInputError,
    SimulationInput,
    DecisionScenario,
    validate_horizon,
    validate_iterations,
)
from decision_engine.models.variables import (
    Variable,
    Assumption,
    FALLBACK_VALUES,
    DEFAULT_VARIABLES,
    DEFAULT_ASSUMPTIONS,
    default_variables,
    resolve_values,
    coerce_variables,
)

__all__ = [
    "InvalidInputError",
    "SimulationInput",
    "DecisionScenario",
    "validate_horizon",
    "validate_iterations",
    "Variable",
    "Assumption",
    "FALLBACK_VALUES",
    "DEFAULT_VARIABLES",
    "DEFAULT_ASSUMPTIONS",
    "default_variables",
    "resolve_values",
    "coerce_variables",
]
