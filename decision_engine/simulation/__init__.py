"""Simulation package."""

from decision_engine.simulation.random import (
    UniformSource,
    NumpyUniformSource,
    SequenceUniformSource,
    random_normal,
)
from decision_engine.simulation.outcome import OutcomeModel
from decision_engine.simulation.timeline import TimelineProjector, TimelineDataPoint
from decision_engine.simulation.engine import (
    SimulationEngine,
    SimulationResult,
    DecisionResult,
    run_simulation,
    run_sensitivity_analysis,
)

__all__ = [
    "UniformSource",
    "NumpyUniformSource",
    "SequenceUniformSource",
    "random_normal",
    "OutcomeModel",
    "TimelineProjector",
    "TimelineDataPoint",
    "SimulationEngine",
    "SimulationResult",
    "DecisionResult",
    "run_simulation",
    "run_sensitivity_analysis",
]
