"""Decision simulation engine."""

import logging
import numpy as np
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor, as_completed

from decision_engine.config.settings import settings
from decision_engine.analytics.distribution import OutcomeDistribution, summarize_outcomes
from decision_engine.analytics.risk import RiskBreakdown, score_risks, estimate_confidence
from decision_engine.models.scenario import (
    DecisionScenario,
    SimulationInput,
    validate_horizon,
    validate_iterations,
)
from decision_engine.models.variables import resolve_values
from decision_engine.simulation.outcome import OutcomeModel
from decision_engine.simulation.random import UniformSource, NumpyUniformSource
from decision_engine.simulation.timeline import TimelineDataPoint, TimelineProjector

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Results from simulating one option."""

    scenario_id: str
    option_name: str
    outcome_distribution: OutcomeDistribution
    timeline_data: List[TimelineDataPoint]
    risk_breakdown: RiskBreakdown
    confidence_level: float  # in [0.50, 0.95]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "scenario_id": self.scenario_id,
            "option_name": self.option_name,
            "outcome_distribution": self.outcome_distribution.to_dict(),
            "timeline_data": [point.to_dict() for point in self.timeline_data],
            "risk_breakdown": self.risk_breakdown.to_dict(),
            "confidence_level": self.confidence_level,
        }


@dataclass
class DecisionResult:
    """Both options of a decision scenario, simulated."""

    scenario: DecisionScenario
    option_a: SimulationResult
    option_b: SimulationResult

    def compare(self):
        """Side-by-side metric comparison of the two options."""
        from decision_engine.analytics.comparison import compare_options
        return compare_options(self.option_a, self.option_b)

    def results(self) -> List[SimulationResult]:
        return [self.option_a, self.option_b]


class SimulationEngine:
    """
    Monte Carlo simulation engine for a two-option decision.

    Per option:
    - Samples the outcome model N times at the terminal week
    - Summarizes the samples into band percentages and statistics
    - Scores risks and confidence from the same samples
    - Projects one independent week-by-week trajectory
    """

    def __init__(
        self,
        n_iterations: Optional[int] = None,
        uniform_source: Optional[UniformSource] = None,
        outcome_model: Optional[OutcomeModel] = None
    ):
        """
        Initialize simulation engine.

        Args:
            n_iterations: Terminal-week samples per run (default
                settings.n_iterations)
            uniform_source: Source of uniform draws (default: numpy, seeded
                from settings.random_seed)
            outcome_model: Outcome model (built on uniform_source if omitted)
        """
        if n_iterations is None:
            n_iterations = settings.n_iterations
        self.n_iterations = validate_iterations(n_iterations)
        if outcome_model is None:
            outcome_model = OutcomeModel(uniform_source or NumpyUniformSource(settings.random_seed))
        self.outcome_model = outcome_model
        self.timeline_projector = TimelineProjector(self.outcome_model)

    def sample_terminal_outcomes(self, values: Mapping[str, float], horizon: int) -> np.ndarray:
        """
        Sample the outcome model at the terminal week.

        Args:
            values: Resolved variable values
            horizon: Horizon in weeks; used as both week and total weeks

        Returns:
            Array of n_iterations scores
        """
        horizon = validate_horizon(horizon)
        samples = np.empty(self.n_iterations)
        for i in range(self.n_iterations):
            samples[i] = self.outcome_model.score(values, horizon, horizon)
        return samples

    def run(self, simulation_input: Union[SimulationInput, Mapping[str, Any]]) -> SimulationResult:
        """
        Simulate one option.

        Args:
            simulation_input: SimulationInput or its dictionary form

        Returns:
            SimulationResult

        Raises:
            InvalidInputError: If the horizon is not a positive whole number
        """
        if not isinstance(simulation_input, SimulationInput):
            simulation_input = SimulationInput.from_dict(simulation_input)

        horizon = validate_horizon(simulation_input.time_horizon_weeks)
        values = resolve_values(simulation_input.variables)

        samples = self.sample_terminal_outcomes(values, horizon)
        distribution = summarize_outcomes(samples)
        timeline = self.timeline_projector.project(values, horizon)
        risks = score_risks(samples, values)
        confidence = estimate_confidence(distribution.std_dev)

        logger.info(
            f"Simulated '{simulation_input.option_name}' over {horizon} weeks "
            f"({self.n_iterations} iterations): mean={distribution.mean}, "
            f"std={distribution.std_dev}, confidence={confidence}"
        )

        return SimulationResult(
            scenario_id=simulation_input.scenario_id,
            option_name=simulation_input.option_name,
            outcome_distribution=distribution,
            timeline_data=timeline,
            risk_breakdown=risks,
            confidence_level=confidence
        )

    def run_decision(self, scenario: DecisionScenario) -> DecisionResult:
        """
        Simulate both options of a decision scenario.

        Both options share the scenario's variables and horizon; they differ
        only in their independent random draws.
        """
        result_a, result_b = self.run_many(scenario.inputs(), parallel=False)
        return DecisionResult(scenario=scenario, option_a=result_a, option_b=result_b)

    def run_many(
        self,
        inputs: List[Union[SimulationInput, Mapping[str, Any]]],
        parallel: bool = True,
        max_workers: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[SimulationResult]:
        """
        Simulate several inputs.

        Args:
            inputs: Simulation inputs
            parallel: Whether to fan out to a thread pool for large batches
            max_workers: Number of parallel workers (default: executor default)
            progress_callback: Optional callback(completed, total)

        Returns:
            Results in the same order as inputs
        """
        total = len(inputs)

        if parallel and total > settings.parallel_min_tasks:
            results: List[Optional[SimulationResult]] = [None] * total
            completed = 0

            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_idx = {
                    executor.submit(self.run, item): i
                    for i, item in enumerate(inputs)
                }

                for future in as_completed(future_to_idx):
                    results[future_to_idx[future]] = future.result()
                    completed += 1

                    if progress_callback:
                        progress_callback(completed, total)

            return results
        else:
            results = []
            for i, item in enumerate(inputs):
                results.append(self.run(item))

                if progress_callback:
                    progress_callback(i + 1, total)

            return results


def run_simulation(
    simulation_input: Union[SimulationInput, Mapping[str, Any]],
    n_iterations: Optional[int] = None,
    uniform_source: Optional[UniformSource] = None
) -> SimulationResult:
    """
    Simulate one option with a throwaway engine.

    n_iterations=None reads settings.n_iterations when called.
    """
    return SimulationEngine(n_iterations=n_iterations, uniform_source=uniform_source).run(
        simulation_input
    )


def run_sensitivity_analysis(
    variables: Mapping[str, Any],
    time_horizon_weeks: int,
    n_iterations: Optional[int] = None,
    uniform_source: Optional[UniformSource] = None
):
    """
    Rank variables by their one-at-a-time impact on the mean outcome.

    Accepts the same variable forms as run_simulation: Variable objects or
    their dictionary form. n_iterations=None reads
    settings.sensitivity_iterations when called.
    """
    from decision_engine.analytics.sensitivity import SensitivityAnalyzer

    analyzer = SensitivityAnalyzer(n_iterations=n_iterations, uniform_source=uniform_source)
    return analyzer.analyze(variables, time_horizon_weeks)
