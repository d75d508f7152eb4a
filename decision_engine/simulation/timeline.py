"""Week-by-week trajectory projection."""

from dataclasses import dataclass, asdict
from typing import Dict, List, Mapping, Optional
import numpy as np

from decision_engine.models.scenario import validate_horizon
from decision_engine.models.variables import FALLBACK_VALUES
from decision_engine.simulation.outcome import OutcomeModel
from decision_engine.simulation.random import random_normal
from decision_engine.utils.math import clamp, round_to_int


@dataclass
class TimelineDataPoint:
    """Five independently noised scores for one week."""
    
    week: int
    motivation: int
    skill: int
    stress: int
    consistency: int
    outcome: int
    
    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)


class TimelineProjector:
    """
    Projects one stochastic trajectory over weeks 0..horizon.
    
    Each metric gets its own noise draw per week and the outcome column is a
    fresh outcome model call, so the trace is a single representative path
    and not an average over Monte Carlo samples.
    """
    
    def __init__(self, outcome_model: Optional[OutcomeModel] = None):
        """
        Initialize projector.
        
        Args:
            outcome_model: Model used for the outcome column; its uniform
                source also drives the metric noise
        """
        self.outcome_model = outcome_model or OutcomeModel()
    
    @property
    def uniform_source(self):
        return self.outcome_model.uniform_source
    
    def _noisy(self, value: float, std: float) -> int:
        return round_to_int(clamp(value + random_normal(0.0, std, self.uniform_source), 0.0, 100.0))
    
    def project_week(self, values: Mapping[str, float], week: int, horizon: int) -> TimelineDataPoint:
        """
        Compute the data point for one week.

        Raises:
            InvalidInputError: If the horizon is not a positive whole number
        """
        horizon = validate_horizon(horizon)
        progress = week / horizon
        fatigue = progress ** 2
        learning_rate = values.get("learning_rate", FALLBACK_VALUES["learning_rate"])
        stress = values.get("stress", FALLBACK_VALUES["stress"])
        consistency = values.get("consistency", FALLBACK_VALUES["consistency"])
        
        motivation = self._noisy(100 * np.exp(-0.5 * progress), 5)
        skill = self._noisy(50 + (learning_rate / 100) * 50 * np.log(1 + week), 3)
        current_stress = self._noisy(stress + 20 * fatigue, 5)
        current_consistency = self._noisy(consistency * (1 - 0.2 * fatigue), 5)
        outcome = round_to_int(self.outcome_model.score(values, week, horizon))
        
        return TimelineDataPoint(
            week=week,
            motivation=motivation,
            skill=skill,
            stress=current_stress,
            consistency=current_consistency,
            outcome=outcome
        )
    
    def project(self, values: Mapping[str, float], horizon: int) -> List[TimelineDataPoint]:
        """
        Project the full trajectory.
        
        Args:
            values: Resolved variable values
            horizon: Horizon in weeks (> 0)
        
        Returns:
            horizon + 1 data points, weeks 0..horizon in order
        """
        horizon = validate_horizon(horizon)
        return [self.project_week(values, week, horizon) for week in range(horizon + 1)]
