"""Outcome score model for a single scenario instance."""

from typing import Mapping, Optional
import numpy as np

from decision_engine.config.settings import settings
from decision_engine.models.scenario import InvalidInputError
from decision_engine.models.variables import FALLBACK_VALUES
from decision_engine.simulation.random import UniformSource, NumpyUniformSource, random_normal
from decision_engine.utils.math import clamp


def _value(values: Mapping[str, float], name: str) -> float:
    return float(values.get(name, FALLBACK_VALUES[name]))


class OutcomeModel:
    """
    Scores one scenario instance on a 0-100 scale at a given week.
    
    The deterministic part combines:
    - Motivation decay: exp(-0.5 * progress)
    - Skill compounding: 1 + learning_rate * ln(1 + week)
    - Fatigue: progress^2, eroding consistency by up to 20%
    - Burnout penalty: burnout_risk * stress * fatigue * 30
    
    Gaussian noise (std 10 by default) is added on every call, so identical
    inputs give different scores.
    """
    
    def __init__(
        self,
        uniform_source: Optional[UniformSource] = None,
        noise_std: Optional[float] = None
    ):
        """
        Initialize model.
        
        Args:
            uniform_source: Source of uniform draws for the noise term
            noise_std: Standard deviation of the noise term
                (default settings.outcome_noise_std)
        """
        self.uniform_source = uniform_source or NumpyUniformSource(settings.random_seed)
        self.noise_std = settings.outcome_noise_std if noise_std is None else noise_std
    
    @staticmethod
    def _progress(week: float, total_weeks: float) -> float:
        if total_weeks <= 0:
            raise InvalidInputError(f"total_weeks must be positive, got {total_weeks!r}")
        return week / total_weeks
    
    def base_score(self, values: Mapping[str, float], week: float, total_weeks: float) -> float:
        """Product of the effort, consistency, retention, skill and motivation terms."""
        progress = self._progress(week, total_weeks)
        
        motivation_decay = np.exp(-0.5 * progress)
        skill_growth = 1 + (_value(values, "learning_rate") / 100) * np.log(1 + week)
        fatigue = progress ** 2
        adjusted_consistency = (_value(values, "consistency") / 100) * (1 - 0.2 * fatigue)
        
        return float(
            (_value(values, "effort") / 100)
            * adjusted_consistency
            * (_value(values, "retention") / 100)
            * skill_growth
            * motivation_decay
            * 100
        )
    
    def burnout_penalty(self, values: Mapping[str, float], week: float, total_weeks: float) -> float:
        fatigue = self._progress(week, total_weeks) ** 2
        return (
            (_value(values, "burnout_risk") / 100)
            * (_value(values, "stress") / 100)
            * fatigue
            * 30
        )
    
    def expected_score(self, values: Mapping[str, float], week: float, total_weeks: float) -> float:
        """Noise-free, unclamped score."""
        return (
            self.base_score(values, week, total_weeks)
            - self.burnout_penalty(values, week, total_weeks)
        )
    
    def score(self, values: Mapping[str, float], week: float, total_weeks: float) -> float:
        """
        Draw one noisy outcome score.
        
        Args:
            values: Resolved variable values (see resolve_values)
            week: Week to evaluate
            total_weeks: Horizon in weeks (must be > 0)
        
        Returns:
            Score clamped to [0, 100]
        
        Raises:
            InvalidInputError: If total_weeks <= 0
        """
        raw = self.expected_score(values, week, total_weeks) + random_normal(
            0.0, self.noise_std, self.uniform_source
        )
        return clamp(raw, 0.0, 100.0)
