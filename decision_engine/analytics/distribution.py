"""Outcome distribution summary over Monte Carlo samples."""

from dataclasses import dataclass
from typing import Dict, Sequence, Union
import numpy as np

from decision_engine.models.scenario import InvalidInputError
from decision_engine.utils.math import round_half_up, round_to_int, population_std

# Lower edges of the score bands; each band is half-open except excellent
EXCELLENT_THRESHOLD = 90.0
GOOD_THRESHOLD = 75.0
MODERATE_THRESHOLD = 60.0


@dataclass
class OutcomeDistribution:
    """Band percentages and summary statistics of the outcome samples."""
    
    excellent: int  # % of samples in [90, 100]
    good: int  # % in [75, 90)
    moderate: int  # % in [60, 75)
    poor: int  # % in [0, 60)
    mean: float
    median: float
    std_dev: float  # population std dev
    
    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary using the wire field names."""
        return {
            "excellent": self.excellent,
            "good": self.good,
            "moderate": self.moderate,
            "poor": self.poor,
            "mean": self.mean,
            "median": self.median,
            "stdDev": self.std_dev,
        }


def band_fractions(samples: np.ndarray) -> Dict[str, float]:
    """Fraction of samples in each score band."""
    n = len(samples)
    return {
        "excellent": np.count_nonzero(samples >= EXCELLENT_THRESHOLD) / n,
        "good": np.count_nonzero((samples >= GOOD_THRESHOLD) & (samples < EXCELLENT_THRESHOLD)) / n,
        "moderate": np.count_nonzero((samples >= MODERATE_THRESHOLD) & (samples < GOOD_THRESHOLD)) / n,
        "poor": np.count_nonzero(samples < MODERATE_THRESHOLD) / n,
    }


def summarize_outcomes(samples: Union[Sequence[float], np.ndarray]) -> OutcomeDistribution:
    """
    Bucket and summarize raw outcome samples.
    
    Each band percentage is rounded on its own, so the four may sum to
    anywhere in 97..103. The median is the element at sorted index N // 2
    (the upper middle for even N).
    
    Args:
        samples: Outcome scores
    
    Returns:
        OutcomeDistribution
    
    Raises:
        InvalidInputError: If samples is empty
    """
    samples = np.asarray(samples, dtype=float)
    if samples.size == 0:
        raise InvalidInputError("cannot summarize an empty sample set")
    
    fractions = band_fractions(samples)
    ordered = np.sort(samples)
    
    return OutcomeDistribution(
        excellent=round_to_int(fractions["excellent"] * 100),
        good=round_to_int(fractions["good"] * 100),
        moderate=round_to_int(fractions["moderate"] * 100),
        poor=round_to_int(fractions["poor"] * 100),
        mean=round_half_up(float(np.mean(samples)), 1),
        median=round_half_up(float(ordered[len(ordered) // 2]), 1),
        std_dev=round_half_up(population_std(samples), 1)
    )
