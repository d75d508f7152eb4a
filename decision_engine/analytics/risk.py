"""Risk breakdown and confidence scoring."""

from dataclasses import dataclass, asdict
from typing import Dict, Mapping, Sequence, Union
import numpy as np

from decision_engine.analytics.distribution import band_fractions
from decision_engine.models.scenario import InvalidInputError
from decision_engine.models.variables import FALLBACK_VALUES
from decision_engine.utils.math import clamp, round_half_up, round_to_int

MIN_CONFIDENCE = 0.50
MAX_CONFIDENCE = 0.95


@dataclass
class RiskBreakdown:
    """
    Qualitative risk percentages.
    
    The four scores are independent of each other and need not sum to 100.
    """
    
    burnout: int
    dropout: int
    plateau: int
    success: int
    
    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)


def score_risks(
    samples: Union[Sequence[float], np.ndarray],
    values: Mapping[str, float]
) -> RiskBreakdown:
    """
    Derive risk percentages from terminal outcomes and inputs.
    
    Args:
        samples: Monte Carlo terminal outcome samples
        values: Resolved variable values
    
    Returns:
        RiskBreakdown with each score in [0, 100]
    """
    samples = np.asarray(samples, dtype=float)
    if samples.size == 0:
        raise InvalidInputError("cannot score risks without samples")
    
    fractions = band_fractions(samples)
    poor = fractions["poor"]
    excellent = fractions["excellent"]
    
    burnout_risk = values.get("burnout_risk", FALLBACK_VALUES["burnout_risk"])
    stress = values.get("stress", FALLBACK_VALUES["stress"])
    consistency = values.get("consistency", FALLBACK_VALUES["consistency"])
    
    burnout = clamp((burnout_risk / 100) * (stress / 100) * 100, 0, 100)
    dropout = clamp(poor * 100 * (1 - consistency / 100), 0, 100)
    plateau = clamp((1 - excellent) * 50, 0, 100)
    success = clamp(excellent * 100, 0, 100)
    
    return RiskBreakdown(
        burnout=round_to_int(burnout),
        dropout=round_to_int(dropout),
        plateau=round_to_int(plateau),
        success=round_to_int(success)
    )


def estimate_confidence(std_dev: float) -> float:
    """
    Map outcome dispersion to a heuristic confidence score.
    
    Args:
        std_dev: Standard deviation of outcome samples (0-100 scale)
    
    Returns:
        1 - std_dev / 100 clamped to [0.50, 0.95], two decimals
    """
    return round_half_up(clamp(1 - std_dev / 100, MIN_CONFIDENCE, MAX_CONFIDENCE), 2)
