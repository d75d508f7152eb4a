"""Numeric helpers shared by the simulation and analytics modules."""

from typing import Sequence, Union
import numpy as np


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with ties going up (12.5 -> 13, 0.125 -> 0.13 at 2 digits).
    
    Python's built-in round() sends ties to the even neighbour, which would
    shift band percentages like 12.5% down to 12%.
    
    Args:
        value: Value to round
        ndigits: Decimal places to keep
    
    Returns:
        Rounded value
    """
    factor = 10 ** ndigits
    return float(np.floor(value * factor + 0.5)) / factor


def round_to_int(value: float) -> int:
    """Round half up to an int."""
    return int(round_half_up(value))


def population_std(samples: Union[Sequence[float], np.ndarray]) -> float:
    """Standard deviation with divisor N."""
    return float(np.std(np.asarray(samples, dtype=float), ddof=0))
