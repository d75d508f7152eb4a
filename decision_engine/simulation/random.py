"""Uniform draw sources and Box-Muller normal sampling."""

import threading
from abc import ABC, abstractmethod
from itertools import cycle
from typing import Iterable, Optional, Tuple
import numpy as np

# Smallest positive double; replaces u1 == 0 so log(u1) stays finite
_MIN_UNIFORM = float(np.nextafter(0.0, 1.0))


class UniformSource(ABC):
    """Supplies independent uniform draws in [0, 1)."""
    
    @abstractmethod
    def uniform(self) -> float:
        """Return one draw in [0, 1)."""
        pass
    
    def draw_pair(self) -> Tuple[float, float]:
        """Return two consecutive draws as one unit."""
        return self.uniform(), self.uniform()


class NumpyUniformSource(UniformSource):
    """Uniform source backed by a numpy Generator."""
    
    def __init__(self, seed: Optional[int] = None):
        """
        Initialize source.
        
        Args:
            seed: Random seed (None draws fresh OS entropy)
        """
        self.rng = np.random.default_rng(seed)
        # Generator is not safe for concurrent use from worker threads
        self._lock = threading.Lock()
    
    def uniform(self) -> float:
        with self._lock:
            return float(self.rng.random())
    
    def draw_pair(self) -> Tuple[float, float]:
        with self._lock:
            u1, u2 = self.rng.random(2)
        return float(u1), float(u2)


class SequenceUniformSource(UniformSource):
    """Replays a fixed sequence of draws, wrapping around at the end."""
    
    def __init__(self, values: Iterable[float]):
        values = [float(v) for v in values]
        if not values:
            raise ValueError("SequenceUniformSource needs at least one value")
        for v in values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"uniform draws must lie in [0, 1), got {v}")
        self.values = values
        self._iter = cycle(values)
        self._lock = threading.Lock()
    
    def uniform(self) -> float:
        with self._lock:
            return next(self._iter)
    
    def draw_pair(self) -> Tuple[float, float]:
        # Both draws under one lock so concurrent callers never split a pair
        with self._lock:
            return next(self._iter), next(self._iter)


def random_normal(mean: float, std: float, source: UniformSource) -> float:
    """
    Draw one approximately normal value via the Box-Muller transform.
    
    Args:
        mean: Distribution mean
        std: Distribution standard deviation
        source: Uniform source supplying the two draws
    
    Returns:
        mean + z * std, with z = sqrt(-2 ln u1) * cos(2 pi u2)
    """
    u1, u2 = source.draw_pair()
    if u1 <= 0.0:
        u1 = _MIN_UNIFORM
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return float(mean + z * std)
