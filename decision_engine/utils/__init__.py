"""Utility modules."""

from decision_engine.utils.math import (
    clamp,
    round_half_up,
    round_to_int,
    population_std,
)
from decision_engine.utils.logging import setup_logger

__all__ = [
    "clamp",
    "round_half_up",
    "round_to_int",
    "population_std",
    "setup_logger",
]
