"""Simulation inputs and input validation."""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from decision_engine.models.variables import Assumption, Variable


class InvalidInputError(ValueError):
    """Raised when a caller supplies input the engine cannot simulate."""


def validate_horizon(weeks: Any) -> int:
    """
    Check a time horizon and return it as an int.
    
    Args:
        weeks: Horizon in weeks
    
    Returns:
        Horizon as int
    
    Raises:
        InvalidInputError: If the horizon is not a positive whole number
    """
    if isinstance(weeks, bool) or not isinstance(weeks, Real):
        raise InvalidInputError(f"time horizon must be a number of weeks, got {weeks!r}")
    if math.isnan(weeks) or math.isinf(weeks) or weeks != int(weeks):
        raise InvalidInputError(f"time horizon must be a whole number of weeks, got {weeks!r}")
    if weeks <= 0:
        raise InvalidInputError(f"time horizon must be positive, got {weeks!r}")
    return int(weeks)


def validate_iterations(n: Any, name: str = "n_iterations") -> int:
    """Check a sample count is a positive int."""
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise InvalidInputError(f"{name} must be a positive integer, got {n!r}")
    return n


@dataclass
class SimulationInput:
    """One option of a scenario, ready to simulate."""
    
    scenario_id: str
    option_name: str
    variables: Dict[str, "Variable"]
    time_horizon_weeks: int
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationInput":
        """
        Build an input from the wire form.
        
        Variables may be given as Variable objects or as dictionaries.
        """
        from decision_engine.models.variables import coerce_variables

        missing = [
            k for k in ("variables", "time_horizon_weeks", "option_name", "scenario_id")
            if k not in data
        ]
        if missing:
            raise InvalidInputError(f"simulation input is missing keys: {', '.join(missing)}")
        
        return cls(
            scenario_id=str(data["scenario_id"]),
            option_name=str(data["option_name"]),
            variables=coerce_variables(data["variables"]),
            time_horizon_weeks=data["time_horizon_weeks"],
        )


@dataclass
class DecisionScenario:
    """A two-option decision sharing one variable map and horizon."""
    
    scenario_id: str
    title: str
    option_a: str
    option_b: str
    time_horizon_weeks: int
    variables: Dict[str, "Variable"]
    assumptions: List["Assumption"] = field(default_factory=list)
    description: Optional[str] = None
    
    def inputs(self) -> List[SimulationInput]:
        """Simulation inputs for option A then option B."""
        return [
            SimulationInput(
                scenario_id=self.scenario_id,
                option_name=option,
                variables=self.variables,
                time_horizon_weeks=self.time_horizon_weeks,
            )
            for option in (self.option_a, self.option_b)
        ]
