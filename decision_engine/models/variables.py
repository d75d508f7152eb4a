"""Input variables, stock defaults and modelling assumptions."""

from dataclasses import dataclass, asdict, replace
from typing import Dict, List, Mapping, Optional, Any

from decision_engine.models.scenario import InvalidInputError


@dataclass(frozen=True)
class Variable:
    """A bounded numeric input to the outcome model."""
    
    name: str
    label: str
    value: float
    min: float
    max: float
    step: float
    unit: Optional[str] = None
    description: Optional[str] = None
    
    def with_value(self, value: float) -> "Variable":
        """Return a copy carrying a different value."""
        return replace(self, value=value)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping unset optional fields."""
        data = asdict(self)
        for key in ("unit", "description"):
            if data[key] is None:
                del data[key]
        return data
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Variable":
        """
        Build a variable from its dictionary form.
        
        Args:
            data: Mapping with name, label, value, min, max, step and
                optionally unit and description
        
        Returns:
            Variable
        
        Raises:
            InvalidInputError: If a required key is missing
        """
        missing = [k for k in ("name", "label", "value", "min", "max", "step") if k not in data]
        if missing:
            raise InvalidInputError(f"Variable is missing keys: {', '.join(missing)}")
        
        return cls(
            name=str(data["name"]),
            label=str(data["label"]),
            value=float(data["value"]),
            min=float(data["min"]),
            max=float(data["max"]),
            step=float(data["step"]),
            unit=data.get("unit"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Assumption:
    """A modelling assumption shown alongside a scenario."""
    
    id: str
    text: str
    editable: bool = True
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


# Values the outcome model uses for any variable absent from the input map
FALLBACK_VALUES: Dict[str, float] = {
    "effort": 50.0,
    "consistency": 70.0,
    "burnout_risk": 30.0,
    "retention": 80.0,
    "learning_rate": 60.0,
    "stress": 40.0,
}


def _percent(name: str, label: str, value: float, description: str) -> Variable:
    return Variable(
        name=name,
        label=label,
        value=value,
        min=0.0,
        max=100.0,
        step=5.0,
        unit="%",
        description=description,
    )


DEFAULT_VARIABLES: Dict[str, Variable] = {
    "effort": _percent("effort", "Daily Effort Level", 70.0,
                       "How much effort you put in each day"),
    "consistency": _percent("consistency", "Consistency Probability", 75.0,
                            "Likelihood of maintaining your routine"),
    "burnout_risk": _percent("burnout_risk", "Burnout Risk", 30.0,
                             "Risk of burning out over time"),
    "retention": _percent("retention", "Knowledge Retention", 80.0,
                          "How well you retain what you learn"),
    "learning_rate": _percent("learning_rate", "Learning Rate", 65.0,
                              "How quickly you acquire new skills"),
    "stress": _percent("stress", "Base Stress Level", 40.0,
                       "Your baseline stress level"),
}

DEFAULT_ASSUMPTIONS: List[Assumption] = [
    Assumption("1", "Consistency drops by 20% after sustained effort over time"),
    Assumption("2", "Burnout risk increases non-linearly with stress and time"),
    Assumption("3", "Learning compounds weekly with diminishing returns"),
    Assumption("4", "Motivation naturally decays over time without external factors"),
    Assumption("5", "Skill growth follows logarithmic curve based on learning rate"),
]


def default_variables() -> Dict[str, Variable]:
    """Fresh copy of the stock variable map."""
    return dict(DEFAULT_VARIABLES)


def resolve_values(variables: Mapping[str, Variable]) -> Dict[str, float]:
    """
    Merge caller variables over FALLBACK_VALUES.
    
    Every formula reads from the returned map, so it always carries the six
    model inputs plus any extra variables the caller supplied. An explicit
    value of 0 is kept.
    
    Args:
        variables: Variable map keyed by name
    
    Returns:
        Dictionary of name -> value
    """
    values = dict(FALLBACK_VALUES)
    for name, variable in variables.items():
        values[name] = float(variable.value)
    return values


def coerce_variables(variables: Mapping[str, Any]) -> Dict[str, Variable]:
    """
    Normalise a variable map whose entries may be in dictionary form.
    
    Args:
        variables: Map of name -> Variable or Variable.to_dict() output
    
    Returns:
        Map of name -> Variable, in the caller's order
    
    Raises:
        InvalidInputError: If an entry is neither a Variable nor a mapping
    """
    if not isinstance(variables, Mapping):
        raise InvalidInputError(f"variables must be a mapping, got {type(variables).__name__}")
    
    coerced = {}
    for name, variable in variables.items():
        if isinstance(variable, Variable):
            coerced[name] = variable
        elif isinstance(variable, Mapping):
            coerced[name] = Variable.from_dict(variable)
        else:
            raise InvalidInputError(
                f"variable {name!r} must be a Variable or a mapping, got {type(variable).__name__}"
            )
    return coerced
