"""Side-by-side comparison of two simulated options."""

from dataclasses import dataclass
from typing import Dict, List, Optional, TYPE_CHECKING
import pandas as pd

if TYPE_CHECKING:
    from decision_engine.simulation.engine import SimulationResult

# Differences smaller than this (in metric units) read as "Similar"
SIMILARITY_THRESHOLD = 1.0


@dataclass
class ComparisonRow:
    """One metric for both options."""

    metric: str
    value_a: float
    value_b: float
    higher_is_better: bool
    unit: str = ""

    @property
    def difference(self) -> float:
        """Option A minus option B."""
        return self.value_a - self.value_b

    @property
    def winner(self) -> str:
        """'a' or 'b' for the larger value, 'tie' when equal."""
        if self.value_a > self.value_b:
            return "a"
        if self.value_a < self.value_b:
            return "b"
        return "tie"

    @property
    def favoured(self) -> Optional[str]:
        """Option the metric favours, taking direction into account."""
        if self.winner == "tie":
            return None
        if self.higher_is_better:
            return self.winner
        return "b" if self.winner == "a" else "a"

    def label(self) -> str:
        """Human-readable difference."""
        if abs(self.difference) < SIMILARITY_THRESHOLD:
            return "Similar"
        return f"{self.difference:+.1f}"

    def to_dict(self) -> Dict:
        return {
            "metric": self.metric,
            "a": self.value_a,
            "b": self.value_b,
            "unit": self.unit,
            "higher_is_better": self.higher_is_better,
            "difference": self.difference,
            "winner": self.winner,
            "label": self.label(),
        }


@dataclass
class OptionComparison:
    """All comparison rows for a pair of options."""

    option_a: str
    option_b: str
    rows: List[ComparisonRow]

    def row(self, metric: str) -> ComparisonRow:
        for row in self.rows:
            if row.metric == metric:
                return row
        raise KeyError(metric)

    def preferred_option(self) -> Optional[str]:
        """
        Option favoured by more metrics.

        Returns:
            Option name, or None when the metrics split evenly
        """
        a_votes = sum(1 for r in self.rows if r.favoured == "a")
        b_votes = sum(1 for r in self.rows if r.favoured == "b")
        if a_votes > b_votes:
            return self.option_a
        if b_votes > a_votes:
            return self.option_b
        return None

    def to_dict(self) -> Dict:
        return {
            "option_a": self.option_a,
            "option_b": self.option_b,
            "rows": [r.to_dict() for r in self.rows],
            "preferred_option": self.preferred_option(),
        }

    def to_frame(self) -> pd.DataFrame:
        """Comparison table for display, one row per metric."""
        column_a, column_b = self.option_a, self.option_b
        if column_a == column_b:
            column_a, column_b = f"{column_a} (A)", f"{column_b} (B)"
        return pd.DataFrame(
            {
                "Metric": [r.metric for r in self.rows],
                column_a: [f"{r.value_a:.1f}{r.unit}" for r in self.rows],
                column_b: [f"{r.value_b:.1f}{r.unit}" for r in self.rows],
                "Difference": [r.label() for r in self.rows],
            }
        ).set_index("Metric")


def compare_options(result_a: "SimulationResult", result_b: "SimulationResult") -> OptionComparison:
    """
    Compare two simulation results metric by metric.

    Args:
        result_a: Result for option A
        result_b: Result for option B

    Returns:
        OptionComparison
    """
    dist_a, dist_b = result_a.outcome_distribution, result_b.outcome_distribution
    risk_a, risk_b = result_a.risk_breakdown, result_b.risk_breakdown

    rows = [
        ComparisonRow("Mean Outcome", dist_a.mean, dist_b.mean, True),
        ComparisonRow("Median Outcome", dist_a.median, dist_b.median, True),
        ComparisonRow("Excellent Probability", dist_a.excellent, dist_b.excellent, True, "%"),
        ComparisonRow("Poor Probability", dist_a.poor, dist_b.poor, False, "%"),
        ComparisonRow("Burnout Risk", risk_a.burnout, risk_b.burnout, False, "%"),
        ComparisonRow("Success Probability", risk_a.success, risk_b.success, True, "%"),
        ComparisonRow(
            "Confidence Level",
            result_a.confidence_level * 100,
            result_b.confidence_level * 100,
            True,
            "%",
        ),
    ]

    return OptionComparison(
        option_a=result_a.option_name,
        option_b=result_b.option_name,
        rows=rows
    )
