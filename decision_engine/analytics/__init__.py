"""Analytics package."""

from decision_engine.analytics.distribution import OutcomeDistribution, summarize_outcomes
from decision_engine.analytics.risk import RiskBreakdown, score_risks, estimate_confidence
from decision_engine.analytics.sensitivity import (
    SensitivityAnalyzer,
    SensitivityAnalysis,
    SensitivityResult,
)
from decision_engine.analytics.comparison import (
    ComparisonRow,
    OptionComparison,
    compare_options,
)

__all__ = [
    "OutcomeDistribution",
    "summarize_outcomes",
    "RiskBreakdown",
    "score_risks",
    "estimate_confidence",
    "SensitivityAnalyzer",
    "SensitivityAnalysis",
    "SensitivityResult",
    "ComparisonRow",
    "OptionComparison",
    "compare_options",
]
