"""
PURPOSE: Tests for the risk breakdown and confidence estimator.

Tests cover:
1. Risk formulas against hand-computed values
2. Clamping and integer rounding
3. Confidence floor, ceiling and two-decimal rounding
"""

import pytest

from decision_engine.analytics.risk import estimate_confidence, score_risks
from decision_engine.models.scenario import InvalidInputError
from decision_engine.models.variables import FALLBACK_VALUES, resolve_values


class TestScoreRisks:
    """Tests for score_risks."""

    def test_half_poor_half_excellent(self):
        risks = score_risks([95.0, 95.0, 50.0, 50.0], resolve_values({}))
        assert risks.burnout == 12  # 30% * 40%
        assert risks.dropout == 15  # 50% poor * (1 - 0.70)
        assert risks.plateau == 25  # (1 - 0.5) * 50
        assert risks.success == 50

    def test_no_excellent_outcomes(self):
        risks = score_risks([70.0, 80.0], FALLBACK_VALUES)
        assert risks.success == 0
        assert risks.plateau == 50
        assert risks.dropout == 0

    def test_burnout_maxes_out(self):
        values = dict(FALLBACK_VALUES, burnout_risk=100.0, stress=100.0)
        assert score_risks([50.0], values).burnout == 100

    def test_full_consistency_removes_dropout(self):
        values = dict(FALLBACK_VALUES, consistency=100.0)
        assert score_risks([10.0, 20.0], values).dropout == 0

    def test_scores_need_not_sum_to_100(self):
        risks = score_risks([95.0, 50.0], FALLBACK_VALUES)
        total = risks.burnout + risks.dropout + risks.plateau + risks.success
        assert total != 100
        for value in risks.to_dict().values():
            assert 0 <= value <= 100
            assert isinstance(value, int)

    def test_empty_samples_rejected(self):
        with pytest.raises(InvalidInputError):
            score_risks([], FALLBACK_VALUES)


class TestEstimateConfidence:
    """Tests for estimate_confidence."""

    @pytest.mark.parametrize(
        "std_dev, expected",
        [
            (0.0, 0.95),
            (5.0, 0.95),
            (10.0, 0.9),
            (12.3, 0.88),
            (50.0, 0.5),
            (80.0, 0.5),
        ],
    )
    def test_mapping(self, std_dev, expected):
        assert estimate_confidence(std_dev) == pytest.approx(expected)

    def test_monotonically_non_increasing(self):
        levels = [estimate_confidence(s) for s in range(0, 101, 5)]
        assert levels == sorted(levels, reverse=True)
