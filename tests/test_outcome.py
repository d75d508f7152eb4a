"""
PURPOSE: Tests for the outcome score model.

Tests cover:
1. Deterministic formula values at week 0 and the terminal week
2. Clamping to [0, 100] under extreme noise
3. Fallback values for missing variables
4. Rejection of non-positive horizons
5. Effort monotonicity over large sample batches
"""

import numpy as np
import pytest
from scipy import stats

from decision_engine.models.scenario import InvalidInputError
from decision_engine.models.variables import FALLBACK_VALUES, resolve_values
from decision_engine.simulation.outcome import OutcomeModel
from decision_engine.simulation.random import NumpyUniformSource, SequenceUniformSource


def terminal_expected(values, weeks):
    """Hand-computed terminal-week score (progress = 1)."""
    skill_growth = 1 + values["learning_rate"] / 100 * np.log(1 + weeks)
    base = (
        values["effort"] / 100
        * values["consistency"] / 100 * 0.8
        * values["retention"] / 100
        * skill_growth
        * np.exp(-0.5)
        * 100
    )
    penalty = values["burnout_risk"] / 100 * values["stress"] / 100 * 30
    return base - penalty


class TestExpectedScore:
    """Tests for the noise-free part of the model."""

    def test_week_zero_has_no_decay_or_penalty(self, default_vars, zero_noise_source):
        model = OutcomeModel(zero_noise_source)
        values = resolve_values(default_vars)
        # 0.70 * 0.75 * 0.80 * 100
        assert model.expected_score(values, 0, 12) == pytest.approx(42.0)
        assert model.burnout_penalty(values, 0, 12) == 0.0

    def test_terminal_week_matches_formula(self, default_vars, zero_noise_source):
        model = OutcomeModel(zero_noise_source)
        values = resolve_values(default_vars)
        assert model.expected_score(values, 12, 12) == pytest.approx(terminal_expected(values, 12))
        assert model.expected_score(values, 12, 12) == pytest.approx(50.756, abs=1e-3)

    def test_burnout_penalty_at_terminal_week(self, zero_noise_source):
        model = OutcomeModel(zero_noise_source)
        values = dict(FALLBACK_VALUES, burnout_risk=50.0, stress=80.0)
        assert model.burnout_penalty(values, 6, 6) == pytest.approx(0.5 * 0.8 * 30)

    def test_missing_variables_fall_back(self, zero_noise_source):
        model = OutcomeModel(zero_noise_source)
        assert model.expected_score({}, 12, 12) == pytest.approx(
            terminal_expected(FALLBACK_VALUES, 12)
        )


class TestScore:
    """Tests for the noisy, clamped score."""

    def test_zero_noise_score_equals_expected(self, default_vars, zero_noise_source):
        model = OutcomeModel(zero_noise_source)
        values = resolve_values(default_vars)
        assert model.score(values, 12, 12) == pytest.approx(model.expected_score(values, 12, 12))

    def test_large_positive_noise_clamps_to_100(self, default_vars):
        # u1 tiny, u2 = 0 -> z ~ +7.4, noise ~ +74
        model = OutcomeModel(SequenceUniformSource([1e-12, 0.0]))
        assert model.score(resolve_values(default_vars), 12, 12) == 100.0

    def test_large_negative_noise_clamps_to_0(self, default_vars):
        # u2 = 0.5 -> cos(pi) = -1
        model = OutcomeModel(SequenceUniformSource([1e-12, 0.5]))
        assert model.score(resolve_values(default_vars), 12, 12) == 0.0

    def test_zero_effort_scores_zero(self, default_vars, zero_noise_source):
        default_vars["effort"] = default_vars["effort"].with_value(0.0)
        model = OutcomeModel(zero_noise_source)
        assert model.score(resolve_values(default_vars), 12, 12) == 0.0

    def test_scores_stay_in_bounds(self, default_vars, seeded_source):
        model = OutcomeModel(seeded_source, noise_std=40.0)
        values = resolve_values(default_vars)
        scores = [model.score(values, 12, 12) for _ in range(2000)]
        assert min(scores) >= 0.0
        assert max(scores) <= 100.0

    def test_repeated_calls_differ(self, default_vars, seeded_source):
        model = OutcomeModel(seeded_source)
        values = resolve_values(default_vars)
        assert len({model.score(values, 12, 12) for _ in range(20)}) > 1

    @pytest.mark.parametrize("total_weeks", [0, -3])
    def test_non_positive_total_weeks_rejected(self, default_vars, zero_noise_source, total_weeks):
        model = OutcomeModel(zero_noise_source)
        with pytest.raises(InvalidInputError):
            model.score(resolve_values(default_vars), 0, total_weeks)


class TestEffortMonotonicity:
    """Higher effort must lift the mean outcome by a clear margin."""

    def test_high_effort_beats_low_effort(self):
        model = OutcomeModel(NumpyUniformSource(seed=11))
        high = dict(FALLBACK_VALUES, effort=90.0)
        low = dict(FALLBACK_VALUES, effort=10.0)

        high_scores = np.array([model.score(high, 12, 12) for _ in range(5000)])
        low_scores = np.array([model.score(low, 12, 12) for _ in range(5000)])

        assert high_scores.mean() - low_scores.mean() > 30
        result = stats.ttest_ind(high_scores, low_scores, equal_var=False)
        assert result.pvalue < 1e-10
