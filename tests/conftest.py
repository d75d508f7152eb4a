"""Shared fixtures for the decision engine test suite."""

import pytest

from decision_engine.models.variables import Variable, default_variables
from decision_engine.simulation.random import NumpyUniformSource, SequenceUniformSource


# u1 = 0.5, u2 = 0.25 gives z = sqrt(2 ln 2) * cos(pi / 2), i.e. ~1e-16
ZERO_NOISE_DRAWS = [0.5, 0.25]


@pytest.fixture
def default_vars():
    """Stock variable map (effort=70, consistency=75, ...)."""
    return default_variables()


@pytest.fixture
def zero_noise_source():
    """Uniform source whose normal draws are effectively zero."""
    return SequenceUniformSource(ZERO_NOISE_DRAWS)


@pytest.fixture
def seeded_source():
    """Seeded numpy source so statistical assertions are stable."""
    return NumpyUniformSource(seed=20240601)


@pytest.fixture
def fixed_variable():
    """Variable pinned by its bounds, so perturbation cannot move it."""
    return Variable(
        name="fixed",
        label="Pinned Input",
        value=50.0,
        min=50.0,
        max=50.0,
        step=1.0,
    )
