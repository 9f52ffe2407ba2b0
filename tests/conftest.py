"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure src is on the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def two_state_problem():
    """Small 2-state Gaussian HMM sequence with known generating parameters."""
    rng = np.random.default_rng(42)
    T = 200
    gamma = np.array([[0.95, 0.05], [0.10, 0.90]])
    delta = np.array([0.5, 0.5])
    means = np.array([0.0, 3.0])
    sds = np.array([1.0, 1.0])

    states = np.zeros(T, dtype=np.int32)
    states[0] = rng.choice(2, p=delta)
    for t in range(1, T):
        states[t] = rng.choice(2, p=gamma[states[t - 1]])
    obs = rng.normal(means[states], sds[states])

    return obs, states, gamma, delta, means, sds
