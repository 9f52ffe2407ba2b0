"""Tests for the scaled forward recursion."""

import itertools
import math

import jax.numpy as jnp
import numpy as np
import pytest

from hmmfwd.hmm.forward import scaled_forward


def _brute_force_loglik(allprobs, delta, trans_seq):
    """Sum over every state path (tiny N, T only)."""
    T, N = allprobs.shape
    total = 0.0
    for path in itertools.product(range(N), repeat=T):
        p = delta[path[0]] * allprobs[0, path[0]]
        for t in range(1, T):
            p *= trans_seq[t - 1][path[t - 1], path[t]] * allprobs[t, path[t]]
        total += p
    return math.log(total)


def _numpy_scaled_forward(allprobs, delta, trans_seq):
    """Reference NumPy scaled forward pass."""
    foo = delta * allprobs[0]
    l = np.log(foo.sum())
    phi = foo / foo.sum()
    for t in range(1, allprobs.shape[0]):
        foo = (phi @ trans_seq[t - 1]) * allprobs[t]
        l += np.log(foo.sum())
        phi = foo / foo.sum()
    return l


def _forward(allprobs, delta, trans_seq):
    """Run the scan with one pool entry per step."""
    steps = jnp.arange(len(trans_seq), dtype=jnp.int32)
    return scaled_forward(jnp.array(allprobs), jnp.array(delta), jnp.array(trans_seq), steps)


def _random_problem(T=6, N=3, seed=0):
    rng = np.random.default_rng(seed)
    allprobs = rng.uniform(0.05, 1.0, size=(T, N))
    delta = rng.dirichlet(np.ones(N))
    trans_seq = rng.dirichlet(np.ones(N), size=(T - 1, N))
    return allprobs, delta, trans_seq


class TestScaledForward:
    def test_output_shapes(self):
        allprobs, delta, trans_seq = _random_problem(T=8, N=3)
        result = _forward(allprobs, delta, trans_seq)

        assert result.log_likelihood.shape == ()
        assert result.log_scales.shape == (8,)
        assert result.phi.shape == (8, 3)

    def test_float64(self):
        allprobs, delta, trans_seq = _random_problem()
        result = _forward(allprobs, delta, trans_seq)
        assert result.log_likelihood.dtype == jnp.float64

    def test_import_enables_x64(self):
        assert jnp.zeros(1).dtype == jnp.float64

    def test_matches_brute_force(self):
        allprobs, delta, trans_seq = _random_problem(T=5, N=2, seed=3)
        result = _forward(allprobs, delta, trans_seq)
        expected = _brute_force_loglik(allprobs, delta, trans_seq)
        assert abs(float(result.log_likelihood) - expected) < 1e-10

    def test_matches_numpy_reference(self):
        allprobs, delta, trans_seq = _random_problem(T=40, N=4, seed=7)
        result = _forward(allprobs, delta, trans_seq)
        expected = _numpy_scaled_forward(allprobs, delta, trans_seq)
        np.testing.assert_allclose(float(result.log_likelihood), expected, rtol=0, atol=1e-10)

    def test_pool_lookup_matches_full_stack(self):
        allprobs, delta, trans_seq = _random_problem(T=9, N=3, seed=11)
        pool = trans_seq[:2]
        steps = np.array([0, 1, 1, 0, 0, 1, 0, 1])
        by_index = scaled_forward(jnp.array(allprobs), jnp.array(delta), jnp.array(pool), jnp.array(steps))
        by_stack = _forward(allprobs, delta, pool[steps])
        assert float(by_index.log_likelihood) == float(by_stack.log_likelihood)

    def test_phi_rows_are_distributions(self):
        allprobs, delta, trans_seq = _random_problem(T=30, N=5, seed=1)
        result = _forward(allprobs, delta, trans_seq)
        np.testing.assert_allclose(np.asarray(result.phi).sum(axis=1), 1.0, atol=1e-12)

    def test_log_scales_sum_to_loglik(self):
        allprobs, delta, trans_seq = _random_problem(T=12, N=3, seed=5)
        result = _forward(allprobs, delta, trans_seq)
        np.testing.assert_allclose(
            float(jnp.sum(result.log_scales)), float(result.log_likelihood), atol=1e-10
        )

    def test_single_observation(self):
        allprobs = np.array([[0.2, 0.7]])
        delta = np.array([0.4, 0.6])
        trans_seq = np.zeros((0, 2, 2))
        result = _forward(allprobs, delta, trans_seq)
        assert float(result.log_likelihood) == pytest.approx(math.log(0.4 * 0.2 + 0.6 * 0.7), abs=1e-12)

    def test_long_sequence_does_not_underflow(self):
        """Unscaled forward mass is ~0.1**5000; the scaled pass stays finite."""
        T, N = 5000, 2
        allprobs = np.full((T, N), 0.1)
        delta = np.array([0.5, 0.5])
        trans_seq = np.broadcast_to(np.array([[0.9, 0.1], [0.2, 0.8]]), (T - 1, N, N))
        result = _forward(allprobs, delta, trans_seq)
        assert float(result.log_likelihood) == pytest.approx(T * math.log(0.1), rel=1e-9)


class TestDegenerate:
    def test_zero_row_last_is_neg_inf(self):
        allprobs, delta, trans_seq = _random_problem(T=5, N=3)
        allprobs[-1] = 0.0
        result = _forward(allprobs, delta, trans_seq)
        assert float(result.log_likelihood) == -math.inf

    def test_zero_row_interior_is_neg_inf(self):
        allprobs, delta, trans_seq = _random_problem(T=5, N=3)
        allprobs[2] = 0.0
        result = _forward(allprobs, delta, trans_seq)
        assert float(result.log_likelihood) == -math.inf
        # Later filtered distributions are undefined
        assert np.all(np.isnan(np.asarray(result.phi)[2:]))

    def test_unreachable_state_is_neg_inf(self):
        """Observation only possible in a state the chain cannot enter."""
        allprobs = np.array([[1.0, 0.0], [0.0, 1.0]])
        delta = np.array([1.0, 0.0])
        trans_seq = np.array([[[1.0, 0.0], [0.0, 1.0]]])
        result = _forward(allprobs, delta, trans_seq)
        assert float(result.log_likelihood) == -math.inf

    def test_nan_input_propagates(self):
        allprobs, delta, trans_seq = _random_problem(T=4, N=2)
        allprobs[1, 0] = np.nan
        result = _forward(allprobs, delta, trans_seq)
        assert math.isnan(float(result.log_likelihood))
