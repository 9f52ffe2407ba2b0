"""Periodic transition pool indexed by a per-step period label.

A bounded pool of K matrices (e.g. one per hour of day) is reused across
an arbitrarily long sequence. The pool can be built from trigonometric
covariates of the period position.
"""

import jax.numpy as jnp
import numpy as np

from hmmfwd.config import DEFAULT_PERIOD
from hmmfwd.transitions.time_varying import compute_dynamic_trans
from hmmfwd.types import Array, TransitionIndex
from hmmfwd.validation import check_period_labels, check_transition_stack


def periodic_index(pool: Array, tod, n_obs: int, n_states: int) -> TransitionIndex:
    """Keep the K-matrix pool and point transition i = 1, ..., T-1 at pool[tod[i]].

    Args:
        pool: (K, N, N) transition matrices.
        tod: (T,) integer labels in [0, K). tod[0] precedes any
            transition but is still checked.
        n_obs: Sequence length T.
        n_states: Number of states N.

    Returns:
        TransitionIndex with the (K, N, N) pool and (T-1,) labels.
    """
    n_pool = check_transition_stack(pool, n_states, name="pool")
    labels = check_period_labels(tod, n_obs, n_pool)
    return TransitionIndex(
        pool=jnp.asarray(pool, dtype=jnp.float64),
        steps=jnp.asarray(labels[1:], dtype=jnp.int32),
    )


def make_period_labels(n_obs: int, period: int = DEFAULT_PERIOD, start: int = 0) -> np.ndarray:
    """Labels (start + t) mod period for t = 0, ..., T-1."""
    return (start + np.arange(n_obs)) % period


def periodic_covariates(period: int = DEFAULT_PERIOD) -> Array:
    """Design matrix [1, cos(2 pi k / period), sin(2 pi k / period)].

    Returns:
        (period, 3) covariates, one row per period position.
    """
    k = jnp.arange(period, dtype=jnp.float64)
    angle = 2.0 * jnp.pi * k / period
    return jnp.stack([jnp.ones(period), jnp.cos(angle), jnp.sin(angle)], axis=1)


def compute_periodic_pool(weights: Array, period: int = DEFAULT_PERIOD) -> Array:
    """Build one transition matrix per period position.

    Args:
        weights: (N, N-1, 3) weights on [intercept, cos, sin].
        period: Number of period positions K.

    Returns:
        (K, N, N) transition pool.
    """
    return compute_dynamic_trans(periodic_covariates(period), weights)
