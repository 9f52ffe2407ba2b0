"""Static (fixed) transition matrix."""

import jax.numpy as jnp

from hmmfwd.types import Array, TransitionIndex
from hmmfwd.validation import check_transition_matrix


def make_static_trans(trans_probs: list[list[float]] | None = None) -> Array:
    """Create a static transition matrix.

    Args:
        trans_probs: N x N transition probability matrix.
            If None, uses the default 2-state matrix.

    Returns:
        (N, N) float64 transition matrix.
    """
    if trans_probs is None:
        from hmmfwd.config import DEFAULT_TRANS
        trans_probs = DEFAULT_TRANS

    return jnp.array(trans_probs, dtype=jnp.float64)


def static_index(gamma: Array, n_obs: int, n_states: int) -> TransitionIndex:
    """One-matrix pool with every step pointing at it."""
    check_transition_matrix(gamma, n_states)
    gamma = jnp.asarray(gamma, dtype=jnp.float64)
    return TransitionIndex(
        pool=gamma[None, :, :],
        steps=jnp.zeros(n_obs - 1, dtype=jnp.int32),
    )
