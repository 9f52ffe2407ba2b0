"""Time-varying transition matrices, one per step.

Covariate-driven construction uses a multinomial logit per source state:

    logits[i, j] = covariates_t @ weights[i, j', :]  (j != i)
    logits[i, i] = 0  (reference: staying)
    Gamma_t[i, :] = softmax(logits[i, :])
"""

import jax
import jax.numpy as jnp

from hmmfwd.types import Array, TransitionIndex
from hmmfwd.validation import check_transition_stack


def time_varying_index(gammas: Array, n_obs: int, n_states: int) -> TransitionIndex:
    """Use the (T-1, N, N) stack as the pool, step i pointing at gammas[i].

    Args:
        gammas: (T-1, N, N) transition matrices; gammas[i] governs the move
            into observation i+1.
        n_obs: Sequence length T.
        n_states: Number of states N.
    """
    check_transition_stack(gammas, n_states, expected_len=n_obs - 1, name="gammas")
    return TransitionIndex(
        pool=jnp.asarray(gammas, dtype=jnp.float64),
        steps=jnp.arange(n_obs - 1, dtype=jnp.int32),
    )


def _logits_to_trans(logits_nonref: Array) -> Array:
    """Turn (..., N, N-1) off-diagonal logits into (..., N, N) row-stochastic matrices."""
    N = logits_nonref.shape[-2]
    if N == 1:
        return jnp.ones(logits_nonref.shape[:-1] + (1,))

    # Row i: insert a zero logit at column i
    idx = jnp.arange(N)
    col = jnp.arange(N)[None, :]
    src = jnp.where(col < idx[:, None], col, col - 1)  # (N, N)
    src = jnp.clip(src, 0, N - 2)
    gathered = jnp.take_along_axis(
        logits_nonref,
        jnp.broadcast_to(src, logits_nonref.shape[:-2] + (N, N)),
        axis=-1,
    )
    logits = jnp.where(col == idx[:, None], 0.0, gathered)
    return jax.nn.softmax(logits, axis=-1)


@jax.jit
def compute_dynamic_trans(covariates: Array, weights: Array) -> Array:
    """Compute per-step transition matrices from covariates.

    Args:
        covariates: (T-1, D) covariate features per transition (include an
            intercept column yourself).
        weights: (N, N-1, D) weights; weights[i] has one row per
            off-diagonal target of source state i, in column order.

    Returns:
        gammas: (T-1, N, N) row-stochastic transition matrices.
    """
    logits_nonref = jnp.einsum("td,ikd->tik", covariates, weights)  # (T-1, N, N-1)
    return _logits_to_trans(logits_nonref)


def init_transition_weights(N: int = 2, D: int = 1, stay: float = 2.0) -> Array:
    """Initialize weights with a persistent intercept and zero slopes.

    Args:
        N: Number of states.
        D: Number of covariate features (intercept first).
        stay: Intercept is -stay for every off-diagonal target.

    Returns:
        weights: (N, N-1, D).
    """
    weights = jnp.zeros((N, N - 1, D), dtype=jnp.float64)
    return weights.at[:, :, 0].set(-stay)
