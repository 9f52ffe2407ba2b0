"""Scaled forward algorithm using jax.lax.scan.

Works in probability space and renormalizes the forward vector at every
step, accumulating the log normalizers. This keeps phi a distribution and
avoids underflow on long sequences without a logsumexp per entry.
Transition matrices arrive as a (M, N, N) pool plus a (T-1,) step index;
the matrix for each step is picked inside the scan, so a homogeneous or
periodic model never stores more than its own M matrices.
"""

import jax
import jax.numpy as jnp
from jax import lax

from hmmfwd.types import Array, ForwardResult


@jax.jit
def scaled_forward(
    allprobs: Array,
    delta: Array,
    pool: Array,
    steps: Array,
) -> ForwardResult:
    """Forward pass for a single observation sequence.

    Args:
        allprobs: (T, N) observation likelihoods per state.
        delta: (N,) initial state distribution.
        pool: (M, N, N) transition matrices.
        steps: (T-1,) int indices into pool; pool[steps[i]] governs the
            move into observation i+1.

    Returns:
        ForwardResult with the log-likelihood, per-step log normalizers
        and normalized forward probabilities.
    """
    # An empty pool only happens with T == 1, where the scan body never runs,
    # but it is still traced and needs a matrix to index.
    if pool.shape[0] == 0:
        pool = jnp.zeros((1,) + pool.shape[1:], dtype=pool.dtype)

    # Initialize: foo_0 = delta * emission_0
    foo_0 = delta * allprobs[0]
    sumfoo_0 = jnp.sum(foo_0)
    phi_0 = foo_0 / sumfoo_0
    l_0 = jnp.log(sumfoo_0)

    def scan_fn(carry, inputs):
        phi_prev, l_prev = carry
        k, probs_t = inputs
        # sum_i phi_prev[i] * Gamma[i, j], times emission for each j
        foo = (phi_prev @ pool[k]) * probs_t
        sumfoo = jnp.sum(foo)
        l_t = l_prev + jnp.log(sumfoo)
        phi_t = foo / sumfoo
        return (phi_t, l_t), (phi_t, sumfoo)

    # Scan over t = 1, ..., T-1
    (_, l), (phi_rest, sums_rest) = lax.scan(
        scan_fn, (phi_0, l_0), (steps, allprobs[1:])
    )

    phi = jnp.concatenate([phi_0[None, :], phi_rest], axis=0)
    sums = jnp.concatenate([sumfoo_0[None], sums_rest])

    # A zero normalizer makes every later phi NaN; the sequence is impossible
    # under these parameters, so report -inf rather than NaN.
    log_likelihood = jnp.where(jnp.any(sums == 0.0), -jnp.inf, l)

    return ForwardResult(
        log_likelihood=log_likelihood,
        log_scales=jnp.log(sums),
        phi=phi,
    )
