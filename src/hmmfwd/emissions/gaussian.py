"""Gaussian state-dependent densities.

Builds the (T, N) observation likelihood matrix that the forward
recursion consumes. Missing observations (NaN) contribute a factor of 1
in every state, so they leave the likelihood unchanged.
"""

import jax.numpy as jnp
from jax.scipy.stats import norm

from hmmfwd.types import Array


def gaussian_prob(
    obs: Array,
    means: Array,
    sds: Array,
) -> Array:
    """Compute emission densities under a Gaussian model.

    Args:
        obs: (T,) observations, NaN where missing.
        means: (N,) state means.
        sds: (N,) state standard deviations (> 0).

    Returns:
        (T, N) densities.
    """
    obs = jnp.asarray(obs, dtype=jnp.float64)
    missing = jnp.isnan(obs)[:, None]  # (T, 1)
    obs_2d = jnp.where(missing, 0.0, obs[:, None])
    dens = norm.pdf(obs_2d, loc=jnp.asarray(means)[None, :], scale=jnp.asarray(sds)[None, :])
    return jnp.where(missing, 1.0, dens)
