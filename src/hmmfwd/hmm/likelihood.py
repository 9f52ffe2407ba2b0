"""Log-likelihood entry points for the three transition structures.

Each call evaluates one sequence and returns a Python float. Inputs are
checked on host before the jit-compiled recursion runs, so a shape or
period-label error never leaves partial work behind. A non-finite return
(-inf or NaN) means the parameters make the observed data impossible;
the caller (typically an optimizer objective) decides how to reject it.
"""

import logging

import jax.numpy as jnp

from hmmfwd.config import ForwardConfig
from hmmfwd.hmm.forward import scaled_forward
from hmmfwd.transitions.select import build_index
from hmmfwd.types import (
    Array,
    ForwardResult,
    Homogeneous,
    Periodic,
    TimeVarying,
    TransitionStructure,
)
from hmmfwd.validation import check_emission_inputs, warn_if_not_stochastic

log = logging.getLogger(__name__)


def forward_filter(
    allprobs: Array,
    delta: Array,
    transitions: TransitionStructure,
    config: ForwardConfig | None = None,
) -> ForwardResult:
    """Run the scaled forward recursion for any transition structure.

    Args:
        allprobs: (T, N) observation likelihoods per state.
        delta: (N,) initial state distribution.
        transitions: Homogeneous, TimeVarying or Periodic.
        config: Optional evaluation settings.

    Returns:
        ForwardResult with log-likelihood, log normalizers and filtered
        state probabilities.
    """
    if config is None:
        config = ForwardConfig()

    n_obs, n_states = check_emission_inputs(allprobs, delta)
    index = build_index(transitions, n_obs, n_states)

    if config.check_stochastic:
        # Whole pool, including periodic matrices no label selects
        warn_if_not_stochastic(delta, index.pool, atol=config.stochastic_atol)

    log.debug(
        f"Forward pass: {type(transitions).__name__}, "
        f"n_obs={n_obs}, n_states={n_states}"
    )

    return scaled_forward(
        jnp.asarray(allprobs, dtype=jnp.float64),
        jnp.asarray(delta, dtype=jnp.float64),
        index.pool,
        index.steps,
    )


def forward_loglik(
    allprobs: Array,
    delta: Array,
    transitions: TransitionStructure,
    config: ForwardConfig | None = None,
) -> float:
    """Log-likelihood of one sequence for any transition structure."""
    result = forward_filter(allprobs, delta, transitions, config=config)
    return float(result.log_likelihood)


def forward_loglik_homogeneous(
    allprobs: Array,
    delta: Array,
    gamma: Array,
    config: ForwardConfig | None = None,
) -> float:
    """Log-likelihood with one transition matrix for the whole sequence.

    Args:
        allprobs: (T, N) observation likelihoods per state.
        delta: (N,) initial state distribution.
        gamma: (N, N) transition matrix.
    """
    return forward_loglik(allprobs, delta, Homogeneous(gamma), config=config)


def forward_loglik_time_varying(
    allprobs: Array,
    delta: Array,
    gammas: Array,
    config: ForwardConfig | None = None,
) -> float:
    """Log-likelihood with a distinct transition matrix per step.

    Args:
        allprobs: (T, N) observation likelihoods per state.
        delta: (N,) initial state distribution.
        gammas: (T-1, N, N) transition matrices; gammas[i] governs the move
            into observation i+1. Any other length raises ShapeMismatchError.
    """
    return forward_loglik(allprobs, delta, TimeVarying(gammas), config=config)


def forward_loglik_periodic(
    allprobs: Array,
    delta: Array,
    pool: Array,
    tod,
    config: ForwardConfig | None = None,
) -> float:
    """Log-likelihood with transition matrices chosen by period label.

    Args:
        allprobs: (T, N) observation likelihoods per state.
        delta: (N,) initial state distribution.
        pool: (K, N, N) transition matrices.
        tod: (T,) integer labels; pool[tod[i]] governs the move into
            observation i. Labels outside [0, K) raise PeriodIndexError.
    """
    return forward_loglik(allprobs, delta, Periodic(pool, tod), config=config)
