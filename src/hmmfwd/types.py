"""Type aliases and named tuples for hmmfwd.

Importing this module (and so any hmmfwd module) turns on jax_enable_x64
for the whole process: JAX arrays created afterwards default to float64
and int64, including arrays in the caller's own JAX code.
"""

from typing import NamedTuple, Union

import jax
import jax.numpy as jnp

# Likelihoods are summed over long sequences and compared at 1e-9.
# Every hmmfwd module imports this one, so float64 is on before any array exists.
jax.config.update("jax_enable_x64", True)

# Array type alias (JAX arrays)
Array = jnp.ndarray


class Homogeneous(NamedTuple):
    """One transition matrix for every step.

    gamma: (N, N) transition probabilities
    """
    gamma: Array


class TimeVarying(NamedTuple):
    """One transition matrix per step.

    gammas: (T-1, N, N); gammas[i] governs the move into observation i+1
    """
    gammas: Array


class Periodic(NamedTuple):
    """A pool of transition matrices indexed by a per-step period label.

    pool: (K, N, N) transition matrices, e.g. one per hour of day
    tod: (T,) int labels in [0, K); pool[tod[i]] governs the move into observation i
    """
    pool: Array
    tod: Array


TransitionStructure = Union[Homogeneous, TimeVarying, Periodic]


class TransitionIndex(NamedTuple):
    """Transition matrices as the forward scan consumes them.

    pool: (M, N, N) distinct matrices (M = 1, T-1 or K)
    steps: (T-1,) int32 indices; pool[steps[i]] governs the move into observation i+1
    """
    pool: Array
    steps: Array


class ForwardResult(NamedTuple):
    """Results from the scaled forward recursion.

    log_likelihood: scalar log-likelihood of the sequence
    log_scales: (T,) log normalizer per step (sums to log_likelihood)
    phi: (T, N) normalized forward probabilities (filtered state distributions)
    """
    log_likelihood: Array
    log_scales: Array
    phi: Array


class ForwardProblem(NamedTuple):
    """Inputs of one likelihood evaluation.

    allprobs: (T, N) state-dependent observation likelihoods
    delta: (N,) initial state distribution
    transitions: Homogeneous, TimeVarying or Periodic
    """
    allprobs: Array
    delta: Array
    transitions: TransitionStructure
