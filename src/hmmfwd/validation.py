"""Eager shape and index checks for forward-algorithm inputs.

All checks run on host (NumPy) before anything is traced or compiled,
so a malformed call fails without doing any partial computation.
"""

import logging

import numpy as np

from hmmfwd.exceptions import PeriodIndexError, ShapeMismatchError

log = logging.getLogger(__name__)


def check_emission_inputs(allprobs, delta) -> tuple[int, int]:
    """Check allprobs against delta.

    Args:
        allprobs: (T, N) observation likelihoods.
        delta: (N,) initial state distribution.

    Returns:
        (n_obs, n_states).
    """
    allprobs_shape = np.shape(allprobs)
    delta_shape = np.shape(delta)

    if len(allprobs_shape) != 2:
        raise ShapeMismatchError(
            f"allprobs must be 2-D (n_obs, n_states), got shape {allprobs_shape}"
        )
    n_obs, n_states = allprobs_shape
    if n_obs < 1 or n_states < 1:
        raise ShapeMismatchError(
            f"allprobs needs at least one observation and one state, got shape {allprobs_shape}"
        )
    if delta_shape != (n_states,):
        raise ShapeMismatchError(
            f"delta must have shape ({n_states},) to match allprobs, got {delta_shape}"
        )
    return n_obs, n_states


def check_transition_matrix(gamma, n_states: int) -> None:
    """Check a single (N, N) transition matrix."""
    shape = np.shape(gamma)
    if shape != (n_states, n_states):
        raise ShapeMismatchError(
            f"Gamma must have shape ({n_states}, {n_states}), got {shape}"
        )


def check_transition_stack(
    gammas,
    n_states: int,
    expected_len: int | None = None,
    name: str = "Gamma",
) -> int:
    """Check a (L, N, N) stack of transition matrices.

    Args:
        gammas: Stacked transition matrices.
        n_states: Number of hidden states N.
        expected_len: Required stack length, or None for any length >= 1.
        name: Label used in error messages.

    Returns:
        Stack length L.
    """
    shape = np.shape(gammas)
    if len(shape) != 3 or shape[1:] != (n_states, n_states):
        raise ShapeMismatchError(
            f"{name} must have shape (L, {n_states}, {n_states}), got {shape}"
        )
    n_mats = shape[0]
    if expected_len is not None and n_mats != expected_len:
        raise ShapeMismatchError(
            f"{name} holds {n_mats} matrices, expected {expected_len} (one per transition)"
        )
    if expected_len is None and n_mats < 1:
        raise ShapeMismatchError(f"{name} must hold at least one matrix")
    return n_mats


def check_period_labels(tod, n_obs: int, n_pool: int) -> np.ndarray:
    """Check per-step period labels against the matrix pool.

    Every label must be an integer in [0, n_pool). Labels are never
    wrapped or clipped.

    Returns:
        (T,) int64 copy of the labels.
    """
    labels = np.asarray(tod)
    if labels.shape != (n_obs,):
        raise ShapeMismatchError(
            f"tod must have shape ({n_obs},) to match allprobs, got {labels.shape}"
        )
    if labels.dtype.kind not in "iu":
        if labels.dtype.kind == "f" and np.all(np.isfinite(labels)) and np.all(labels == np.round(labels)):
            labels = labels.astype(np.int64)
        else:
            raise ShapeMismatchError(
                f"tod must hold integer period labels, got dtype {labels.dtype}"
            )

    bad = np.flatnonzero((labels < 0) | (labels >= n_pool))
    if bad.size:
        i = int(bad[0])
        raise PeriodIndexError(
            f"tod[{i}] = {int(labels[i])} is outside the transition pool [0, {n_pool})"
            + (f" ({bad.size} labels out of range)" if bad.size > 1 else "")
        )
    return labels.astype(np.int64)


def warn_if_not_stochastic(delta, gammas, atol: float = 1e-8) -> bool:
    """Log a warning when delta or any transition row does not sum to 1.

    The likelihood is still well defined for such inputs, just not a
    probability, so this only reports.

    Args:
        delta: (N,) initial distribution.
        gammas: (N, N) matrix or (L, N, N) stack.
        atol: Absolute tolerance on the sums.

    Returns:
        True if all sums are within tolerance.
    """
    ok = True
    delta_sum = float(np.sum(delta))
    if not np.isclose(delta_sum, 1.0, rtol=0.0, atol=atol):
        log.warning(f"delta sums to {delta_sum:.10g}, not 1")
        ok = False

    row_sums = np.sum(np.asarray(gammas), axis=-1)
    off = ~np.isclose(row_sums, 1.0, rtol=0.0, atol=atol)
    if np.any(off):
        worst = float(np.max(np.abs(row_sums - 1.0)))
        log.warning(
            f"{int(off.sum())} transition rows do not sum to 1 "
            f"(max deviation {worst:.3e})"
        )
        ok = False
    return ok
