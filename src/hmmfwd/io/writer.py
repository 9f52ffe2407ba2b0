"""Write forward-algorithm problems and results to disk."""

import logging
from pathlib import Path

import numpy as np

from hmmfwd.types import ForwardProblem, ForwardResult, Homogeneous, Periodic, TimeVarying

log = logging.getLogger(__name__)


def save_problem(path: Path, problem: ForwardProblem) -> Path:
    """Write a problem in the layout load_problem reads.

    Returns:
        Path of the written archive.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    transitions = problem.transitions
    arrays = {
        "allprobs": np.asarray(problem.allprobs),
        "delta": np.asarray(problem.delta),
    }
    if isinstance(transitions, Homogeneous):
        arrays["gamma"] = np.asarray(transitions.gamma)
    elif isinstance(transitions, TimeVarying):
        arrays["gamma"] = np.asarray(transitions.gammas)
    elif isinstance(transitions, Periodic):
        arrays["gamma"] = np.asarray(transitions.pool)
        arrays["tod"] = np.asarray(transitions.tod)
    else:
        raise TypeError(f"Unknown transition structure {type(transitions).__name__}")

    # np.savez appends .npz to names without it
    if path.suffix != ".npz":
        path = path.with_name(path.name + ".npz")
    np.savez(path, **arrays)
    log.info(f"Saved problem to {path}")
    return path


def save_filtered(path: Path, result: ForwardResult) -> Path:
    """Write the (T, N) filtered state probabilities as .npy."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, np.asarray(result.phi))
    if path.suffix != ".npy":
        path = path.with_name(path.name + ".npy")
    log.info(f"Saved filtered state probabilities to {path}")
    return path
