"""Load forward-algorithm problems from .npz archives.

Layout: allprobs (T, N), delta (N,), gamma (N, N) or (L, N, N), and an
optional integer tod (T,). A 3-D gamma with tod is a periodic pool;
without tod it is a time-varying stack.
"""

import logging
import zipfile
from pathlib import Path

import numpy as np

from hmmfwd.exceptions import ProblemFileError
from hmmfwd.types import ForwardProblem, Homogeneous, Periodic, TimeVarying

log = logging.getLogger(__name__)

REQUIRED_KEYS = ("allprobs", "delta", "gamma")


def load_problem(path: Path) -> ForwardProblem:
    """Read one evaluation problem.

    Args:
        path: .npz file written by save_problem (or by hand with np.savez).

    Returns:
        ForwardProblem with NumPy arrays and the inferred transition structure.
    """
    path = Path(path)
    try:
        data = np.load(path)
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        raise ProblemFileError(f"{path}: cannot read problem file ({e})") from e
    if not isinstance(data, np.lib.npyio.NpzFile):
        raise ProblemFileError(f"{path}: expected an .npz archive, got a single array")

    try:
        with data:
            missing = [k for k in REQUIRED_KEYS if k not in data.files]
            if missing:
                raise KeyError(f"{path}: missing arrays {missing}")

            allprobs = data["allprobs"]
            delta = data["delta"]
            gamma = data["gamma"]
            tod = data["tod"] if "tod" in data.files else None
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        raise ProblemFileError(f"{path}: corrupt problem archive ({e})") from e

    if gamma.ndim == 2:
        if tod is not None:
            log.warning(f"{path}: ignoring tod for a single transition matrix")
        transitions = Homogeneous(gamma)
    elif tod is not None:
        transitions = Periodic(gamma, tod)
    else:
        transitions = TimeVarying(gamma)

    log.info(
        f"Loaded {path.name}: {type(transitions).__name__}, "
        f"allprobs {allprobs.shape}, gamma {gamma.shape}"
    )
    return ForwardProblem(allprobs=allprobs, delta=delta, transitions=transitions)
