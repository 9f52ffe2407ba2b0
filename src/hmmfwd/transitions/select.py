"""Dispatch a transition structure to the pool and step index the scan consumes."""

from hmmfwd.transitions.periodic import periodic_index
from hmmfwd.transitions.static import static_index
from hmmfwd.transitions.time_varying import time_varying_index
from hmmfwd.types import Homogeneous, Periodic, TimeVarying, TransitionIndex, TransitionStructure


def build_index(transitions: TransitionStructure, n_obs: int, n_states: int) -> TransitionIndex:
    """Build the matrix pool and per-step indices for any transition structure."""
    if isinstance(transitions, Homogeneous):
        return static_index(transitions.gamma, n_obs, n_states)
    if isinstance(transitions, TimeVarying):
        return time_varying_index(transitions.gammas, n_obs, n_states)
    if isinstance(transitions, Periodic):
        return periodic_index(transitions.pool, transitions.tod, n_obs, n_states)
    raise TypeError(
        f"Unknown transition structure {type(transitions).__name__}; "
        "expected Homogeneous, TimeVarying or Periodic"
    )
