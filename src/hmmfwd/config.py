"""Configuration dataclasses and default parameters for hmmfwd."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ForwardConfig:
    """Likelihood evaluation configuration."""
    check_stochastic: bool = False  # Warn when delta or Gamma rows don't sum to 1
    stochastic_atol: float = 1e-8


# Number of period positions for periodic transition pools (hour of day)
DEFAULT_PERIOD = 24

# Default 2-state transition matrix (persistent states)
DEFAULT_TRANS = [
    [0.9, 0.1],
    [0.2, 0.8],
]
