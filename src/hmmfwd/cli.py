"""CLI entry point for hmmfwd."""

import logging
from pathlib import Path

import click


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _load(input_path):
    from hmmfwd.exceptions import ProblemFileError
    from hmmfwd.io.reader import load_problem

    try:
        return load_problem(Path(input_path))
    except (KeyError, ProblemFileError) as e:
        raise click.UsageError(str(e.args[0]))


@click.group()
def main():
    """hmmfwd: scaled forward log-likelihood for hidden Markov models."""
    pass


@main.command()
@click.option("--input", "input_path", type=click.Path(exists=True), required=True,
              help=".npz file with allprobs, delta, gamma and optional tod.")
@click.option("--filtered-out", type=click.Path(), default=None,
              help="Write filtered state probabilities (T, N) to this .npy file.")
@click.option("--check-stochastic", is_flag=True,
              help="Warn when delta or transition rows don't sum to 1.")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging.")
def loglik(input_path, filtered_out, check_stochastic, verbose):
    """Evaluate the log-likelihood of one sequence."""
    from hmmfwd.config import ForwardConfig
    from hmmfwd.exceptions import HMMInputError
    from hmmfwd.hmm.likelihood import forward_filter
    from hmmfwd.io.writer import save_filtered

    _setup_logging(verbose)

    problem = _load(input_path)

    config = ForwardConfig(check_stochastic=check_stochastic)
    try:
        result = forward_filter(
            problem.allprobs, problem.delta, problem.transitions, config=config
        )
    except HMMInputError as e:
        raise click.UsageError(str(e))

    if filtered_out:
        save_filtered(Path(filtered_out), result)

    print(f"{float(result.log_likelihood):.17g}")


@main.command()
@click.option("--input", "input_path", type=click.Path(exists=True), required=True,
              help=".npz problem file.")
def inspect(input_path):
    """Show the transition structure and array shapes of a problem file."""
    import numpy as np

    from hmmfwd.types import Periodic

    problem = _load(input_path)

    transitions = problem.transitions
    n_obs, n_states = np.shape(problem.allprobs)

    print(f"=== {Path(input_path).name} ===\n")
    print(f"Transition structure: {type(transitions).__name__}")
    print(f"  Observations: {n_obs}")
    print(f"  States:       {n_states}")
    print(f"  Gamma shape:  {np.shape(transitions[0])}")
    if isinstance(transitions, Periodic):
        labels = np.asarray(transitions.tod)
        print(f"  Period labels: {labels.min()}..{labels.max()} ({len(np.unique(labels))} distinct)")
    print(f"\nInitial distribution: {np.asarray(problem.delta)}")


if __name__ == "__main__":
    main()
