"""Errors raised on malformed forward-algorithm inputs."""


class HMMInputError(ValueError):
    """Base class for caller-side input contract violations."""


class ShapeMismatchError(HMMInputError):
    """Array dimensions disagree, or a stack/label sequence has the wrong length."""


class PeriodIndexError(HMMInputError, IndexError):
    """A period label does not index into the transition matrix pool."""


class ProblemFileError(HMMInputError):
    """A problem file is not a readable .npz archive."""
