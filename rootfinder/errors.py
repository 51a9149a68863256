"""Exceptions raised by the root finder"""


class RootFinderError(Exception):
    """Base class for all root finding errors."""


class InvalidIntervalError(RootFinderError, ValueError):
    """The lower bound of the search interval exceeds the upper bound."""

    def __init__(self, lo, hi):
        self.lo = lo
        self.hi = hi
        super().__init__(
            f"Invalid search interval: lower bound {lo} is larger than upper bound {hi}"
        )


class GuessOutOfRangeError(RootFinderError, ValueError):
    """The initial guess lies outside the search interval."""

    def __init__(self, x, lo, hi):
        self.x = x
        self.lo = lo
        self.hi = hi
        super().__init__(f"Initial guess {x} is not in the interval [{lo}, {hi}]")


class NoBracketingError(RootFinderError, ValueError):
    """
    No sign change was found on either side of the initial guess.

    Attributes `lo`, `flo`, `hi`, `fhi` hold the interval bounds and the
    function values there.
    """

    def __init__(self, lo, flo, hi, fhi):
        self.lo = lo
        self.flo = flo
        self.hi = hi
        self.fhi = fhi
        super().__init__(
            f"Interval does not bracket a root: f({lo}) = {flo}, f({hi}) = {fhi}"
        )


class TooManyIterationsError(RootFinderError, RuntimeError):
    """The iteration cap was reached before convergence."""

    def __init__(self, maxiter, x):
        self.maxiter = maxiter
        self.x = x
        super().__init__(
            f"No convergence after {maxiter} iterations; last estimate was {x}"
        )
